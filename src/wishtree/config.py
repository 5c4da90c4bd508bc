# src/wishtree/config.py
import tarfile
import zipfile

# Include patterns use gitignore-style wildcards ("**/*.txt", "docs/", ...)
PATTERN_SYNTAX = "gitwildmatch"

# Every rendered entry gets the same unix mode, regardless of its source
DEFAULT_PERMISSIONS = 0o755

# ZIP
ZIP_COMPRESSION = zipfile.ZIP_DEFLATED
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)

# tar.gz (zlib's default level)
TAR_FORMAT = tarfile.GNU_FORMAT
GZIP_COMPRESSLEVEL = 6

COPY_BUFFER_SIZE = 64 * 1024
