#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Constants used by cloud_user_data"""

DEFAULT_BOUNDARY: str = '+Go+User+Data+Boundary=='
"""The boundary token used by a new MultipartUserData unless one is given explicitly"""

DEFAULT_MIME_VERSION: str = '1.0'

CRLF: bytes = b'\r\n'

MAX_BOUNDARY_LENGTH: int = 70
"""RFC 2046 limit on the length of a boundary token"""

GZIP_FIXED_MTIME: float = 0.0
"""A fixed mktime() value that is used for the timestamp when gzipping user-data.
   This makes the compressed output deterministic for a given document."""

CONFIG_FILENAME_BASE: str = 'cloud-user-data'
CONFIG_ENV_VAR: str = 'CLOUD_USER_DATA_CONFIG'
