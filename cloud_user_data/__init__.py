# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Package cloud_user_data builds multipart MIME user-data documents for cloud-init
"""

from .version import __version__

from .internal_types import Jsonable, JsonableDict, JsonableList, ByteSink

from .exceptions import (
    UserDataError,
    InvalidBoundaryError,
    SinkWriteError,
    UnknownContentTypeError,
    ConfigError,
  )

from .constants import DEFAULT_BOUNDARY, DEFAULT_MIME_VERSION

from .media_types import (
    CLOUD_BOOTHOOK,
    CLOUD_CONFIG,
    CLOUD_CONFIG_ARCHIVE,
    CLOUD_CONFIG_JSONP,
    JINJA2,
    PART_HANDLER,
    X_INCLUDE_ONCE_URL,
    X_INCLUDE_URL,
    X_SHELLSCRIPT,
    X_SHELLSCRIPT_PER_BOOT,
    X_SHELLSCRIPT_PER_INSTANCE,
    X_SHELLSCRIPT_PER_ONCE,
    MediaTypeInfo,
    known_media_types,
    is_known_media_type,
    media_type_info,
    media_type_for_comment_line,
  )

from .header import Header
from .part import UserDataPart
from .multipart import MultipartUserData
