#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
The MIME media types recognized by cloud-init for user-data parts.

See https://cloudinit.readthedocs.io/en/latest/topics/format.html for
details. Each type also has an equivalent "#" first-line tag that cloud-init
accepts when the content is supplied without MIME headers; e.g., a document
that begins with "#cloud-config" is treated as "text/cloud-config". The
table here is informational: MultipartUserData accepts any media type string.
"""

from typing import Optional, List, Dict

CLOUD_BOOTHOOK = 'text/cloud-boothook'
CLOUD_CONFIG = 'text/cloud-config'
CLOUD_CONFIG_ARCHIVE = 'text/cloud-config-archive'
CLOUD_CONFIG_JSONP = 'text/cloud-config-jsonp'
JINJA2 = 'text/jinja2'
PART_HANDLER = 'text/part-handler'
X_INCLUDE_ONCE_URL = 'text/x-include-once-url'
X_INCLUDE_URL = 'text/x-include-url'
X_SHELLSCRIPT = 'text/x-shellscript'
X_SHELLSCRIPT_PER_BOOT = 'text/x-shellscript-per-boot'
X_SHELLSCRIPT_PER_INSTANCE = 'text/x-shellscript-per-instance'
X_SHELLSCRIPT_PER_ONCE = 'text/x-shellscript-per-once'

SHEBANG_COMMENT_LINE = '#!'

class MediaTypeInfo:
  """
  A descriptor that correlates a MIME type with its associated cloud-init comment
  header line; e.g., "Content-Type: text/cloud-config" with "#cloud-config".
  """

  media_type: str
  """The full MIME type; e.g., 'text/cloud-boothook'"""

  subtype: str

  comment_tag: Optional[str]=None
  """The portion of comment_line after '#'. For '#!', this is just '!', and does not include the
     script commandline. If None, there is no comment header associated with the MIME type."""

  comment_line: Optional[str]=None
  """The portion of the comment header that identifies its MIME type. For shebang scripts this is
     just '#!'. If None, there is no comment header associated with the MIME type."""

  def __init__(self, subtype: str, comment_tag: Optional[str]=None):
    """Construct a descriptor mapping a MIME type to a comment tag

    Args:
        subtype (str):      The MIME type without the leading "text/"
        comment_tag (Optional[str], optional):
                            The comment tag without the leading "#", or None
                            if there is no comment header associated with the
                            MIME type. For shebang types, this is just "!".
                            Defaults to None.
    """
    self.subtype = subtype
    self.media_type = 'text/' + subtype
    self.comment_tag = comment_tag
    self.comment_line = None if comment_tag is None else '#' + comment_tag

  @property
  def is_shebang(self) -> bool:
    return self.comment_line == SHEBANG_COMMENT_LINE

  @property
  def keeps_comment_line(self) -> bool:
    """True if cloud-init still reads the comment line when the part arrives with a
       Content-Type header, so it must stay in the body"""
    return self.is_shebang or self.media_type == JINJA2

  def __repr__(self) -> str:
    return f"MediaTypeInfo({self.media_type!r}, comment_line={self.comment_line!r})"

_media_type_list: List[MediaTypeInfo] = [
    MediaTypeInfo('cloud-boothook', 'cloud-boothook'),              # A script run very early in boot, on every boot
    MediaTypeInfo('cloud-config', 'cloud-config'),                  # A YAML doc with rich config data
    MediaTypeInfo('cloud-config-archive', 'cloud-config-archive'),  # a YAML doc that contains a list of docs, like multipart mime
    MediaTypeInfo('cloud-config-jsonp', 'cloud-config-jsonp'),      # fine-grained merging with vendor-provided cloud-config
    MediaTypeInfo('jinja2', '# template: jinja'),                   # expand jinja2 template. 2nd line is comment describing actual part type
    MediaTypeInfo('part-handler', 'part-handler'),                  # part contains python code that can process custom mime types for subsequent parts
    MediaTypeInfo('x-include-once-url', 'include-once'),            # List of urls that are read one at a time and processed as any item, but only once
    MediaTypeInfo('x-include-url', 'include'),                      # list of urls that are read one at a time and processed as any item
    MediaTypeInfo('x-shellscript', '!'),                            # simple userdata shell script (comment line has variable chars)
    MediaTypeInfo('x-shellscript-per-boot'),                        # shell script run on every boot
    MediaTypeInfo('x-shellscript-per-instance'),                    # shell script run once per unique instance
    MediaTypeInfo('x-shellscript-per-once'),                        # shell script run only once
  ]
"""The MIME types that are pre-known to cloud-init"""

_media_type_to_info: Dict[str, MediaTypeInfo] = dict((x.media_type, x) for x in _media_type_list)

_comment_line_to_info: Dict[str, MediaTypeInfo] = dict(
    (x.comment_line, x) for x in _media_type_list if not x.comment_line is None
  )

def known_media_types() -> List[MediaTypeInfo]:
  """Returns descriptors for every media type recognized by cloud-init, in alphabetical order"""
  return list(_media_type_list)

def is_known_media_type(media_type: str) -> bool:
  return media_type.lower() in _media_type_to_info

def media_type_info(media_type: str) -> Optional[MediaTypeInfo]:
  return _media_type_to_info.get(media_type.lower(), None)

def media_type_for_comment_line(line: str) -> Optional[str]:
  """Returns the media type identified by a cloud-init "#" first line, or None

  Args:
      line (str): The first line of a user-data document, without its line terminator.
                  Any shebang line (e.g., "#!/bin/bash") maps to text/x-shellscript.

  Returns:
      Optional[str]: The full media type, or None if line is not a recognized comment tag
  """
  if line.startswith(SHEBANG_COMMENT_LINE):
    return X_SHELLSCRIPT
  info = _comment_line_to_info.get(line.rstrip(), None)
  return None if info is None else info.media_type
