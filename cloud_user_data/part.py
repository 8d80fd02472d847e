#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
A single body part of a multipart/mixed cloud-init user-data document.

A part chooses its own charset and Content-Transfer-Encoding from its body:
7-bit ASCII bodies are carried unchanged as "7bit"/"us-ascii", anything else
is base64-encoded as "base64"/"utf-8". The base64 text is not wrapped at 76
columns; cloud-init decodes it either way.
"""

from typing import Optional, Union

import base64
import logging
from io import BytesIO

import yaml

from .constants import CRLF
from .exceptions import UnknownContentTypeError
from .header import Header
from .internal_types import ByteSink, BodyInput, JsonableDict
from .media_types import CLOUD_CONFIG, media_type_for_comment_line, media_type_info
from .mime_util import format_media_type, is_ascii
from .sink import write_to_sink

logger = logging.getLogger(__name__)

CHARSET_ASCII = 'us-ascii'
CHARSET_UTF8 = 'utf-8'
ENCODING_7BIT = '7bit'
ENCODING_BASE64 = 'base64'

def _to_bytes(body: BodyInput) -> bytes:
  if isinstance(body, str):
    return body.encode('utf-8')
  return bytes(body)

class UserDataPart:
  """One body segment of a multipart user-data document, with its own headers"""

  _header: Header
  _body: bytes
  _media_type: str
  _charset: str
  _transfer_encoding: str

  def __init__(self, media_type: Optional[str]=None, body: Optional[BodyInput]=None):
    """Create a part, optionally populating it immediately.

    Args:
        media_type (Optional[str], optional): The part's media type; e.g., "text/cloud-config".
                            Any string is accepted. Defaults to None.
        body (Optional[BodyInput], optional): The raw body. A str is encoded as UTF-8.
                            If both arguments are None the part is left empty until
                            set_body() is called. Defaults to None.

    Raises:
        ValueError: Only one of media_type and body was provided
    """
    self._header = Header()
    self._body = b''
    self._media_type = ''
    self._charset = ''
    self._transfer_encoding = ''
    if (media_type is None) != (body is None):
      raise ValueError("UserDataPart requires both media_type and body, or neither")
    if not media_type is None:
      assert not body is None
      self.set_body(media_type, body)

  @classmethod
  def from_content(
        cls,
        content: Union[BodyInput, JsonableDict],
        media_type: Optional[str]=None,
      ) -> 'UserDataPart':
    """Create a part from a cloud-init document, inferring its media type when necessary.

    Args:
        content (Union[BodyInput, JsonableDict]):
                            The document. If a dict, it is rendered as YAML, and the media type
                            defaults to "text/cloud-config". Otherwise, if media_type is None, the
                            first line is interpreted as a cloud-init comment header that identifies
                            the type (e.g., "#cloud-config" or "#!/bin/bash"). Shebang lines and
                            the "## template: jinja" line are left in the body, since cloud-init
                            still reads them; other comment headers are stripped since the
                            Content-Type header replaces them.
        media_type (Optional[str], optional):
                            The media type of the part, or None to infer it as described above.
                            Defaults to None.

    Raises:
        UnknownContentTypeError: media_type is None and the first line of content is not
                            a recognized cloud-init comment header.

    Returns:
        UserDataPart: The populated part
    """
    if isinstance(content, dict):
      body = yaml.dump(
          content,
          sort_keys=True,
          indent=1,
          default_flow_style=False,
          width=10000,
        ).encode('utf-8')
      if media_type is None:
        media_type = CLOUD_CONFIG
    else:
      body = _to_bytes(content)
      if media_type is None:
        first_line, _, remainder = body.partition(b'\n')
        media_type = media_type_for_comment_line(first_line.decode('utf-8', errors='replace'))
        if media_type is None:
          raise UnknownContentTypeError(
              f"User-data part has no media type and first line is not a cloud-init comment header: {first_line[:80]!r}"
            )
        info = media_type_info(media_type)
        assert not info is None
        if not info.keeps_comment_line:
          body = remainder
    return cls(media_type, body)

  def set_body(self, media_type: str, body: BodyInput) -> None:
    """Populates the part, choosing charset and transfer encoding from the body.

    If body is 7-bit ASCII it is stored unchanged with Content-Transfer-Encoding "7bit"
    and charset "us-ascii". Otherwise it is replaced by its standard base64 encoding
    (padded, unwrapped) with Content-Transfer-Encoding "base64" and charset "utf-8".
    Content-Type is set to "<media_type>; charset=<charset>". All state is replaced
    together, so headers and stored body always agree.

    Args:
        media_type (str): The media type. Not validated against the recognized set.
        body (BodyInput): The raw body. A str is encoded as UTF-8 first.
    """
    raw = _to_bytes(body)
    if is_ascii(raw):
      charset = CHARSET_ASCII
      transfer_encoding = ENCODING_7BIT
      stored = raw
    else:
      charset = CHARSET_UTF8
      transfer_encoding = ENCODING_BASE64
      stored = base64.b64encode(raw)
    logger.debug(f"User-data part {media_type}: {len(raw)} bytes, {transfer_encoding}")

    header = Header()
    header.set('Content-Transfer-Encoding', transfer_encoding)
    header.set('Content-Type', format_media_type(media_type, {'charset': charset}))

    self._header = header
    self._body = stored
    self._media_type = media_type
    self._charset = charset
    self._transfer_encoding = transfer_encoding

  @property
  def header(self) -> Header:
    """A copy of the part's header fields; use set_body() to change them"""
    return self._header.copy()

  def copy(self) -> 'UserDataPart':
    result = UserDataPart()
    result._header = self._header.copy()
    result._body = self._body
    result._media_type = self._media_type
    result._charset = self._charset
    result._transfer_encoding = self._transfer_encoding
    return result

  @property
  def body(self) -> bytes:
    """The stored body; base64 text when transfer_encoding is base64"""
    return self._body

  @property
  def media_type(self) -> str:
    return self._media_type

  @property
  def charset(self) -> str:
    return self._charset

  @property
  def transfer_encoding(self) -> str:
    return self._transfer_encoding

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, UserDataPart):
      return NotImplemented
    return self._media_type == other._media_type and self._header == other._header and self._body == other._body

  def __repr__(self) -> str:
    return f"UserDataPart({self._media_type!r}, {len(self._body)} bytes, {self._transfer_encoding})"

  def render(self, sink: ByteSink) -> None:
    """Writes the part's headers, a blank line, the stored body and a trailing CRLF to sink

    Raises:
        SinkWriteError: A write to sink failed
    """
    self._header.render(sink)
    write_to_sink(sink, CRLF)
    write_to_sink(sink, self._body)
    write_to_sink(sink, CRLF)

  def render_bytes(self) -> bytes:
    buff = BytesIO()
    self.render(buff)
    return buff.getvalue()
