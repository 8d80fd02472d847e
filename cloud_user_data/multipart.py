#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Construction and rendering of multipart/mixed cloud-init user-data documents.

cloud-init and user-data are commonly used by cloud infrastructure
services (e.g., AWS EC2) to give a way for the user to force a
newly provisioned cloud VM to initialize itself on first boot. It is
possible to embed multiple independent initialization documents in a
single user-data block. This is achieved with multi-part MIME encoding.

The rendering is deterministic: header fields are emitted in sorted order,
parts in the order they were added, and every line ends in CRLF regardless
of platform. For example:

  from cloud_user_data import MultipartUserData, CLOUD_CONFIG, X_SHELLSCRIPT

  user_data = MultipartUserData()
  user_data.add_part(CLOUD_CONFIG, b"#cloud-config\\ntimezone: Europe/London")
  user_data.add_part(X_SHELLSCRIPT, b"#!/bin/bash\\necho 'Hello World'")

  with open('user-data', 'wb') as f:
    user_data.render(f)

Documents are built entirely in memory; nothing is parsed, and no size
limit is enforced.
"""

from typing import Optional, List, Tuple, Union

import base64
import gzip
import logging
from io import BytesIO

from .constants import DEFAULT_BOUNDARY, DEFAULT_MIME_VERSION, CRLF, GZIP_FIXED_MTIME
from .exceptions import InvalidBoundaryError
from .header import Header
from .internal_types import ByteSink, BodyInput, JsonableDict
from .mime_util import format_media_type, is_valid_boundary
from .part import UserDataPart
from .sink import write_to_sink

logger = logging.getLogger(__name__)

MULTIPART_MIXED = 'multipart/mixed'

class MultipartUserData:
  """A multipart/mixed user-data document: top-level headers, a boundary
     token, and an ordered sequence of UserDataPart's."""

  _header: Header
  _parts: List[UserDataPart]
  _boundary: str

  def __init__(self, boundary: Optional[str]=None):
    """Create an empty document

    Args:
        boundary (Optional[str], optional): The boundary token, or None to use
                            DEFAULT_BOUNDARY ("+Go+User+Data+Boundary=="). Defaults to None.

    Raises:
        InvalidBoundaryError: boundary does not satisfy the RFC 2046 boundary grammar
    """
    if boundary is None:
      boundary = DEFAULT_BOUNDARY
    elif not is_valid_boundary(boundary):
      raise InvalidBoundaryError(boundary)
    self._header = Header()
    self._header.set('Content-Type', self._content_type(boundary))
    self._header.set('Mime-Version', DEFAULT_MIME_VERSION)
    self._parts = []
    self._boundary = boundary

  @staticmethod
  def _content_type(boundary: str) -> str:
    return format_media_type(MULTIPART_MIXED, {'boundary': boundary})

  @property
  def header(self) -> Header:
    """A copy of the document's top-level header fields (Content-Type and Mime-Version)"""
    return self._header.copy()

  @property
  def boundary(self) -> str:
    return self._boundary

  def set_boundary(self, boundary: str) -> None:
    """Replaces the boundary token and the boundary parameter of the Content-Type header.

    The token must be 1 to 70 characters drawn from digits, ASCII letters and
    "'()+_,-./:=?", plus spaces in any position but the last. The Content-Type
    parameter is quoted when the token contains characters that are not allowed
    in a MIME token (e.g., "=", "?" or space).

    Args:
        boundary (str): The new boundary token

    Raises:
        InvalidBoundaryError: boundary does not satisfy the grammar. The document
                              is left unchanged.
    """
    if not is_valid_boundary(boundary):
      logger.debug(f"Rejected user-data boundary {boundary!r}; keeping {self._boundary!r}")
      raise InvalidBoundaryError(boundary)
    self._header.set('Content-Type', self._content_type(boundary))
    self._boundary = boundary
    logger.debug(f"User-data boundary set to {boundary!r}")

  @property
  def parts(self) -> Tuple[UserDataPart, ...]:
    """Copies of the parts of the document, in the order they will be rendered"""
    return tuple(part.copy() for part in self._parts)

  def __len__(self) -> int:
    return len(self._parts)

  def append_part(self, part: UserDataPart) -> None:
    """Appends a copy of an already populated part. No deduplication is performed.

    Later calls to part.set_body() do not affect the document.
    """
    self._parts.append(part.copy())

  def add_part(self, media_type: str, body: BodyInput) -> UserDataPart:
    """Builds a part from a media type and raw body and appends it.

    Args:
        media_type (str): The media type; e.g., "text/x-shellscript". Any string is accepted.
        body (BodyInput): The raw body. Non-ASCII bodies are base64-encoded.

    Returns:
        UserDataPart: A copy of the new part
    """
    part = UserDataPart(media_type, body)
    self.append_part(part)
    return part

  def add(
        self,
        content: Union[UserDataPart, BodyInput, JsonableDict],
        media_type: Optional[str]=None,
      ) -> UserDataPart:
    """Appends a part, inferring its media type from the content if necessary.

    See UserDataPart.from_content() for how content and media_type are interpreted.
    A copy of a UserDataPart is appended as-is.

    Raises:
        UnknownContentTypeError: The media type could not be inferred

    Returns:
        UserDataPart: A copy of the appended part
    """
    if isinstance(content, UserDataPart):
      part = content
    else:
      part = UserDataPart.from_content(content, media_type=media_type)
    self.append_part(part)
    return part

  def render(self, sink: ByteSink) -> None:
    """Writes the complete document to sink.

    The output is the document headers, a blank line, then for each part a
    "--<boundary>" delimiter line, the rendered part and a blank line, and finally
    the "--<boundary>--" closing delimiter. Rendering does not modify the
    document, so repeated calls produce identical bytes.

    Args:
        sink (ByteSink): The binary stream to write to

    Raises:
        SinkWriteError: A write to sink failed. Rendering stops immediately, and
                        whatever was already written should be discarded.
    """
    delimiter = f"--{self._boundary}".encode('utf-8')
    self._header.render(sink)
    write_to_sink(sink, CRLF)
    for part in self._parts:
      write_to_sink(sink, delimiter + CRLF)
      part.render(sink)
      write_to_sink(sink, CRLF)
    write_to_sink(sink, delimiter + b'--' + CRLF)

  def render_bytes(self) -> bytes:
    buff = BytesIO()
    self.render(buff)
    return buff.getvalue()

  def render_gzip(self) -> bytes:
    """Renders the document and compresses it with gzip.

    cloud-init transparently decompresses gzipped user-data. A fixed modification
    time is recorded so the compressed output is the same for the same document.
    """
    buff = BytesIO()
    with gzip.GzipFile(None, 'wb', compresslevel=9, fileobj=buff, mtime=GZIP_FIXED_MTIME) as g:
      g.write(self.render_bytes())
    return buff.getvalue()

  def render_base64(self, compress: bool=False) -> str:
    """Renders the document as a base-64 encoded string, the form most cloud provider
       APIs (e.g., EC2 RunInstances UserData) expect.

    Args:
        compress (bool, optional): If True, the document is gzipped before encoding. Defaults to False.

    Returns:
        str: The base-64 encoding of the rendered (and optionally compressed) document
    """
    bcontent = self.render_gzip() if compress else self.render_bytes()
    return base64.b64encode(bcontent).decode('utf-8')
