#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Low-level MIME helpers: header field name canonicalization, media type
parameter formatting, and the RFC 2046 boundary grammar.
"""

from typing import Mapping

import re

from .constants import MAX_BOUNDARY_LENGTH

_TSPECIALS = '()<>@,;:\\"/[]?='

_FIELD_NAME_SPECIALS = "!#$%&'*+-.^_`|~"

_BCHARSNOSPACE = "0-9A-Za-z'()+_,\\-./:=?"

_boundary_re = re.compile(
    f"[{_BCHARSNOSPACE} ]{{0,{MAX_BOUNDARY_LENGTH - 1}}}[{_BCHARSNOSPACE}]"
  )
"""RFC 2046: boundary := 0*69<bchars> bcharsnospace"""

def is_token_char(c: str) -> bool:
  return ' ' < c < '\x7f' and not c in _TSPECIALS

def _is_field_name_char(c: str) -> bool:
  return c.isascii() and (c.isalnum() or c in _FIELD_NAME_SPECIALS)

def is_token(s: str) -> bool:
  """Return True if s is a non-empty RFC 2045 token (no spaces, controls or tspecials)"""
  return s != '' and all(is_token_char(c) for c in s)

def is_ascii(data: bytes) -> bool:
  """Return True if every byte of data is in the 7-bit ASCII range"""
  return data.isascii()

def is_valid_boundary(boundary: str) -> bool:
  """Return True if boundary satisfies the RFC 2046 boundary grammar:
     1 to 70 characters from bcharsnospace, plus spaces anywhere except
     the final position."""
  return not _boundary_re.fullmatch(boundary) is None

def canonical_header_key(key: str) -> str:
  """Returns the canonical form of a MIME header field name: the first
     letter and any letter following a hyphen are upper case, the rest
     are lower case; e.g., "content-type" becomes "Content-Type".

     Keys containing characters that are not valid in a field name are
     returned unchanged.
  """
  if key == '' or not all(_is_field_name_char(c) for c in key):
    return key
  chars = []
  upper = True
  for c in key:
    chars.append(c.upper() if upper else c.lower())
    upper = c == '-'
  return ''.join(chars)

def _quote_parameter_value(value: str) -> str:
  return '"' + value.replace('\\', '\\\\').replace('"', '\\"') + '"'

def _needs_encoding(value: str) -> bool:
  return any((c < ' ' or c > '~') and c != '\t' for c in value)

def _rfc2231_encode(value: str) -> str:
  result = "utf-8''"
  for b in value.encode('utf-8'):
    c = chr(b)
    if b < 0x80 and is_token_char(c) and not c in "*'%":
      result += c
    else:
      result += f"%{b:02X}"
  return result

def format_media_type(media_type: str, params: Mapping[str, str]) -> str:
  """Serializes a media type and its parameters as a Content-Type header value.

  The type and parameter names are lower-cased, and parameters are emitted in
  sorted order. A parameter value that is a valid token is written bare; otherwise
  it is quoted, with backslash escapes for '"' and '\\'. Values containing non-ASCII
  characters use RFC 2231 extended notation (name*=utf-8''...).

  Args:
      media_type (str): The media type; e.g., "text/cloud-config"
      params (Mapping[str, str]): Parameters to append; e.g., {"charset": "us-ascii"}

  Returns:
      str: The formatted value; e.g., "text/cloud-config; charset=us-ascii".
           Type and parameter names that are not tokens are passed through
           without validation.
  """
  result = media_type.lower()
  for name in sorted(params.keys()):
    value = params[name]
    result += '; ' + name.lower()
    if _needs_encoding(value):
      result += '*=' + _rfc2231_encode(value)
    elif is_token(value):
      result += '=' + value
    else:
      result += '=' + _quote_parameter_value(value)
  return result
