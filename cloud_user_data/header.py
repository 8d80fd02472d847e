#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
An ordered, multi-valued collection of MIME header fields that renders
to canonical "Name: Value\\r\\n" lines in a deterministic order.
"""

from typing import Optional, List, Dict, Iterator

from io import BytesIO

from .internal_types import ByteSink
from .mime_util import canonical_header_key
from .sink import write_to_sink

class Header:
  """A mapping from canonical header field name to one or more values.

  Field names are case-insensitive; "content-type" and "Content-Type" name the
  same field. Values are emitted verbatim, without folding or escaping.
  """

  _fields: Dict[str, List[str]]

  def __init__(self):
    self._fields = {}

  def set(self, key: str, value: str) -> None:
    """Replaces all existing values for key with value"""
    self._fields[canonical_header_key(key)] = [value]

  def add(self, key: str, value: str) -> None:
    """Appends value to the values for key, creating the field if necessary"""
    self._fields.setdefault(canonical_header_key(key), []).append(value)

  def get(self, key: str) -> Optional[str]:
    """Returns the first value associated with key, or None if the field is not set"""
    values = self._fields.get(canonical_header_key(key), None)
    return None if not values else values[0]

  def values(self, key: str) -> List[str]:
    """Returns a copy of all values associated with key, in insertion order"""
    return list(self._fields.get(canonical_header_key(key), []))

  def delete(self, key: str) -> None:
    """Removes the field and all of its values. No error if it is not set."""
    self._fields.pop(canonical_header_key(key), None)

  def keys(self) -> List[str]:
    return sorted(self._fields.keys())

  def __contains__(self, key: object) -> bool:
    return isinstance(key, str) and canonical_header_key(key) in self._fields

  def __iter__(self) -> Iterator[str]:
    return iter(self.keys())

  def __len__(self) -> int:
    return len(self._fields)

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, Header):
      return NotImplemented
    return self._fields == other._fields

  def __repr__(self) -> str:
    return f"Header({self._fields!r})"

  def copy(self) -> 'Header':
    result = Header()
    result._fields = dict((k, list(v)) for k, v in self._fields.items())
    return result

  def render(self, sink: ByteSink) -> None:
    """Writes every field to sink, one "Name: Value\\r\\n" line per value.

    Field names are emitted in ascending lexicographic order, and the values
    of a multi-valued field are likewise sorted, so the output depends only on
    the set of (name, value) pairs and not on the order they were added.

    Args:
        sink (ByteSink): The binary stream to write to

    Raises:
        SinkWriteError: A write to sink failed. Nothing is retried.
    """
    for key in sorted(self._fields.keys()):
      for value in sorted(self._fields[key]):
        write_to_sink(sink, f"{key}: {value}\r\n".encode('utf-8'))

  def render_bytes(self) -> bytes:
    buff = BytesIO()
    self.render(buff)
    return buff.getvalue()
