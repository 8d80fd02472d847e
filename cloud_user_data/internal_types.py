#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Type hints shared across the package"""

from typing import Union, Dict, List, Any, Protocol


# Note: recursive type hints are not allowed by mypy so this is simplified a bit
Jsonable = Union[str, int, float, bool, None, Dict[str, Any], List[Any]]
"""A Type hint for a simple JSON-serializable value; i.e., str, int, float, bool, None, Dict[str, Jsonable], List[Jsonable]"""

JsonableDict = Dict[str, Jsonable]
"""A type hint for a simple JSON-serializable dict; i.e., Dict[str, Jsonable]"""

JsonableList = List[Jsonable]
"""A type hint for a simple JSON-serializable list; i.e., List[Jsonable]"""

class ByteSink(Protocol):
  """Anything with a binary write() method; e.g., io.BytesIO, a file opened with 'wb', or sys.stdout.buffer"""

  def write(self, data: bytes) -> Any:
    ...

BodyInput = Union[bytes, bytearray, str]
"""A part body, as raw bytes or as text that will be UTF-8 encoded"""
