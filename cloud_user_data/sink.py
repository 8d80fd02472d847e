#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Writing rendered bytes to a caller-supplied output sink"""

from .internal_types import ByteSink
from .exceptions import SinkWriteError

def write_to_sink(sink: ByteSink, data: bytes) -> None:
  """Writes data to sink, translating I/O failures into SinkWriteError

  Args:
      sink (ByteSink): A binary stream
      data (bytes): The bytes to write

  Raises:
      SinkWriteError: sink.write() raised OSError or ValueError (e.g., the
                      stream is closed). The original exception is chained.
  """
  try:
    sink.write(data)
  except (OSError, ValueError) as ex:
    raise SinkWriteError(f"Failed writing {len(data)} bytes to user-data sink: {ex}") from ex
