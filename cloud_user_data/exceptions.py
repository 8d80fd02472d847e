#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Exceptions defined by this package"""

class UserDataError(Exception):
  """Base class for all error exceptions defined by this package."""
  #pass

class InvalidBoundaryError(UserDataError, ValueError):
  """A MIME boundary token does not satisfy the RFC 2046 boundary grammar"""
  boundary: str

  def __init__(self, boundary: str):
    super().__init__(f"invalid boundary: {boundary!r}")
    self.boundary = boundary

class SinkWriteError(UserDataError, IOError):
  """Writing rendered user-data to the output sink failed. The original
     exception is available as __cause__."""

class UnknownContentTypeError(UserDataError):
  """The media type of a part could not be inferred from its content"""

class ConfigError(UserDataError):
  """A user-data manifest file is malformed"""
