"""Pytest configuration and shared fixtures."""

from typing import List

import pytest

from cloud_user_data import MultipartUserData, CLOUD_CONFIG, X_SHELLSCRIPT

CLOUD_CONFIG_BODY = b"#cloud-config\ntimezone: Europe/London"
ASCII_SCRIPT_BODY = b"#!/bin/bash\necho 'Hello World'"
UTF8_SCRIPT_BODY = "#!/bin/bash\necho 'こんにちは世界'".encode('utf-8')
UTF8_SCRIPT_BASE64 = b"IyEvYmluL2Jhc2gKZWNobyAn44GT44KT44Gr44Gh44Gv5LiW55WMJw=="

TWO_PART_DOCUMENT = (
    b'Content-Type: multipart/mixed; boundary="+Go+User+Data+Boundary=="\r\n'
    b"Mime-Version: 1.0\r\n"
    b"\r\n"
    b"--+Go+User+Data+Boundary==\r\n"
    b"Content-Transfer-Encoding: 7bit\r\n"
    b"Content-Type: text/cloud-config; charset=us-ascii\r\n"
    b"\r\n"
    b"#cloud-config\n"
    b"timezone: Europe/London\r\n"
    b"\r\n"
    b"--+Go+User+Data+Boundary==\r\n"
    b"Content-Transfer-Encoding: 7bit\r\n"
    b"Content-Type: text/x-shellscript; charset=us-ascii\r\n"
    b"\r\n"
    b"#!/bin/bash\n"
    b"echo 'Hello World'\r\n"
    b"\r\n"
    b"--+Go+User+Data+Boundary==--\r\n"
  )


class FailingSink:
  """A binary sink that accepts a fixed number of writes and then raises OSError."""

  writes: List[bytes]

  def __init__(self, fail_after: int=0):
    self.fail_after = fail_after
    self.writes = []

  def write(self, data: bytes) -> int:
    if len(self.writes) >= self.fail_after:
      raise OSError(28, "No space left on device")
    self.writes.append(data)
    return len(data)


@pytest.fixture
def two_part_document() -> MultipartUserData:
  """A document with the default boundary, a cloud-config part and a shell script part."""
  doc = MultipartUserData()
  doc.add_part(CLOUD_CONFIG, CLOUD_CONFIG_BODY)
  doc.add_part(X_SHELLSCRIPT, ASCII_SCRIPT_BODY)
  return doc
