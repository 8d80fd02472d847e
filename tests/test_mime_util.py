"""Tests for low-level MIME helpers."""

import pytest

from cloud_user_data.mime_util import (
    canonical_header_key,
    format_media_type,
    is_ascii,
    is_token,
    is_valid_boundary,
  )


class TestCanonicalHeaderKey:

  @pytest.mark.parametrize("key, expected", [
      ("content-type", "Content-Type"),
      ("CONTENT-TRANSFER-ENCODING", "Content-Transfer-Encoding"),
      ("mime-version", "Mime-Version"),
      ("x-custom-2", "X-Custom-2"),
      ("has space", "has space"),
      ("", ""),
    ])
  def test_canonical(self, key, expected):
    assert canonical_header_key(key) == expected


class TestFormatMediaType:

  def test_token_value_unquoted(self):
    assert format_media_type("text/cloud-config", {"charset": "us-ascii"}) == "text/cloud-config; charset=us-ascii"

  def test_type_and_names_lowercased(self):
    assert format_media_type("Multipart/Mixed", {"Boundary": "abc"}) == "multipart/mixed; boundary=abc"

  def test_tspecials_quoted(self):
    assert format_media_type("multipart/mixed", {"boundary": "a=b"}) == 'multipart/mixed; boundary="a=b"'
    assert format_media_type("multipart/mixed", {"boundary": "a b"}) == 'multipart/mixed; boundary="a b"'

  def test_quote_and_backslash_escaped(self):
    assert format_media_type("text/plain", {"name": 'a"b\\c'}) == 'text/plain; name="a\\"b\\\\c"'

  def test_params_sorted(self):
    assert format_media_type("text/plain", {"z": "1", "a": "2"}) == "text/plain; a=2; z=1"

  def test_non_ascii_uses_rfc2231(self):
    assert format_media_type("text/plain", {"name": "é"}) == "text/plain; name*=utf-8''%C3%A9"


class TestPredicates:

  def test_is_token(self):
    assert is_token("+Go+User+Data+Boundary++")
    assert not is_token("+Go+User+Data+Boundary==")
    assert not is_token("")
    assert not is_token("a b")

  def test_is_ascii(self):
    assert is_ascii(b"#!/bin/bash\n")
    assert is_ascii(b"")
    assert not is_ascii("世界".encode('utf-8'))
    assert not is_ascii(b"\x80")

  @pytest.mark.parametrize("boundary, valid", [
      ("+Go+User+Data+Boundary==", True),
      (" leading space", True),
      ("inner space ok", True),
      ("0-9a-zA-Z'()+_,-./:=?", True),
      ("x" * 70, True),
      ("x" * 71, False),
      ("", False),
      ("trailing ", False),
      ("bang!", False),
      ("tab\tinside", False),
      ("ends-with-newline\n", False),
    ])
  def test_is_valid_boundary(self, boundary, valid):
    assert is_valid_boundary(boundary) is valid
