"""Tests for the recognized media type table."""

import pytest

from cloud_user_data import (
    known_media_types,
    is_known_media_type,
    media_type_info,
    media_type_for_comment_line,
    CLOUD_BOOTHOOK,
    CLOUD_CONFIG,
    CLOUD_CONFIG_ARCHIVE,
    CLOUD_CONFIG_JSONP,
    JINJA2,
    PART_HANDLER,
    X_INCLUDE_ONCE_URL,
    X_INCLUDE_URL,
    X_SHELLSCRIPT,
    X_SHELLSCRIPT_PER_BOOT,
    X_SHELLSCRIPT_PER_INSTANCE,
    X_SHELLSCRIPT_PER_ONCE,
  )


def test_known_media_types():
  assert [x.media_type for x in known_media_types()] == [
      CLOUD_BOOTHOOK,
      CLOUD_CONFIG,
      CLOUD_CONFIG_ARCHIVE,
      CLOUD_CONFIG_JSONP,
      JINJA2,
      PART_HANDLER,
      X_INCLUDE_ONCE_URL,
      X_INCLUDE_URL,
      X_SHELLSCRIPT,
      X_SHELLSCRIPT_PER_BOOT,
      X_SHELLSCRIPT_PER_INSTANCE,
      X_SHELLSCRIPT_PER_ONCE,
    ]


def test_is_known_media_type():
  assert is_known_media_type("text/cloud-config")
  assert is_known_media_type("Text/Cloud-Config")
  assert not is_known_media_type("text/upstart-job")


def test_media_type_info():
  info = media_type_info(X_SHELLSCRIPT)

  assert info is not None
  assert info.is_shebang
  assert info.subtype == "x-shellscript"
  assert media_type_info(X_SHELLSCRIPT_PER_BOOT).comment_line is None
  assert media_type_info("text/plain") is None


@pytest.mark.parametrize("media_type, keeps", [
    (X_SHELLSCRIPT, True),
    (JINJA2, True),
    (CLOUD_CONFIG, False),
  ])
def test_keeps_comment_line(media_type, keeps):
  assert media_type_info(media_type).keeps_comment_line is keeps


@pytest.mark.parametrize("line, expected", [
    ("#cloud-config", CLOUD_CONFIG),
    ("#cloud-config  ", CLOUD_CONFIG),
    ("#!/bin/bash", X_SHELLSCRIPT),
    ("#!/usr/bin/env python3", X_SHELLSCRIPT),
    ("#include", X_INCLUDE_URL),
    ("#include-once", X_INCLUDE_ONCE_URL),
    ("## template: jinja", JINJA2),
    ("#part-handler", PART_HANDLER),
    ("#cloud-boothook", CLOUD_BOOTHOOK),
    ("#cloud-config-archive", CLOUD_CONFIG_ARCHIVE),
    ("#cloud-config-jsonp", CLOUD_CONFIG_JSONP),
    ("# just a comment", None),
    ("cloud-config", None),
  ])
def test_media_type_for_comment_line(line, expected):
  assert media_type_for_comment_line(line) == expected
