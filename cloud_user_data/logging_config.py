#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Logging configuration for the cloud-user-data command line.

The library modules only create loggers; handlers are installed here, by
the application.
"""

from typing import Optional

import logging
import sys
from pathlib import Path

logger = logging.getLogger("cloud_user_data")

def setup_logging(
      level: str="WARNING",
      log_file: Optional[Path]=None,
      verbose: bool=False,
    ) -> None:
  """Configure the package logger.

  Args:
      level (str, optional): Log level name (DEBUG, INFO, WARNING, ERROR). Defaults to "WARNING".
      log_file (Optional[Path], optional): If not None, DEBUG and above are also appended to
                          this file. Defaults to None.
      verbose (bool, optional): If True, console lines carry a timestamp, level and logger name.
                          Defaults to False.
  """
  log_level = getattr(logging, level.upper(), logging.WARNING)
  logger.setLevel(logging.DEBUG if not log_file is None else log_level)

  for handler in list(logger.handlers):
    logger.removeHandler(handler)
    handler.close()

  console_handler = logging.StreamHandler(sys.stderr)
  console_handler.setLevel(log_level)
  if verbose:
    console_format = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
      )
  else:
    console_format = logging.Formatter("%(message)s")
  console_handler.setFormatter(console_format)
  logger.addHandler(console_handler)

  if not log_file is None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
      ))
    logger.addHandler(file_handler)
