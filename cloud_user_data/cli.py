#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""cloud-user-data CLI"""

from typing import Optional, Sequence, List, TextIO, Tuple

import os
import sys
import argparse
import argcomplete # type: ignore[import]
import json
import logging
from pathlib import Path
import colorama # type: ignore[import]
from colorama import Fore, Style

from .config import UserDataConfig
from .exceptions import UserDataError
from .internal_types import Jsonable
from .logging_config import setup_logging
from .media_types import known_media_types
from .mime_util import is_token
from .multipart import MultipartUserData
from .part import UserDataPart
from .version import __version__ as pkg_version

logger = logging.getLogger(__name__)

def is_colorizable(stream: TextIO) -> bool:
  is_a_tty = hasattr(stream, 'isatty') and stream.isatty()
  return is_a_tty


class CmdExitError(RuntimeError):
  exit_code: int

  def __init__(self, exit_code: int, msg: Optional[str]=None):
    if msg is None:
      msg = f"Command exited with return code {exit_code}"
    super().__init__(msg)
    self.exit_code = exit_code

class ArgparseExitError(CmdExitError):
  pass

class NoExitArgumentParser(argparse.ArgumentParser):
  def exit(self, status=0, message=None):
    if message:
      self._print_message(message, sys.stderr)
    raise ArgparseExitError(status, message)


def parse_attachment(text: str) -> Tuple[str, Optional[str]]:
  """Splits a "<file>[:<media-type>]" --attach argument

  A trailing ":<media-type>" is only split off when it has the form
  "<type>/<subtype>", so paths containing ":" still work.
  """
  path, sep, media_type = text.rpartition(':')
  major, _, minor = media_type.strip().partition('/')
  if sep == '' or path == '' or not is_token(major) or not is_token(minor):
    return text, None
  return path, media_type.strip()


class CommandLineInterface:
  _argv: Optional[Sequence[str]]
  _parser: argparse.ArgumentParser
  _args: argparse.Namespace
  _cwd: str

  _output_file: Optional[str] = None
  _config_file: Optional[str] = None

  _colorize_stderr: bool = False

  def __init__(self, argv: Optional[Sequence[str]]=None):
    self._argv = argv

  def ecolor(self, codes: str) -> str:
    return codes if self._colorize_stderr else ""

  @property
  def cwd(self) -> str:
    return self._cwd

  def abspath(self, path: str) -> str:
    return os.path.abspath(os.path.join(self.cwd, os.path.expanduser(path)))

  def pretty_print(self, value: Jsonable):
    json.dump(value, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write('\n')

  def write_output(self, data: bytes, output_file: Optional[str]=None):
    if output_file is None:
      output_file = self._output_file
    if output_file is None:
      sys.stdout.flush()
      sys.stdout.buffer.write(data)
      sys.stdout.buffer.flush()
    else:
      with open(self.abspath(output_file), 'wb') as f:
        f.write(data)
      logger.info(f"Wrote {len(data)} bytes of user-data to {output_file}")

  def cmd_bare(self) -> int:
    print("A command is required; use -h for help", file=sys.stderr)
    return 1

  def cmd_version(self) -> int:
    print(pkg_version)
    return 0

  def cmd_media_types(self) -> int:
    self.pretty_print(
        dict((x.media_type, x.comment_line) for x in known_media_types())
      )
    return 0

  def build_document(self) -> Tuple[MultipartUserData, Optional[UserDataConfig]]:
    args = self._args
    cfg: Optional[UserDataConfig] = None
    if not self._config_file is None:
      cfg = UserDataConfig(config_path=self._config_file, starting_dir=self.cwd)
      doc = cfg.build_document()
    else:
      doc = MultipartUserData()
    attachments: List[str] = args.attachments
    for attachment in attachments:
      path, media_type = parse_attachment(attachment)
      with open(self.abspath(path), 'rb') as f:
        body = f.read()
      part = UserDataPart.from_content(body, media_type=media_type)
      logger.debug(f"Attaching {path} as {part.media_type}")
      doc.append_part(part)
    boundary: Optional[str] = args.boundary
    if not boundary is None:
      doc.set_boundary(boundary)
    return doc, cfg

  def cmd_render(self) -> int:
    args = self._args
    doc, cfg = self.build_document()
    if len(doc) == 0:
      raise CmdExitError(1, "No user-data parts; use --attach or --config")
    use_base64: bool = args.base64 or (not cfg is None and cfg.base64)
    use_gzip: bool = args.gzip or (not cfg is None and cfg.gzip)
    output_file = self._output_file
    if output_file is None and not cfg is None:
      output_file = cfg.output
    if use_base64:
      data = (doc.render_base64(compress=use_gzip) + '\n').encode('utf-8')
    elif use_gzip:
      data = doc.render_gzip()
    else:
      data = doc.render_bytes()
    self.write_output(data, output_file=output_file)
    return 0

  def run(self) -> int:
    parser = NoExitArgumentParser(
        prog='cloud-user-data',
        description="Build multipart MIME user-data documents for cloud-init."
      )
    parser.add_argument('--traceback', "--tb", action='store_true', default=False,
                        help='Display detailed exception information')
    parser.add_argument('-M', '--monochrome', action='store_true', default=False,
                        help='Output to stderr in monochrome')
    parser.add_argument('-o', '--output', dest="output_file", default=None,
                        help='Write output to the specified file instead of stdout')
    parser.add_argument('-C', '--cwd', default='.',
                        help="Change the effective directory used to resolve relative paths. Default: '.'")
    parser.add_argument('--log-level', default='WARNING',
                        help='Log level (DEBUG, INFO, WARNING, ERROR). Default: WARNING')
    parser.add_argument('--log-file', default=None,
                        help='Also write debug logging to the specified file')
    parser.add_argument('-v', '--verbose', action='store_true', default=False,
                        help='Include timestamps and logger names in log output')
    parser.set_defaults(func=self.cmd_bare)

    subparsers = parser.add_subparsers(
                        title='Commands',
                        description='Valid commands',
                        help='Additional help available with "cloud-user-data <command-name> -h"')

    # ======================= version

    parser_version = subparsers.add_parser('version',
                            description='''Display version information.''')
    parser_version.set_defaults(func=self.cmd_version)

    # ======================= media-types

    parser_media_types = subparsers.add_parser('media-types',
                            description='''List the media types recognized by cloud-init and their comment header lines.''')
    parser_media_types.set_defaults(func=self.cmd_media_types)

    # ======================= render

    parser_render = subparsers.add_parser('render',
                            description='''Render a multipart/mixed user-data document.''',
                            epilog='Example: cloud-user-data render -a config.yaml:text/cloud-config -a script.sh > user-data')
    parser_render.add_argument('-a', '--attach', dest='attachments', action='append', default=[],
                        metavar='<file>[:<media-type>]',
                        help='Attach the given file as the specified media type. If the media type is omitted, '
                             'it is inferred from the first line of the file; e.g., "#cloud-config" or "#!/bin/bash"')
    parser_render.add_argument('--config', default=None,
                        help='Load parts and options from a YAML or JSON manifest')
    parser_render.add_argument('--boundary', default=None,
                        help='Use a custom MIME boundary token')
    parser_render.add_argument('--base64', action='store_true', default=False,
                        help='Output base-64 encoded text')
    parser_render.add_argument('--gzip', action='store_true', default=False,
                        help='Compress the document with gzip')
    parser_render.set_defaults(func=self.cmd_render)

    # =========================================================

    argcomplete.autocomplete(parser)
    try:
      args = parser.parse_args(self._argv)
    except ArgparseExitError as ex:
      return ex.exit_code
    traceback: bool = args.traceback
    try:
      self._args = args
      self._output_file = args.output_file
      log_file: Optional[str] = args.log_file
      setup_logging(
          level=args.log_level,
          log_file=None if log_file is None else Path(log_file),
          verbose=args.verbose,
        )
      monochrome: bool = args.monochrome
      if not monochrome:
        self._colorize_stderr = is_colorizable(sys.stderr)
        if self._colorize_stderr:
          colorama.init(wrap=False)
          new_stream = colorama.AnsiToWin32(sys.stderr)
          if new_stream.should_wrap():
            sys.stderr = new_stream
      self._cwd = os.path.abspath(os.path.expanduser(args.cwd))
      config_file: Optional[str] = getattr(args, 'config', None)
      if not config_file is None:
        self._config_file = self.abspath(config_file)
      rc = args.func()
    except (UserDataError, OSError, CmdExitError) as ex:
      if isinstance(ex, CmdExitError):
        rc = ex.exit_code
      else:
        rc = 1
      if rc != 0:
        if traceback:
          raise

        print(f"{self.ecolor(Fore.RED)}cloud-user-data: error: {ex}{self.ecolor(Style.RESET_ALL)}", file=sys.stderr)
    return rc

  @property
  def args(self) -> argparse.Namespace:
    return self._args

def run(argv: Optional[Sequence[str]]=None) -> int:
  try:
    rc = CommandLineInterface(argv).run()
  except CmdExitError as ex:
    rc = ex.exit_code
  return rc
