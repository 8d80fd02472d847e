#
# Copyright (c) 2022 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""cloud-user-data manifest configuration

A manifest is a YAML or JSON file that lists the parts of a user-data
document; e.g.:

  boundary: "+Custom+Boundary+"
  parts:
    - path: cloud-config.yaml
      media_type: text/cloud-config
    - path: setup.sh
  output: user-data.mime
  base64: false
  gzip: false

Part paths are relative to the directory containing the manifest. A part
without a media_type has it inferred from its first line.
"""

from typing import Optional, List

import os
import json
import yaml
try:
  from yaml import CSafeLoader as Loader
except ImportError:
  from yaml import SafeLoader as Loader  #type: ignore[misc]

from .constants import CONFIG_FILENAME_BASE, CONFIG_ENV_VAR
from .exceptions import ConfigError
from .internal_types import JsonableDict
from .multipart import MultipartUserData
from .part import UserDataPart

def locate_config_file(config_path: Optional[str]=None, starting_dir: Optional[str]=None) -> str:
  """Find the manifest file to load.

  Args:
      config_path (Optional[str], optional): An explicit manifest file or directory, relative to
                          starting_dir. If None, $CLOUD_USER_DATA_CONFIG is used if set, else
                          starting_dir itself. Defaults to None.
      starting_dir (Optional[str], optional): Base directory. Defaults to the current directory.

  Raises:
      FileNotFoundError: No manifest was found

  Returns:
      str: The absolute path of the manifest file. For a directory, this is the first of
           cloud-user-data.yaml, cloud-user-data.yml or cloud-user-data.json found in it.
  """
  if starting_dir is None:
    starting_dir = '.'
  starting_dir = os.path.abspath(os.path.expanduser(starting_dir))
  if config_path is None:
    config_path = os.environ.get(CONFIG_ENV_VAR, None)
    if config_path == '':
      config_path = None
  if config_path is None:
    config_path = starting_dir
  else:
    config_path = os.path.abspath(os.path.join(starting_dir, os.path.expanduser(config_path)))
  if not os.path.exists(config_path):
    raise FileNotFoundError(f"cloud-user-data: Config file not found: '{config_path}'")
  if os.path.isdir(config_path):
    for ext in ('.yaml', '.yml', '.json'):
      p = os.path.join(config_path, CONFIG_FILENAME_BASE + ext)
      if os.path.isfile(p):
        return p
    raise FileNotFoundError(f"cloud-user-data: Config file not found in dir: '{config_path}'")
  return config_path

class PartConfig:
  path: str
  media_type: Optional[str]

  def __init__(self, path: str, media_type: Optional[str]=None):
    self.path = path
    self.media_type = media_type

  def __repr__(self) -> str:
    return f"PartConfig({self.path!r}, media_type={self.media_type!r})"

class UserDataConfig:
  _config_file: str
  _config_dir: str
  _config_data: JsonableDict
  _parts: List[PartConfig]

  def __init__(self, config_path: Optional[str]=None, starting_dir: Optional[str]=None):
    self._config_file = locate_config_file(config_path=config_path, starting_dir=starting_dir)
    self._config_dir = os.path.dirname(self._config_file)
    with open(self._config_file, 'rb') as fb:
      raw = fb.read()
    try:
      config_text = raw.decode('utf-8')
      if self._config_file.endswith('.json'):
        data = json.loads(config_text)
      else:
        data = yaml.load(config_text, Loader=Loader)
    except (ValueError, yaml.YAMLError) as ex:
      raise ConfigError(f"Unable to parse user-data manifest '{self._config_file}': {ex}") from ex
    if data is None:
      data = {}
    if not isinstance(data, dict):
      raise ConfigError(f"User-data manifest '{self._config_file}' must contain a mapping")
    self._config_data = data
    self._parts = self._parse_parts(data.get('parts', []))
    for key in ('boundary', 'output'):
      if not data.get(key, None) is None and not isinstance(data[key], str):
        raise ConfigError(f"User-data manifest '{self._config_file}': '{key}' must be a string")
    for key in ('base64', 'gzip'):
      if not data.get(key, None) is None and not isinstance(data[key], bool):
        raise ConfigError(f"User-data manifest '{self._config_file}': '{key}' must be true or false")

  def _parse_parts(self, raw_parts: object) -> List[PartConfig]:
    if not isinstance(raw_parts, list):
      raise ConfigError(f"User-data manifest '{self._config_file}': 'parts' must be a list")
    result: List[PartConfig] = []
    for i, raw_part in enumerate(raw_parts):
      if isinstance(raw_part, str):
        raw_part = dict(path=raw_part)
      if not isinstance(raw_part, dict) or not isinstance(raw_part.get('path', None), str):
        raise ConfigError(f"User-data manifest '{self._config_file}': part {i} has no 'path'")
      media_type = raw_part.get('media_type', None)
      if not media_type is None and not isinstance(media_type, str):
        raise ConfigError(f"User-data manifest '{self._config_file}': part {i} media_type must be a string")
      result.append(PartConfig(raw_part['path'], media_type=media_type))
    return result

  @property
  def config_file(self) -> str:
    return self._config_file

  @property
  def config_data(self) -> JsonableDict:
    return self._config_data

  @property
  def parts(self) -> List[PartConfig]:
    return list(self._parts)

  @property
  def boundary(self) -> Optional[str]:
    result = self._config_data.get('boundary', None)
    assert result is None or isinstance(result, str)
    return result

  @property
  def output(self) -> Optional[str]:
    """The output file, made absolute relative to the manifest directory, or None for stdout"""
    result = self._config_data.get('output', None)
    if result is None:
      return None
    assert isinstance(result, str)
    return self.abspath(result)

  @property
  def base64(self) -> bool:
    return bool(self._config_data.get('base64', False))

  @property
  def gzip(self) -> bool:
    return bool(self._config_data.get('gzip', False))

  def abspath(self, path: str) -> str:
    return os.path.abspath(os.path.join(self._config_dir, os.path.expanduser(path)))

  def build_document(self) -> MultipartUserData:
    """Reads every part file and assembles the document

    Raises:
        InvalidBoundaryError: The manifest's boundary is not valid
        UnknownContentTypeError: A part has no media_type and its type can't be inferred
        OSError: A part file could not be read
    """
    doc = MultipartUserData(boundary=self.boundary)
    for part_cfg in self._parts:
      with open(self.abspath(part_cfg.path), 'rb') as f:
        body = f.read()
      doc.append_part(UserDataPart.from_content(body, media_type=part_cfg.media_type))
    return doc
