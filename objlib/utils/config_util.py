# -*- coding: utf-8 -*-
# Copyright 2026 The objutil Authors. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Configuration file handling for objutil.

Configuration lives in INI-style files. The OBJUTIL_CONFIG environment
variable may name one or more files (separated by os.pathsep); otherwise
~/.objutil is read if it exists. Later files override earlier ones.

Recognized options:

  [Credentials]
  aws_access_key_id = ...
  aws_secret_access_key = ...
  aws_session_token = ...

  [S3]
  endpoint_url = http://localhost:9000
  region_name = us-east-1
  verify_ssl = true

  [ObjUtil]
  transfer_buffer_size = 64KiB
"""

import configparser
import logging
import os

from objlib.exception import CommandException
from objlib.utils.constants import TRANSFER_BUFFER_SIZE
from objlib.utils.unit_util import HumanReadableToBytes

CONFIG_ENV_VAR = 'OBJUTIL_CONFIG'
DEFAULT_CONFIG_FILE = os.path.join('~', '.objutil')

_TRUE_VALUES = ('true', 'yes', 'on', '1')

_cached_config = None


class Config(configparser.ConfigParser):
  """ConfigParser with the default-aware accessors objutil uses."""

  def __init__(self, config_file_list=None):
    # Interpolation is disabled so secrets may contain '%'.
    configparser.ConfigParser.__init__(self, interpolation=None)
    self.config_file_list = config_file_list or []
    self.read(self.config_file_list)

  def get_value(self, section, name, default=None):
    if self.has_option(section, name):
      return self.get(section, name)
    return default

  def getsize(self, section, name, default=0):
    """Returns a byte count option, accepting values such as "64KiB"."""
    value = self.get_value(section, name)
    if value is None:
      return default
    try:
      return HumanReadableToBytes(value)
    except ValueError:
      raise CommandException(
          'Invalid value "%s" for option "%s" in section [%s] of your config '
          'file.' % (value, name, section))

  def getbool(self, section, name, default=False):
    value = self.get_value(section, name)
    if value is None:
      return default
    return value.strip().lower() in _TRUE_VALUES

  def GetTransferBufferSize(self):
    size = self.getsize('ObjUtil', 'transfer_buffer_size',
                        TRANSFER_BUFFER_SIZE)
    if size <= 0:
      raise CommandException(
          'transfer_buffer_size must be positive (got %d).' % size)
    return size


def GetConfigFileList():
  """Returns the list of config files that exist, in load order."""
  env_value = os.environ.get(CONFIG_ENV_VAR)
  if env_value:
    candidates = [path for path in env_value.split(os.pathsep) if path]
  else:
    candidates = [DEFAULT_CONFIG_FILE]
  config_file_list = []
  for path in candidates:
    path = os.path.expanduser(path)
    if os.path.isfile(path):
      config_file_list.append(path)
    elif env_value:
      logging.getLogger(__name__).warning(
          'Config file %s named in %s does not exist.', path, CONFIG_ENV_VAR)
  return config_file_list


def GetConfig():
  """Returns the process-wide Config, loading it on first use."""
  global _cached_config
  if _cached_config is None:
    _cached_config = Config(GetConfigFileList())
  return _cached_config
