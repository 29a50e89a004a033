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
"""Base class for objutil commands.

In addition to base class code, this file contains helpers that depend on base
class state. Functions that don't depend on class state belong in utils/, and
non-shared helpers belong in individual subclasses.
"""

import getopt
import logging

from objlib.cloud_api_delegator import CloudApiDelegator
from objlib.exception import CommandException
from objlib.exception import InvalidUrlError
from objlib.storage_url import StorageUrlFromString
from objlib.utils.config_util import GetConfig
from objlib.utils.constants import NO_MAX

# Keys for the command_spec map.
COMMAND_NAME = 'command_name'
COMMAND_NAME_ALIASES = 'command_name_aliases'
MIN_ARGS = 'min_args'
MAX_ARGS = 'max_args'
SUPPORTED_SUB_ARGS = 'supported_sub_args'
USAGE = 'usage'


def CreateObjutilLogger(command_name):
  """Creates a logger that resembles 'print' output.

  The logger abides by objutil -d/-D/-q options: by default (if none of them
  is specified) it displays all messages logged with level INFO or above.
  Log propagation is disabled.

  Returns:
    A logger object.
  """
  log = logging.getLogger(command_name)
  log.propagate = False
  log.setLevel(logging.root.level)
  log_handler = logging.StreamHandler()
  log_handler.setFormatter(logging.Formatter('%(message)s'))
  # Commands that are run more than once in a process (e.g. by tests) would
  # otherwise add their handler more than once.
  if not log.handlers:
    log.addHandler(log_handler)
  return log


class Command(object):
  """Base class for all objutil commands."""
  REQUIRED_SPEC_KEYS = [COMMAND_NAME]

  # Each subclass must define the following map, minimally including the
  # keys in REQUIRED_SPEC_KEYS; other values below will be used as defaults,
  # although for readability subclasses should specify the complete map.
  command_spec = {
      # Name of command.
      COMMAND_NAME: None,
      # List of command name aliases.
      COMMAND_NAME_ALIASES: [],
      # Min number of args required by this command.
      MIN_ARGS: 0,
      # Max number of args required by this command, or NO_MAX.
      MAX_ARGS: NO_MAX,
      # Getopt-style string specifying acceptable sub args.
      SUPPORTED_SUB_ARGS: '',
      # One line usage synopsis.
      USAGE: '',
  }
  _default_command_spec = command_spec

  @property
  def command_name(self):
    return self.command_spec[COMMAND_NAME]

  def __init__(self, command_runner, args, debug=0, quiet=False,
               api_class_map=None, config=None, logging_filters=None):
    """Initializes the command and parses its arguments.

    Args:
      command_runner: CommandRunner (for commands built atop other commands).
      args: Command-line args (arg0 = actual arg, not command name ala bash).
      debug: Debug level (0..4) selected with -d/-D/-DD.
      quiet: True if -q was given; commands suppress progress output.
      api_class_map: Optional scheme to CopyApi class map. Settable for
                     testing/mocking.
      config: Config to use. Defaults to the process-wide config.
      logging_filters: Optional list of logging.Filters to apply to this
                       command's logger.

    Implementation note: subclasses shouldn't need to define an __init__
    method, and instead depend on the shared initialization that happens
    here.
    """
    self.command_runner = command_runner
    self.unparsed_args = args
    self.debug = debug
    self.quiet = quiet
    self.config = config if config is not None else GetConfig()
    self.recursion_requested = False

    self.logger = CreateObjutilLogger(self.command_name)
    if logging_filters:
      for log_filter in logging_filters:
        self.logger.addFilter(log_filter)

    # First, ensure subclass implementation sets all required keys.
    for k in self.REQUIRED_SPEC_KEYS:
      if k not in self.command_spec or self.command_spec[k] is None:
        raise CommandException('"%s" command implementation is missing %s '
                               'specification' % (self.command_name, k))
    # Now override default command_spec with subclass-specified values.
    spec = dict(self._default_command_spec)
    spec.update(self.command_spec)
    self.command_spec = spec

    try:
      (self.sub_opts, self.args) = getopt.getopt(
          args, self.command_spec[SUPPORTED_SUB_ARGS])
    except getopt.GetoptError as e:
      raise CommandException('%s for "%s" command.' % (e.msg,
                                                       self.command_name))
    if (len(self.args) < self.command_spec[MIN_ARGS]
        or len(self.args) > self.command_spec[MAX_ARGS]):
      self._RaiseWrongNumberOfArgumentsException()

    # We're treating recursion_requested like it's used by all commands, but
    # only some of the commands accept the -r option.
    for o, unused_a in self.sub_opts:
      if o in ('-r', '-R'):
        self.recursion_requested = True
        break

    self.copy_api = CloudApiDelegator(logger=self.logger, debug=self.debug,
                                      api_class_map=api_class_map)

  def _RaiseWrongNumberOfArgumentsException(self):
    """Raises an exception for the wrong number of arguments."""
    if len(self.args) > self.command_spec[MAX_ARGS]:
      message = ('The %s command accepts at most %d arguments.' %
                 (self.command_name, self.command_spec[MAX_ARGS]))
    else:
      message = ('The %s command requires at least %d arguments.' %
                 (self.command_name, self.command_spec[MIN_ARGS]))
    if self.command_spec[USAGE]:
      message += ' Usage:\n  %s' % self.command_spec[USAGE]
    raise CommandException(message)

  def ParseUrlArgs(self, url_strs):
    """Converts URL argument strings to StorageUrls.

    Raises:
      CommandException: if any argument is not a valid object URL.
    """
    urls = []
    for url_str in url_strs:
      try:
        urls.append(StorageUrlFromString(url_str))
      except InvalidUrlError as e:
        self.logger.debug('Unable to parse URL %s: %s', url_str, e.message)
        raise CommandException('Unable to parse URL "%s": %s' %
                               (url_str, e.message))
    return urls

  def RunCommand(self):
    """Abstract function in base class. Subclasses must implement this.

    The return value of this function will be used as the exit status of the
    process, so subclass commands should return an integer exit code (0 for
    success, a value in [1,255] for failure).
    """
    raise CommandException('Command %s is missing its RunCommand() '
                           'implementation' % self.command_name)
