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
"""Class that runs a named objutil command."""

import difflib
import logging
import os
import sys

import objlib
from objlib.command import Command
from objlib.command import COMMAND_NAME
from objlib.command import COMMAND_NAME_ALIASES
from objlib.exception import CommandException


class CommandRunner(object):
  """Runs objutil commands and does some top-level argument handling."""

  def __init__(self, api_class_map=None, config=None):
    """Instantiates a CommandRunner.

    Args:
      api_class_map: Optional scheme to CopyApi class map passed to every
                     command. Settable for testing/mocking.
      config: Optional Config passed to every command.
    """
    self.api_class_map = api_class_map
    self.config = config
    self.command_map = self._LoadCommandMap()

  def _LoadCommandMap(self):
    """Returns dict mapping each command_name to implementing class."""
    # Walk objlib/commands and find all commands.
    commands_dir = os.path.join(objlib.OBJLIB_DIR, 'commands')
    for f in os.listdir(commands_dir):
      # Handles no-extension files, etc.
      (module_name, ext) = os.path.splitext(f)
      if ext == '.py':
        __import__('objlib.commands.%s' % module_name)
    command_map = {}
    # Only include Command subclasses in the dict.
    for command in Command.__subclasses__():
      command_map[command.command_spec[COMMAND_NAME]] = command
      for command_name_aliases in command.command_spec[COMMAND_NAME_ALIASES]:
        command_map[command_name_aliases] = command
    return command_map

  def RunNamedCommand(self, command_name, args=None, debug=0, quiet=False,
                      logging_filters=None):
    """Runs the named command.

    Used by objutil main, commands built atop other commands, and tests.

    Args:
      command_name: The name of the command being run.
      args: Command-line args (arg0 = actual arg, not command name ala bash).
      debug: Debug level (0..4).
      quiet: True to suppress progress output.
      logging_filters: Optional list of logging.Filters to apply to the
                       command's logger.

    Raises:
      CommandException: if errors encountered.

    Returns:
      Return value(s) from Command that was run.
    """
    if not args:
      args = []

    if command_name not in self.command_map:
      close_matches = difflib.get_close_matches(
          command_name, self.command_map.keys(), n=1)
      if close_matches:
        sys.stderr.write('Did you mean this?\n\t%s\n' % close_matches[0])
      raise CommandException('Invalid command "%s".' % command_name)

    logging.getLogger(__name__).debug('Running %s %s', command_name,
                                      ' '.join(args))
    command_class = self.command_map[command_name]
    command_inst = command_class(
        self, args, debug=debug, quiet=quiet,
        api_class_map=self.api_class_map, config=self.config,
        logging_filters=logging_filters)
    return command_inst.RunCommand()
