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
"""Implementation of the objutil cp command.

Copies one source object to one or more destination objects in a single
pass:

  objutil cp s3://bucket/report.csv backup/report.csv s3://archive/report.csv

Every destination receives the same bytes; the source is read once. Use the
global -q option to suppress the progress display.
"""

from objlib.command import Command
from objlib.command import COMMAND_NAME
from objlib.command import COMMAND_NAME_ALIASES
from objlib.command import MAX_ARGS
from objlib.command import MIN_ARGS
from objlib.command import SUPPORTED_SUB_ARGS
from objlib.command import USAGE
from objlib.copy_helper import PerformCopy
from objlib.exception import CommandException
from objlib.utils.constants import NO_MAX

NO_ERROR_MESSAGE = (
    'No error message present, please rerun with -D and report a bug.')


class CpCommand(Command):
  """Implementation of objutil cp command."""

  # Command specification (processed by parent class).
  command_spec = {
      # Name of command.
      COMMAND_NAME: 'cp',
      # List of command name aliases.
      COMMAND_NAME_ALIASES: ['copy'],
      # Min number of args required by this command.
      MIN_ARGS: 2,
      # Max number of args required by this command, or NO_MAX.
      MAX_ARGS: NO_MAX,
      # Getopt-style string specifying acceptable sub args.
      SUPPORTED_SUB_ARGS: 'rR',
      # One line usage synopsis.
      USAGE: 'objutil [-q] cp src_url dst_url...',
  }

  def RunCommand(self):
    """Command entry point for the cp command."""
    if self.recursion_requested:
      raise CommandException('Recursive copy is not supported by "cp"; '
                             'name a single source object.',
                             informational=True)
    urls = self.ParseUrlArgs(self.args)
    src_url = urls[0]
    dst_urls = urls[1:]

    human_readable_error, e = PerformCopy(
        self.copy_api, src_url, dst_urls, quiet=self.quiet,
        logger=self.logger,
        buffer_size=self.config.GetTransferBufferSize())
    if e is None:
      for dst_url in dst_urls:
        self.logger.debug('Copied %s to %s', src_url, dst_url)
      return 0
    if not human_readable_error:
      human_readable_error = NO_ERROR_MESSAGE
    self.logger.debug(e.GetDiagnosticString())
    self.logger.error('objutil: %s', human_readable_error)
    return 1
