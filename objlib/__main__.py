#!/usr/bin/env python
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
"""Main module for the objutil object storage command line tool."""

import errno
import getopt
import logging
import re
import signal
import sys
import traceback

import objlib
from objlib.command import USAGE
from objlib.command_runner import CommandRunner
from objlib.exception import CommandException
from objlib.exception import CopyException
from objlib.utils import constants
from objlib.utils.config_util import GetConfig

debug = 0


def _OutputAndExit(message):
  """Outputs message to stderr and exits objutil with code 1."""
  if debug >= constants.DEBUGLEVEL_DUMP_REQUESTS:
    stack_trace = traceback.format_exc()
    err = ('DEBUG: Exception stack trace:\n    %s\n%s\n' %
           (re.sub('\\n', '\n    ', stack_trace), message))
  else:
    err = '%s\n' % message
  sys.stderr.write(err)
  sys.exit(1)


def _OutputUsageAndExit(command_runner):
  usages = sorted(set(command_class.command_spec[USAGE]
                      for command_class in command_runner.command_map.values()))
  sys.stderr.write(
      'Usage: objutil [-d|-D] [-q] [-v] command [args...]\n\nCommands:\n')
  for usage in usages:
    sys.stderr.write('  %s\n' % usage)
  sys.exit(1)


def _ConfigureLogging(quiet):
  if debug >= constants.DEBUGLEVEL_DEBUG:
    logging.basicConfig(level=logging.DEBUG)
  elif quiet:
    logging.basicConfig(level=logging.WARNING)
  else:
    logging.basicConfig(level=logging.INFO)
    # botocore logs connection details at INFO that belong at objutil's debug
    # level.
    logging.getLogger('botocore').setLevel(logging.WARNING)


def main():
  global debug

  command_runner = CommandRunner()
  quiet = False
  version = False
  debug = 0

  try:
    opts, args = getopt.getopt(sys.argv[1:], 'dDqvh',
                               ['debug', 'detailedDebug', 'quiet', 'version',
                                'help'])
  except getopt.GetoptError as e:
    _HandleCommandException(CommandException(e.msg))
  for o, unused_a in opts:
    if o in ('-d', '--debug'):
      debug = constants.DEBUGLEVEL_DEBUG
    elif o in ('-D', '--detailedDebug'):
      # -DD asks for stack traces on failure as well.
      if debug == constants.DEBUGLEVEL_DETAILED:
        debug = constants.DEBUGLEVEL_DUMP_REQUESTS
      else:
        debug = constants.DEBUGLEVEL_DETAILED
    elif o in ('-h', '--help'):
      _OutputUsageAndExit(command_runner)
    elif o in ('-q', '--quiet'):
      quiet = True
    elif o in ('-v', '--version'):
      version = True

  _ConfigureLogging(quiet)
  if debug >= constants.DEBUGLEVEL_DETAILED:
    config = GetConfig()
    sys.stderr.write('objutil version: %s\n' % objlib.VERSION)
    sys.stderr.write('config_file_list: %s\n' % config.config_file_list)
    # Credentials are deliberately left out of the dump.
    config_items = []
    for section in ('S3', 'ObjUtil'):
      if config.has_section(section):
        config_items.extend(config.items(section))
    sys.stderr.write('config: %s\n' % str(config_items))

  if version:
    sys.stdout.write('objutil version: %s\n' % objlib.VERSION)
    return 0
  if not args:
    _OutputUsageAndExit(command_runner)

  return _RunNamedCommandAndHandleExceptions(command_runner, args[0],
                                             args[1:], debug, quiet)


def _HandleUnknownFailure(e):
  # Called if we fall through all known/handled exceptions. Allows us to
  # print a stacktrace if -D option used.
  if debug >= constants.DEBUGLEVEL_DETAILED:
    stack_trace = traceback.format_exc()
    sys.stderr.write('DEBUG: Exception stack trace:\n    %s\n' %
                     re.sub('\\n', '\n    ', stack_trace))
  _OutputAndExit('Failure: %s.' % e)


def _HandleCommandException(e):
  if e.informational:
    _OutputAndExit(e.reason)
  else:
    _OutputAndExit('CommandException: %s' % e.reason)


def _HandleControlC(signal_num, unused_cur_stack_frame):
  """Called when user hits ^C.

  Prints a brief message instead of the normal Python stack trace (unless -D
  option is used).
  """
  if debug >= constants.DEBUGLEVEL_DETAILED:
    stack_trace = ''.join(traceback.format_list(traceback.extract_stack()))
    _OutputAndExit(
        'DEBUG: Caught signal %d - Exception stack trace:\n'
        '    %s' % (signal_num, re.sub('\\n', '\n    ', stack_trace)))
  else:
    _OutputAndExit('Caught signal %d - exiting' % signal_num)


def _RunNamedCommandAndHandleExceptions(command_runner, command_name, args=None,
                                        debug_level=0, quiet=False):
  """Runs the command, mapping known exceptions to a message and exit 1."""
  try:
    # Catch ^C so we can print a brief message instead of the normal Python
    # stack trace.
    signal.signal(signal.SIGINT, _HandleControlC)
    return command_runner.RunNamedCommand(command_name, args, debug_level,
                                          quiet)
  except CommandException as e:
    _HandleCommandException(e)
  except getopt.GetoptError as e:
    _HandleCommandException(CommandException(e.msg))
  except CopyException as e:
    logging.getLogger(__name__).debug(e.GetDiagnosticString())
    _OutputAndExit('objutil: %s' % e.reason)
  except IOError as e:
    if e.errno == errno.EPIPE:
      # The pipe to stdout or stderr is broken, e.g. because output was piped
      # to a command that doesn't consume all of it. Exit cleanly.
      sys.exit(0)
    _OutputAndExit('%s: %s.' % (e.__class__.__name__, e.strerror or e))
  except Exception as e:  # pylint: disable=broad-except
    _HandleUnknownFailure(e)


if __name__ == '__main__':
  sys.exit(main())
