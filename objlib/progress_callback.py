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
"""Progress display for copies and local hashing.

A transfer reports its progress through ProgressCallbackWithBackoff, which
decides when an update is worth drawing, and FileProgressCallbackHandler,
which draws it. ProgressWriter packages both as a write sink so a copy can
treat the display as one more destination.
"""

import logging
import sys

from objlib.utils.unit_util import MakeHumanReadable

_START_BYTES_PER_CALLBACK = 1024*64
_MAX_BYTES_PER_CALLBACK = 1024*1024*100

# Width of the announce text; leaves room for the counters on an 80 column
# terminal.
MAX_PROGRESS_INDICATOR_COLUMNS = 65


class ProgressCallbackWithBackoff(object):
  """Throttles progress callbacks for one transfer of total_size bytes.

  The callback fires once more than bytes_per_callback bytes have arrived
  since the previous one, and always when the transfer reaches total_size.
  After every calls_per_exponent callbacks the threshold doubles, up to
  max_bytes_per_callback, so long transfers redraw less often.
  """

  def __init__(self, total_size, callback_func,
               start_bytes_per_callback=_START_BYTES_PER_CALLBACK,
               max_bytes_per_callback=_MAX_BYTES_PER_CALLBACK,
               calls_per_exponent=10):
    self.total_size = total_size
    self.callback_func = callback_func
    self.bytes_per_callback = start_bytes_per_callback
    self.max_bytes_per_callback = max_bytes_per_callback
    self.calls_per_exponent = calls_per_exponent
    self.reported_bytes = 0
    self.pending_bytes = 0
    self.calls_at_threshold = 0
    self.done = False

  def Progress(self, bytes_processed):
    """Records bytes_processed more bytes, calling back if one is due."""
    if self.done:
      return
    self.pending_bytes += bytes_processed
    self.done = self.reported_bytes + self.pending_bytes >= self.total_size
    if not self.done and self.pending_bytes <= self.bytes_per_callback:
      return
    self.reported_bytes += self.pending_bytes
    self.pending_bytes = 0
    self.callback_func(min(self.reported_bytes, self.total_size),
                       self.total_size)
    self._BackOff()

  def _BackOff(self):
    self.calls_at_threshold += 1
    if self.calls_at_threshold > self.calls_per_exponent:
      self.bytes_per_callback = min(self.bytes_per_callback * 2,
                                    self.max_bytes_per_callback)
      self.calls_at_threshold = 0


def _AnnounceText(op_string, url_string):
  """Returns '<op> <url>:' padded to MAX_PROGRESS_INDICATOR_COLUMNS.

  The operation name is clipped to 11 characters and padded to 12 so the
  counters line up across lines. A URL too long to fit keeps its tail.
  """
  prefix = op_string[:11].ljust(12)
  room = MAX_PROGRESS_INDICATOR_COLUMNS - len(prefix) - len(': ')
  if len(url_string) > room:
    url_string = '...%s' % url_string[-(room - len('... ')):]
  return ('%s%s:' % (prefix, url_string)).ljust(MAX_PROGRESS_INDICATOR_COLUMNS)


class FileProgressCallbackHandler(object):
  """Draws progress as a single line that every update overwrites.

  Nothing is drawn unless the logger is enabled for INFO, so objutil -q
  silences the display. The line is finished with a newline once a known
  total is reached.
  """

  def __init__(self, op_string, display_url, logger, out_fd=None):
    """Initializes the handler.

    Args:
      op_string: Operation shown at the start of the line, e.g. 'Copying'.
      display_url: StorageUrl of the object being processed.
      logger: Logger whose level decides whether anything is drawn.
      out_fd: Stream to draw on. Defaults to stderr.
    """
    self.announce_text = _AnnounceText(op_string, display_url.url_string)
    self.logger = logger
    self.out_fd = out_fd

  # Matches ProgressCallbackWithBackoff's callback_func.
  def call(self, total_bytes_transferred, total_size):  # pylint: disable=invalid-name
    if not self.logger.isEnabledFor(logging.INFO):
      return
    counters = MakeHumanReadable(total_bytes_transferred)
    if total_size:
      counters = '%s/%s' % (counters, MakeHumanReadable(total_size))
    out_fd = self.out_fd or sys.stderr
    out_fd.write('%s%s    \r' % (self.announce_text, counters))
    if total_size and total_bytes_transferred == total_size:
      out_fd.write('\n')
    out_fd.flush()


class ProgressWriter(object):
  """Write sink that reports copy progress against a known total.

  Participates in a copy as one more writer: every chunk written to the
  destinations is also written here, and only its length is used. Writes
  always succeed; if the progress line cannot be displayed, display is
  disabled for the rest of the copy.
  """

  def __init__(self, total_size, display_url, logger, out_fd=None):
    self.total_size = total_size
    self.bytes_written = 0
    self.logger = logger
    self.handler = FileProgressCallbackHandler('Copying', display_url, logger,
                                               out_fd=out_fd)
    self.backoff = ProgressCallbackWithBackoff(total_size, self.handler.call)
    self.display_enabled = True

  def write(self, data):  # pylint: disable=invalid-name
    self.bytes_written += len(data)
    if self.display_enabled:
      try:
        self.backoff.Progress(len(data))
      except (IOError, OSError, ValueError) as e:
        # ValueError is raised for writes to a closed stream.
        self.display_enabled = False
        self.logger.debug('Disabling progress display: %s', e)
    return len(data)
