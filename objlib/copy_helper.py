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
"""Helper functions for copying one source object to one or more targets.

PerformCopy acquires a readable handle for the source, then a writable handle
for every destination, and streams exactly the source's declared length
through a FanOutWriter that duplicates each chunk to all destinations (and
the progress display, unless quiet). Handles are always released before
PerformCopy returns, whatever the outcome.

Results are returned as a (human_readable_error, exception) pair; ('', None)
means the copy succeeded.
"""

import logging

from objlib.exception import CloseException
from objlib.exception import CopyException
from objlib.exception import SourceReadException
from objlib.exception import StreamException
from objlib.exception import TargetWriteException
from objlib.exception import WrapException
from objlib.progress_callback import ProgressWriter
from objlib.utils.constants import TRANSFER_BUFFER_SIZE

SOURCE_READ_FAILED_MESSAGE = 'Unable to read from source'
TARGET_WRITE_FAILED_MESSAGE = 'Unable to write to target'
STREAM_FAILED_MESSAGE = 'Unable to copy data from source to target'
CLOSE_FAILED_MESSAGE = (
    'Unable to close all connections, write may have failed.')


def _GetLogger(logger):
  return logger or logging.getLogger(__name__)


def _AbortQuietly(handle, logger):
  """Aborts handle during cleanup, logging rather than raising any error."""
  try:
    handle.Abort()
  except Exception as e:  # pylint: disable=broad-except
    logger.debug('Ignoring error aborting %s during cleanup: %s',
                 handle.url.url_string, e)


def GetTargetWriters(copy_api, dst_urls, md5_hex, size, logger=None):
  """Acquires one TargetHandle per destination URL, all or nothing.

  Args:
    copy_api: CopyApi used to acquire the handles.
    dst_urls: Ordered list of destination StorageUrls.
    md5_hex: Hex MD5 of the source object.
    size: Length of the source object in bytes.
    logger: For outputting log messages.

  Raises:
    CopyException: if any acquisition fails. Handles acquired before the
                   failure are aborted first, so none of them commits an
                   object. The exception is annotated with the failing URL.

  Returns:
    List of TargetHandles, in the same order as dst_urls.
  """
  logger = _GetLogger(logger)
  target_handles = []
  for dst_url in dst_urls:
    try:
      target_handles.append(copy_api.AcquireTarget(dst_url, md5_hex, size))
    except Exception as e:
      for target_handle in target_handles:
        _AbortQuietly(target_handle, logger)
      raise WrapException(e, TargetWriteException,
                          url_string=dst_url.url_string,
                          failed_url=dst_url.url_string)
  return target_handles


class FanOutWriter(object):
  """Duplicates every write to each of a list of writers, in order.

  The first writer that fails aborts the write; writers after it do not
  receive that chunk.
  """

  def __init__(self, writers):
    self.writers = list(writers)

  def write(self, data):  # pylint: disable=invalid-name
    for writer in self.writers:
      try:
        writer.write(data)
      except Exception as e:
        url = getattr(writer, 'url', None)
        raise StreamException(
            'Write failed: %s' % e,
            url_string=url.url_string if url is not None else None) from e
    return len(data)


def CopyN(dst_fp, src_fp, size, buffer_size=TRANSFER_BUFFER_SIZE,
          src_url=None):
  """Copies exactly size bytes from src_fp to dst_fp.

  Args:
    dst_fp: Object with a write(data) method.
    src_fp: Object with a read(size) method.
    size: Number of bytes to copy.
    buffer_size: Maximum number of bytes to read at a time.
    src_url: StorageUrl of the source, used in error messages.

  Raises:
    StreamException: if a read or write fails, or the source reaches EOF
                     before size bytes were read.

  Returns:
    Number of bytes copied (always size).
  """
  src_url_string = src_url.url_string if src_url is not None else None
  bytes_copied = 0
  while bytes_copied < size:
    try:
      data = src_fp.read(min(buffer_size, size - bytes_copied))
    except Exception as e:
      raise StreamException('Read failed: %s' % e,
                            url_string=src_url_string) from e
    if not data:
      raise StreamException(
          'Source ended after %d of %d bytes' % (bytes_copied, size),
          url_string=src_url_string)
    dst_fp.write(data)
    bytes_copied += len(data)
  return bytes_copied


def CloseTargetWriters(target_handles, logger=None):
  """Closes every handle in order, returning the last close error.

  Args:
    target_handles: List of TargetHandles to close.
    logger: For outputting log messages.

  Returns:
    CloseException for the last handle that failed to close, or None.
  """
  logger = _GetLogger(logger)
  close_error = None
  for target_handle in target_handles:
    try:
      target_handle.close()
    except Exception as e:  # pylint: disable=broad-except
      close_error = CloseException(
          'Unable to close target: %s' % e,
          url_string=target_handle.url.url_string)
      close_error.__cause__ = e
      logger.debug(close_error.GetDiagnosticString())
  return close_error


def _CloseSource(src_handle, logger):
  try:
    src_handle.close()
  except Exception as e:  # pylint: disable=broad-except
    close_error = CloseException('Unable to close source: %s' % e,
                                 url_string=src_handle.url.url_string)
    close_error.__cause__ = e
    logger.debug(close_error.GetDiagnosticString())
    return close_error
  return None


def PerformCopy(copy_api, src_url, dst_urls, quiet=False, logger=None,
                buffer_size=TRANSFER_BUFFER_SIZE, progress_fd=None):
  """Copies one source object to one or more destination objects.

  Args:
    copy_api: CopyApi used to acquire the source and target handles.
    src_url: StorageUrl of the source object.
    dst_urls: Non-empty list of destination StorageUrls.
    quiet: If True, no progress display is constructed.
    logger: For outputting log messages.
    buffer_size: Maximum number of bytes read from the source at a time.
    progress_fd: Stream for the progress display. Defaults to stderr.

  Returns:
    (human_readable_error, exception) tuple. On success this is ('', None);
    on failure human_readable_error is a one-line message for the user and
    exception is a CopyException carrying the diagnostic detail.
  """
  logger = _GetLogger(logger)
  try:
    src_handle = copy_api.AcquireSource(src_url)
  except Exception as e:
    return (SOURCE_READ_FAILED_MESSAGE,
            WrapException(e, SourceReadException,
                          url_string=src_url.url_string,
                          source_url=src_url.url_string))

  stream_error = None
  close_error = None
  try:
    try:
      target_handles = GetTargetWriters(copy_api, dst_urls, src_handle.md5_hex,
                                        src_handle.size, logger=logger)
    except CopyException as e:
      return (TARGET_WRITE_FAILED_MESSAGE, e)

    try:
      writers = list(target_handles)
      if not quiet:
        writers.append(ProgressWriter(src_handle.size, src_url, logger,
                                      out_fd=progress_fd))
      CopyN(FanOutWriter(writers), src_handle, src_handle.size,
            buffer_size=buffer_size, src_url=src_url)
    except CopyException as e:
      stream_error = e
      logger.debug(e.GetDiagnosticString())
    finally:
      close_error = CloseTargetWriters(target_handles, logger=logger)
  finally:
    close_error = _CloseSource(src_handle, logger) or close_error

  if stream_error is not None:
    if close_error is not None:
      stream_error.AddContext(close_error=str(close_error))
      return (CLOSE_FAILED_MESSAGE, stream_error)
    return (STREAM_FAILED_MESSAGE, stream_error)
  if close_error is not None:
    return (CLOSE_FAILED_MESSAGE, close_error)
  return ('', None)
