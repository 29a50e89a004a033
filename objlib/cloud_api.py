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
"""Storage capability interface used by the copy engine.

The copy engine only reaches storage through a CopyApi: one call resolves a
source URL into a readable SourceHandle, the other resolves a destination URL
into a writable TargetHandle. Concrete providers (file_api.FileApi,
s3_api.S3Api) implement it, and cloud_api_delegator.CloudApiDelegator routes
each URL to the provider for its scheme.
"""


class SourceHandle(object):
  """Readable stream for one source object, with its size and MD5.

  Handles are context managers; close() may be called more than once and only
  releases the underlying stream the first time.
  """

  def __init__(self, url, stream, size, md5_hex):
    """Initializes the handle.

    Args:
      url: StorageUrl the stream was opened for.
      stream: File-like object supporting read(size) and close().
      size: Declared length of the object in bytes.
      md5_hex: Hex-encoded MD5 digest reported by the provider.
    """
    self.url = url
    self.stream = stream
    self.size = size
    self.md5_hex = md5_hex
    self.closed = False

  def read(self, size=None):  # pylint: disable=invalid-name
    return self.stream.read(size)

  def close(self):  # pylint: disable=invalid-name
    if self.closed:
      return
    self.closed = True
    self.stream.close()

  def __enter__(self):
    return self

  def __exit__(self, unused_exc_type, unused_exc_value, unused_traceback):
    self.close()


class TargetHandle(object):
  """Writable stream for one destination object.

  Subclasses implement _Write, _Close and _Abort. close() finalizes the object;
  Abort() releases the handle without ever committing it. Only the first of
  either call has an effect, and writes after it raise ValueError, like writes
  to a closed file.
  """

  def __init__(self, url, md5_hex, size):
    self.url = url
    self.md5_hex = md5_hex
    self.size = size
    self.bytes_written = 0
    self.closed = False

  def write(self, data):  # pylint: disable=invalid-name
    if self.closed:
      raise ValueError('write to closed handle for %s' % self.url.url_string)
    self._Write(data)
    self.bytes_written += len(data)
    return len(data)

  def close(self):  # pylint: disable=invalid-name
    if self.closed:
      return
    self.closed = True
    self._Close()

  def Abort(self):
    """Releases the handle, discarding anything written. Never commits."""
    if self.closed:
      return
    self.closed = True
    self._Abort()

  def IsComplete(self):
    """True if exactly the declared number of bytes has been written."""
    return self.bytes_written == self.size

  def _Write(self, data):
    raise NotImplementedError('_Write must be overloaded')

  def _Close(self):
    raise NotImplementedError('_Close must be overloaded')

  def _Abort(self):
    raise NotImplementedError('_Abort must be overloaded')


class CopyApi(object):
  """Capability interface for acquiring source and target handles."""

  def __init__(self, logger=None, debug=0):
    """Performs necessary setup for interacting with the storage provider.

    Args:
      logger: logging.logger for outputting log messages.
      debug: Debug level for the API implementation (0..3).
    """
    self.logger = logger
    self.debug = debug

  def AcquireSource(self, src_url):
    """Opens a readable handle for an object.

    Args:
      src_url: StorageUrl of the source object.

    Raises:
      ResolutionException: if the storage client cannot be constructed.
      ValidationException: if the bucket does not exist or is inaccessible.
      SourceReadException: if the object cannot be opened for reading.

    Returns:
      SourceHandle with the object's size and MD5.
    """
    raise NotImplementedError('AcquireSource must be overloaded')

  def AcquireTarget(self, dst_url, md5_hex, size):
    """Opens a writable handle for an object.

    Args:
      dst_url: StorageUrl of the destination object.
      md5_hex: Expected hex MD5 of the bytes that will be written.
      size: Expected number of bytes that will be written.

    Raises:
      ResolutionException: if the storage client cannot be constructed.
      ValidationException: if the bucket does not exist or is inaccessible.
      TargetWriteException: if the object cannot be opened for writing.

    Returns:
      TargetHandle primed with md5_hex and size.
    """
    raise NotImplementedError('AcquireTarget must be overloaded')
