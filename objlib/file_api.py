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
"""CopyApi implementation for local files.

For file URLs the containing directory plays the role of the bucket. Targets
are written to a temporary file beside the destination and renamed into
place on close, so a destination is only ever replaced by a complete object
whose digest matches the source.
"""

from hashlib import md5
import logging
import os
import tempfile

from objlib.cloud_api import CopyApi
from objlib.cloud_api import SourceHandle
from objlib.cloud_api import TargetHandle
from objlib.exception import SourceReadException
from objlib.exception import TargetWriteException
from objlib.exception import ValidationException
from objlib.hashing_helper import CalculateHashesFromContents
from objlib.hashing_helper import CalculateMd5FromContents
from objlib.hashing_helper import HashingWriteWrapper
from objlib.progress_callback import FileProgressCallbackHandler
from objlib.utils.unit_util import ONE_MIB

# Files at least this large get a progress line while their MD5 is computed.
MIN_SIZE_COMPUTE_LOGGING = 100 * ONE_MIB

TEMP_FILE_PREFIX = '.objutil-'


class FileTargetHandle(TargetHandle):
  """TargetHandle writing to a temporary file that is committed on close."""

  def __init__(self, dst_url, md5_hex, size, logger):
    super(FileTargetHandle, self).__init__(dst_url, md5_hex, size)
    self.logger = logger
    self.final_path = dst_url.GetFilePath()
    fd, self.temp_path = tempfile.mkstemp(
        prefix=TEMP_FILE_PREFIX, dir=os.path.dirname(self.final_path) or None)
    self.fp = HashingWriteWrapper(os.fdopen(fd, 'wb'), md5())

  def _Write(self, data):
    self.fp.write(data)

  def _Close(self):
    try:
      self.fp.close()
    except (IOError, OSError):
      self._Discard()
      raise
    if not self.IsComplete():
      self.logger.debug('Discarding incomplete copy to %s (%d of %d bytes).',
                        self.url.url_string, self.bytes_written, self.size)
      self._Discard()
      return
    digest = self.fp.hexdigest()
    # Multipart ETags ('<hex>-<parts>') are not MD5 digests of the object.
    if self.md5_hex and '-' not in self.md5_hex and digest != self.md5_hex:
      self._Discard()
      raise TargetWriteException(
          'MD5 mismatch: expected %s, computed %s' % (self.md5_hex, digest),
          url_string=self.url.url_string)
    try:
      os.replace(self.temp_path, self.final_path)
    except OSError as e:
      self._Discard()
      raise TargetWriteException(
          'Unable to move copy into place: %s' % e,
          url_string=self.url.url_string) from e

  def _Abort(self):
    try:
      self.fp.close()
    finally:
      self._Discard()

  def _Discard(self):
    try:
      os.unlink(self.temp_path)
    except OSError as e:
      self.logger.debug('Unable to remove %s: %s', self.temp_path, e)


class FileApi(CopyApi):
  """Implements the copy capability interface for the local filesystem."""

  def __init__(self, logger=None, debug=0):
    super(FileApi, self).__init__(
        logger=logger or logging.getLogger(__name__), debug=debug)

  def _ValidateBucket(self, url):
    if not os.path.isdir(url.bucket_name):
      raise ValidationException(
          'Directory %s does not exist' % url.bucket_name,
          url_string=url.url_string)

  def AcquireSource(self, src_url):
    """See CopyApi class for function doc strings."""
    self._ValidateBucket(src_url)
    path = src_url.GetFilePath()
    try:
      fp = open(path, 'rb')
    except (IOError, OSError) as e:
      raise SourceReadException(
          'Unable to open %s: %s' % (path, e.strerror or e),
          url_string=src_url.url_string) from e
    try:
      size = os.fstat(fp.fileno()).st_size
      md5_hex = self._CalculateMd5(fp, src_url, size)
    except (IOError, OSError) as e:
      fp.close()
      raise SourceReadException('Unable to read %s: %s' % (path, e),
                                url_string=src_url.url_string) from e
    return SourceHandle(src_url, fp, size, md5_hex)

  def _CalculateMd5(self, fp, src_url, size):
    if size < MIN_SIZE_COMPUTE_LOGGING:
      return CalculateMd5FromContents(fp)
    self.logger.info('Computing MD5 for %s...', src_url.url_string)
    hash_dict = {'md5': md5()}
    callback = FileProgressCallbackHandler(
        'Hashing', src_url, self.logger).call
    fp.seek(0)
    CalculateHashesFromContents(fp, hash_dict, size=size,
                                progress_func=callback)
    fp.seek(0)
    return hash_dict['md5'].hexdigest()

  def AcquireTarget(self, dst_url, md5_hex, size):
    """See CopyApi class for function doc strings."""
    self._ValidateBucket(dst_url)
    if os.path.isdir(dst_url.GetFilePath()):
      raise TargetWriteException(
          '%s is a directory' % dst_url.GetFilePath(),
          url_string=dst_url.url_string)
    try:
      return FileTargetHandle(dst_url, md5_hex, size, self.logger)
    except (IOError, OSError) as e:
      raise TargetWriteException(
          'Unable to create %s: %s' % (dst_url.GetFilePath(), e),
          url_string=dst_url.url_string) from e
