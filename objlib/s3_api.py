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
"""CopyApi implementation for Amazon S3 and S3-compatible services (boto3).

Reads use get_object. Writes are streamed: each S3TargetHandle starts a
thread running upload_fileobj against a bounded queue of chunks, so bytes
written to the handle are uploaded as they arrive. An upload that does not
receive exactly the declared number of bytes is aborted on close (or by
Abort()) and never creates the object.

A write() that returns has queued its chunk; it has not been accepted by the
service. An upload failure is reported by the next write() or by close(), and
is always attributed to the handle's own URL. The queue holds at most
UPLOAD_QUEUE_MAX_CHUNKS chunks, which bounds how many bytes can be written
after the service has already failed.
"""

import logging
import queue
import threading

import boto3
from botocore.config import Config as BotocoreConfig
from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError
from botocore.exceptions import EndpointConnectionError
from botocore.exceptions import NoCredentialsError

from objlib.cloud_api import CopyApi
from objlib.cloud_api import SourceHandle
from objlib.cloud_api import TargetHandle
from objlib.exception import ResolutionException
from objlib.exception import SourceReadException
from objlib.exception import TargetWriteException
from objlib.exception import ValidationException
from objlib.utils.config_util import GetConfig
from objlib.utils.constants import UPLOAD_QUEUE_MAX_CHUNKS

# How long a blocked queue operation waits before re-checking that the
# upload thread is still alive.
_QUEUE_POLL_SECONDS = 0.5

# Sentinels placed on the chunk queue after the last chunk.
_EOF = object()
_ABORT = object()

# Errors that mean the service could not be reached or authenticated against.
_RESOLUTION_ERRORS = (EndpointConnectionError, NoCredentialsError)


class UploadAbortedError(Exception):
  """Raised to the upload thread when an incomplete upload is abandoned."""


def _StripEtag(etag):
  return (etag or '').strip('"')


class _ChunkQueueReader(object):
  """Non-seekable file-like object fed with chunks by an S3TargetHandle."""

  def __init__(self, max_chunks):
    self.chunk_queue = queue.Queue(maxsize=max_chunks)
    self.pending = bytearray()
    self.eof = False

  def readable(self):  # pylint: disable=invalid-name
    return True

  def seekable(self):  # pylint: disable=invalid-name
    return False

  def read(self, size=-1):  # pylint: disable=invalid-name
    while not self.eof and (size is None or size < 0 or
                            len(self.pending) < size):
      chunk = self.chunk_queue.get()
      if chunk is _EOF:
        self.eof = True
      elif chunk is _ABORT:
        raise UploadAbortedError('Upload abandoned before completion')
      else:
        self.pending.extend(chunk)
    if size is None or size < 0:
      size = len(self.pending)
    data = bytes(self.pending[:size])
    del self.pending[:size]
    return data


class S3TargetHandle(TargetHandle):
  """TargetHandle that streams its bytes to S3 from a background thread."""

  def __init__(self, dst_url, md5_hex, size, client, logger,
               max_chunks=UPLOAD_QUEUE_MAX_CHUNKS):
    super(S3TargetHandle, self).__init__(dst_url, md5_hex, size)
    self.client = client
    self.logger = logger
    self.reader = _ChunkQueueReader(max_chunks)
    self.upload_error = None
    self.upload_thread = threading.Thread(
        target=self._PerformUpload, name='upload %s' % dst_url.url_string)
    self.upload_thread.daemon = True
    self.upload_thread.start()

  def _PerformUpload(self):
    try:
      self.client.upload_fileobj(self.reader, self.url.bucket_name,
                                 self.url.object_name)
    except Exception as e:  # pylint: disable=broad-except
      # Surfaced to the writer by _Write or _Close.
      self.upload_error = e

  def _Enqueue(self, item):
    """Puts item on the chunk queue; returns False if the upload is gone."""
    while self.upload_thread.is_alive():
      try:
        self.reader.chunk_queue.put(item, timeout=_QUEUE_POLL_SECONDS)
        return True
      except queue.Full:
        continue
    return False

  def _RaiseUploadError(self):
    raise TargetWriteException(
        'Upload failed: %s' % (self.upload_error or 'upload thread exited'),
        url_string=self.url.url_string) from self.upload_error

  def _Write(self, data):
    if self.upload_error is not None or not self._Enqueue(bytes(data)):
      self._RaiseUploadError()

  def _Close(self):
    complete = self.IsComplete()
    self._Enqueue(_EOF if complete else _ABORT)
    self.upload_thread.join()
    if not complete:
      self.logger.debug('Abandoned incomplete upload to %s (%d of %d bytes).',
                        self.url.url_string, self.bytes_written, self.size)
      return
    if self.upload_error is not None:
      self._RaiseUploadError()
    self._VerifyUpload()

  def _Abort(self):
    self._Enqueue(_ABORT)
    self.upload_thread.join()
    self.logger.debug('Abandoned upload to %s.', self.url.url_string)

  def _VerifyUpload(self):
    """Checks the uploaded object's size and (single-part) MD5."""
    try:
      response = self.client.head_object(Bucket=self.url.bucket_name,
                                         Key=self.url.object_name)
    except (BotoCoreError, ClientError) as e:
      raise TargetWriteException(
          'Unable to verify upload: %s' % e,
          url_string=self.url.url_string) from e
    problem = None
    if response.get('ContentLength') != self.size:
      problem = 'size mismatch: expected %d, service reports %s' % (
          self.size, response.get('ContentLength'))
    else:
      etag = _StripEtag(response.get('ETag'))
      # Multipart ETags ('<hex>-<parts>') are not MD5 digests of the object.
      if (self.md5_hex and etag and '-' not in etag + self.md5_hex and
          etag != self.md5_hex):
        problem = 'MD5 mismatch: expected %s, service reports %s' % (
            self.md5_hex, etag)
    if problem:
      self._DeleteCorruptObject()
      raise TargetWriteException(problem, url_string=self.url.url_string)

  def _DeleteCorruptObject(self):
    try:
      self.client.delete_object(Bucket=self.url.bucket_name,
                                Key=self.url.object_name)
    except (BotoCoreError, ClientError) as e:
      self.logger.warning('Unable to delete corrupt object %s: %s',
                          self.url.url_string, e)


class S3Api(CopyApi):
  """Implements the copy capability interface for S3 with boto3."""

  def __init__(self, logger=None, debug=0, config=None, client=None):
    """Performs necessary setup for interacting with S3.

    Args:
      logger: logging.logger for outputting log messages.
      debug: Debug level for the API implementation (0..3).
      config: objlib Config to read credentials and endpoint from. Defaults
              to the process-wide config.
      client: Optional pre-built boto3 S3 client. Settable for testing.
    """
    super(S3Api, self).__init__(
        logger=logger or logging.getLogger(__name__), debug=debug)
    self.config = config if config is not None else GetConfig()
    self.client = client

  def _GetClient(self, url):
    if self.client is None:
      session_kwargs = {}
      for option in ('aws_access_key_id', 'aws_secret_access_key',
                     'aws_session_token'):
        value = self.config.get_value('Credentials', option)
        if value:
          session_kwargs[option] = value
      region_name = self.config.get_value('S3', 'region_name')
      if region_name:
        session_kwargs['region_name'] = region_name
      try:
        session = boto3.session.Session(**session_kwargs)
        self.client = session.client(
            's3',
            endpoint_url=self.config.get_value('S3', 'endpoint_url') or None,
            verify=self.config.getbool('S3', 'verify_ssl', True),
            config=BotocoreConfig(retries={'max_attempts': 1}))
      except (BotoCoreError, ValueError) as e:
        raise ResolutionException('Unable to create S3 client: %s' % e,
                                  url_string=url.url_string) from e
      if self.debug >= 2:
        boto3.set_stream_logger('botocore', logging.DEBUG)
    return self.client

  def _ValidateBucket(self, client, url):
    try:
      client.head_bucket(Bucket=url.bucket_name)
    except _RESOLUTION_ERRORS as e:
      raise ResolutionException('Unable to reach S3: %s' % e,
                                url_string=url.url_string) from e
    except (BotoCoreError, ClientError) as e:
      raise ValidationException(
          'Bucket %s does not exist or is not accessible: %s' %
          (url.bucket_name, e), url_string=url.url_string) from e

  def AcquireSource(self, src_url):
    """See CopyApi class for function doc strings."""
    client = self._GetClient(src_url)
    self._ValidateBucket(client, src_url)
    try:
      response = client.get_object(Bucket=src_url.bucket_name,
                                   Key=src_url.object_name)
    except (BotoCoreError, ClientError) as e:
      raise SourceReadException('Unable to read object: %s' % e,
                                url_string=src_url.url_string) from e
    return SourceHandle(src_url, response['Body'], response['ContentLength'],
                        _StripEtag(response.get('ETag')))

  def AcquireTarget(self, dst_url, md5_hex, size):
    """See CopyApi class for function doc strings."""
    client = self._GetClient(dst_url)
    self._ValidateBucket(client, dst_url)
    try:
      return S3TargetHandle(dst_url, md5_hex, size, client, self.logger)
    except RuntimeError as e:
      # Raised if the upload thread cannot be started.
      raise TargetWriteException('Unable to start upload: %s' % e,
                                 url_string=dst_url.url_string) from e
