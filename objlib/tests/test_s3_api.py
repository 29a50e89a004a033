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
"""Unit tests for the boto3-backed S3 CopyApi."""

from hashlib import md5
import io
import logging
from unittest import mock

from botocore.exceptions import ClientError
from botocore.exceptions import EndpointConnectionError
from botocore.exceptions import NoCredentialsError

from objlib import s3_api
from objlib.exception import ResolutionException
from objlib.exception import SourceReadException
from objlib.exception import TargetWriteException
from objlib.exception import ValidationException
from objlib.s3_api import _ChunkQueueReader
from objlib.s3_api import _EOF
from objlib.s3_api import S3Api
from objlib.s3_api import UploadAbortedError
from objlib.storage_url import StorageUrlFromString
from objlib.tests.testcase import base
from objlib.utils.config_util import Config
from objlib.utils.constants import UPLOAD_QUEUE_MAX_CHUNKS


def _ClientError(code, operation_name):
  return ClientError({'Error': {'Code': code, 'Message': code}},
                     operation_name)


class TestChunkQueueReader(base.ObjUtilTestCase):

  def testReadsAcrossChunks(self):
    reader = _ChunkQueueReader(8)
    for item in (b'abc', b'def', _EOF):
      reader.chunk_queue.put(item)
    self.assertEqual(b'abcd', reader.read(4))
    self.assertEqual(b'ef', reader.read())
    self.assertEqual(b'', reader.read(10))
    self.assertTrue(reader.readable())
    self.assertFalse(reader.seekable())

  def testAbort(self):
    reader = _ChunkQueueReader(8)
    reader.chunk_queue.put(b'abc')
    reader.chunk_queue.put(s3_api._ABORT)  # pylint: disable=protected-access
    with self.assertRaises(UploadAbortedError):
      reader.read()


class TestS3Api(base.ObjUtilTestCase):
  """Tests for S3Api against a mocked boto3 client."""

  def setUp(self):
    super(TestS3Api, self).setUp()
    self.uploads = {}
    self.client = mock.Mock()
    self.client.upload_fileobj.side_effect = self._FakeUpload
    self.client.head_object.side_effect = self._FakeHeadObject
    self.api = S3Api(logger=logging.getLogger('s3-api-test'),
                     config=Config(), client=self.client)
    self.contents = b'0123456789' * 10
    self.md5_hex = md5(self.contents).hexdigest()
    self.url = StorageUrlFromString('s3://bucket/dir/key')

  def _FakeUpload(self, fileobj, bucket, key):
    self.uploads[(bucket, key)] = fileobj.read()

  def _FakeHeadObject(self, Bucket, Key):  # pylint: disable=invalid-name
    data = self.uploads[(Bucket, Key)]
    return {'ContentLength': len(data),
            'ETag': '"%s"' % md5(data).hexdigest()}

  def testAcquireSource(self):
    self.client.get_object.return_value = {
        'Body': io.BytesIO(self.contents),
        'ContentLength': len(self.contents),
        'ETag': '"%s"' % self.md5_hex,
    }
    with self.api.AcquireSource(self.url) as src:
      self.assertEqual(len(self.contents), src.size)
      self.assertEqual(self.md5_hex, src.md5_hex)
      self.assertEqual(self.contents, src.read())
    self.client.head_bucket.assert_called_once_with(Bucket='bucket')
    self.client.get_object.assert_called_once_with(Bucket='bucket',
                                                   Key='dir/key')

  def testAcquireSourceMissingBucket(self):
    self.client.head_bucket.side_effect = _ClientError('404', 'HeadBucket')
    with self.assertRaises(ValidationException) as cm:
      self.api.AcquireSource(self.url)
    self.assertEqual('s3://bucket/dir/key', cm.exception.url_string)
    self.client.get_object.assert_not_called()

  def testAcquireSourceMissingObject(self):
    self.client.get_object.side_effect = _ClientError('NoSuchKey',
                                                      'GetObject')
    with self.assertRaises(SourceReadException) as cm:
      self.api.AcquireSource(self.url)
    self.assertIsInstance(cm.exception.__cause__, ClientError)

  def testUnreachableEndpoint(self):
    self.client.head_bucket.side_effect = EndpointConnectionError(
        endpoint_url='http://localhost:1')
    with self.assertRaises(ResolutionException):
      self.api.AcquireTarget(self.url, self.md5_hex, len(self.contents))

  def testMissingCredentials(self):
    self.client.head_bucket.side_effect = NoCredentialsError()
    with self.assertRaises(ResolutionException):
      self.api.AcquireSource(self.url)

  def testUpload(self):
    dst = self.api.AcquireTarget(self.url, self.md5_hex, len(self.contents))
    for i in range(0, len(self.contents), 30):
      dst.write(self.contents[i:i + 30])
    dst.close()
    self.assertEqual(self.contents, self.uploads[('bucket', 'dir/key')])
    self.client.head_object.assert_called_once_with(Bucket='bucket',
                                                    Key='dir/key')
    self.client.delete_object.assert_not_called()

  def testEmptyUpload(self):
    dst = self.api.AcquireTarget(self.url, md5(b'').hexdigest(), 0)
    dst.close()
    self.assertEqual(b'', self.uploads[('bucket', 'dir/key')])

  def testIncompleteUploadIsAbandoned(self):
    dst = self.api.AcquireTarget(self.url, self.md5_hex, len(self.contents))
    dst.write(self.contents[:10])
    dst.close()
    self.assertNotIn(('bucket', 'dir/key'), self.uploads)
    self.assertIsInstance(dst.upload_error, UploadAbortedError)
    self.client.head_object.assert_not_called()

  def testUploadQueueIsBounded(self):
    dst = self.api.AcquireTarget(self.url, self.md5_hex, len(self.contents))
    self.assertEqual(UPLOAD_QUEUE_MAX_CHUNKS, dst.reader.chunk_queue.maxsize)
    self.assertLessEqual(UPLOAD_QUEUE_MAX_CHUNKS, 8)
    dst.Abort()

  def testAbortOfEmptyUploadCreatesNothing(self):
    dst = self.api.AcquireTarget(self.url, md5(b'').hexdigest(), 0)
    self.assertTrue(dst.IsComplete())
    dst.Abort()
    self.assertFalse(dst.upload_thread.is_alive())
    self.assertNotIn(('bucket', 'dir/key'), self.uploads)
    self.assertIsInstance(dst.upload_error, UploadAbortedError)
    self.client.head_object.assert_not_called()

  def testUploadFailureSurfacesOnWrite(self):
    self.client.upload_fileobj.side_effect = _ClientError('AccessDenied',
                                                          'PutObject')
    dst = self.api.AcquireTarget(self.url, self.md5_hex, len(self.contents))
    dst.upload_thread.join()
    with self.assertRaises(TargetWriteException) as cm:
      dst.write(self.contents)
    self.assertIsInstance(cm.exception.__cause__, ClientError)
    dst.close()

  def testUploadFailureSurfacesOnClose(self):
    self.client.upload_fileobj.side_effect = _ClientError('AccessDenied',
                                                          'PutObject')
    dst = self.api.AcquireTarget(self.url, md5(b'').hexdigest(), 0)
    with self.assertRaises(TargetWriteException):
      dst.close()

  def testVerifyMd5Mismatch(self):
    dst = self.api.AcquireTarget(self.url, md5(b'other').hexdigest(),
                                 len(self.contents))
    dst.write(self.contents)
    with self.assertRaises(TargetWriteException) as cm:
      dst.close()
    self.assertIn('MD5 mismatch', cm.exception.reason)
    self.client.delete_object.assert_called_once_with(Bucket='bucket',
                                                      Key='dir/key')

  def testVerifySizeMismatch(self):
    self.client.head_object.side_effect = None
    self.client.head_object.return_value = {'ContentLength': 1,
                                            'ETag': '"%s"' % self.md5_hex}
    dst = self.api.AcquireTarget(self.url, self.md5_hex, len(self.contents))
    dst.write(self.contents)
    with self.assertRaises(TargetWriteException) as cm:
      dst.close()
    self.assertIn('size mismatch', cm.exception.reason)

  def testMultipartEtagIsNotCompared(self):
    self.client.head_object.side_effect = None
    self.client.head_object.return_value = {
        'ContentLength': len(self.contents), 'ETag': '"0123abcd-2"'}
    dst = self.api.AcquireTarget(self.url, self.md5_hex, len(self.contents))
    dst.write(self.contents)
    dst.close()
    self.client.delete_object.assert_not_called()

  def testMultipartSourceEtagIsNotCompared(self):
    dst = self.api.AcquireTarget(self.url, '0123abcd-3', len(self.contents))
    dst.write(self.contents)
    dst.close()
    self.assertEqual(self.contents, self.uploads[('bucket', 'dir/key')])
    self.client.delete_object.assert_not_called()


class TestS3ApiClient(base.ObjUtilTestCase):
  """Tests for building the boto3 client from config."""

  def setUp(self):
    super(TestS3ApiClient, self).setUp()
    config_path = self.CreateTempFile(contents=(
        b'[Credentials]\n'
        b'aws_access_key_id = AKIDEXAMPLE\n'
        b'aws_secret_access_key = secret%value\n'
        b'[S3]\n'
        b'endpoint_url = http://localhost:9000\n'
        b'region_name = eu-west-1\n'
        b'verify_ssl = false\n'))
    self.config = Config([config_path])
    self.url = StorageUrlFromString('s3://bucket/key')

  def testClientFromConfig(self):
    with mock.patch.object(s3_api.boto3.session, 'Session') as session_class:
      api = S3Api(config=self.config)
      client = api._GetClient(self.url)  # pylint: disable=protected-access
      # The client is built once and reused.
      self.assertIs(client, api._GetClient(self.url))  # pylint: disable=protected-access
    session_class.assert_called_once_with(
        aws_access_key_id='AKIDEXAMPLE',
        aws_secret_access_key='secret%value',
        region_name='eu-west-1')
    session = session_class.return_value
    self.assertIs(session.client.return_value, client)
    args, kwargs = session.client.call_args
    self.assertEqual(('s3',), args)
    self.assertEqual('http://localhost:9000', kwargs['endpoint_url'])
    self.assertFalse(kwargs['verify'])

  def testClientConstructionFailure(self):
    with mock.patch.object(s3_api.boto3.session, 'Session') as session_class:
      session_class.return_value.client.side_effect = ValueError(
          'Invalid endpoint: localhost:9000')
      api = S3Api(config=self.config)
      with self.assertRaises(ResolutionException) as cm:
        api.AcquireSource(self.url)
    self.assertEqual('s3://bucket/key', cm.exception.url_string)

  def testDefaultsWithEmptyConfig(self):
    with mock.patch.object(s3_api.boto3.session, 'Session') as session_class:
      S3Api(config=Config())._GetClient(self.url)  # pylint: disable=protected-access
    session_class.assert_called_once_with()
    kwargs = session_class.return_value.client.call_args[1]
    self.assertIsNone(kwargs['endpoint_url'])
    self.assertTrue(kwargs['verify'])
