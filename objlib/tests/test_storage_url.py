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
"""Tests for StorageUrl parsing."""

import os

from objlib.exception import InvalidUrlError
from objlib.storage_url import StorageUrl
from objlib.storage_url import StorageUrlFromString
from objlib.tests.testcase import base


class TestStorageUrl(base.ObjUtilTestCase):

  def testCloudUrl(self):
    url = StorageUrlFromString('s3://bucket/dir/obj.txt')
    self.assertEqual('s3', url.scheme)
    self.assertEqual('bucket', url.bucket_name)
    self.assertEqual('dir/obj.txt', url.object_name)
    self.assertEqual('s3://bucket/dir/obj.txt', url.url_string)
    self.assertTrue(url.IsCloudUrl())
    self.assertFalse(url.IsFileUrl())

  def testSchemeIsCaseInsensitive(self):
    self.assertEqual('s3', StorageUrlFromString('S3://bucket/obj').scheme)

  def testPlainPath(self):
    url = StorageUrlFromString(os.path.join('some', 'dir', 'file.txt'))
    self.assertTrue(url.IsFileUrl())
    self.assertEqual(os.path.join('some', 'dir'), url.bucket_name)
    self.assertEqual('file.txt', url.object_name)
    self.assertEqual(os.path.join('some', 'dir', 'file.txt'),
                     url.GetFilePath())
    self.assertEqual('file://%s' % os.path.join('some', 'dir', 'file.txt'),
                     url.url_string)

  def testBareFileName(self):
    url = StorageUrlFromString('file.txt')
    self.assertEqual(os.curdir, url.bucket_name)
    self.assertEqual('file.txt', url.object_name)

  def testFileUrlMatchesPlainPath(self):
    self.assertEqual(StorageUrlFromString('file://dir/f'),
                     StorageUrlFromString('dir/f'))

  def testEqualityAndHash(self):
    a = StorageUrl('s3', 'b', 'o')
    b = StorageUrlFromString('s3://b/o')
    self.assertEqual(a, b)
    self.assertEqual(hash(a), hash(b))
    self.assertNotEqual(a, StorageUrl('s3', 'b', 'other'))
    self.assertEqual(1, len({a, b}))

  def testInvalidUrls(self):
    for url_str in ('s3://', 's3://bucket', 's3://bucket/', 's3:///obj',
                    'dir/', 'file://', 'bad+scheme://bucket/obj'):
      with self.assertRaises(InvalidUrlError, msg=url_str):
        StorageUrlFromString(url_str)
