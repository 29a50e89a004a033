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
"""File and Cloud URL representation classes."""

import os
import re

from objlib.exception import InvalidUrlError

# Matches provider strings of the form 's3://'.
PROVIDER_REGEX = re.compile(r'(?P<provider>[^:]*)://$')
# Matches bucket strings of the form 's3://bucket'.
BUCKET_REGEX = re.compile(r'(?P<provider>[^:]*)://(?P<bucket>[^/]*)/{0,1}$')
# Matches object strings of the form 's3://bucket/obj'.
OBJECT_REGEX = re.compile(
    r'(?P<provider>[^:]*)://(?P<bucket>[^/]*)/(?P<object>.*)')

FILE_SCHEME = 'file'
S3_SCHEME = 's3'


class StorageUrl(object):
  """Immutable locator for one storage object: scheme, bucket and object."""

  def __init__(self, scheme, bucket_name, object_name):
    self._scheme = scheme
    self._bucket_name = bucket_name
    self._object_name = object_name

  @property
  def scheme(self):
    return self._scheme

  @property
  def bucket_name(self):
    return self._bucket_name

  @property
  def object_name(self):
    return self._object_name

  @property
  def url_string(self):
    if self.IsFileUrl():
      return '%s://%s' % (FILE_SCHEME, self.GetFilePath())
    return '%s://%s/%s' % (self._scheme, self._bucket_name, self._object_name)

  def IsFileUrl(self):
    return self._scheme == FILE_SCHEME

  def IsCloudUrl(self):
    return not self.IsFileUrl()

  def GetFilePath(self):
    """Returns the local path for a file URL."""
    return os.path.join(self._bucket_name, self._object_name)

  def __eq__(self, other):
    return (isinstance(other, StorageUrl) and
            self.url_string == other.url_string)

  def __ne__(self, other):
    return not self == other

  def __hash__(self):
    return hash(self.url_string)

  def __repr__(self):
    return 'StorageUrl(%r)' % self.url_string

  def __str__(self):
    return self.url_string


def StorageUrlFromString(url_str):
  """Static factory function for creating a StorageUrl from a string.

  Plain paths and file:// URLs name local files; the containing directory is
  treated as the bucket and the file name as the object.

  Args:
    url_str: String such as 's3://bucket/key', 'file://dir/name' or
             'dir/name'.

  Returns:
    StorageUrl for the string.

  Raises:
    InvalidUrlError if the string does not name a single object.
  """
  end_scheme_idx = url_str.find('://')
  if end_scheme_idx == -1:
    scheme = FILE_SCHEME
    path = url_str
  else:
    scheme = url_str[0:end_scheme_idx].lower()
    path = url_str[end_scheme_idx + 3:]

  if scheme == FILE_SCHEME:
    if not path or path.endswith(os.sep) or path.endswith('/'):
      raise InvalidUrlError('File URL does not name a file: "%s"' % url_str)
    path = os.path.normpath(path)
    return StorageUrl(FILE_SCHEME, os.path.dirname(path) or os.curdir,
                      os.path.basename(path))

  if not scheme.isalnum():
    raise InvalidUrlError('Unrecognized scheme "%s"' % scheme)
  if PROVIDER_REGEX.match(url_str) or BUCKET_REGEX.match(url_str):
    raise InvalidUrlError(
        'URL does not name an object (expected %s://bucket/object): "%s"' %
        (scheme, url_str))
  object_match = OBJECT_REGEX.match(url_str)
  if not object_match or not object_match.group('bucket'):
    raise InvalidUrlError('Cannot parse URL "%s"' % url_str)
  return StorageUrl(scheme, object_match.group('bucket'),
                    object_match.group('object'))
