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
"""CopyApi that delegates each call to the provider for the URL's scheme."""

from objlib.cloud_api import CopyApi
from objlib.exception import ResolutionException
from objlib.file_api import FileApi
from objlib.s3_api import S3Api
from objlib.storage_url import FILE_SCHEME
from objlib.storage_url import S3_SCHEME


def GetDefaultApiClassMap():
  """Returns the default mapping of URL scheme to CopyApi class."""
  return {
      FILE_SCHEME: FileApi,
      S3_SCHEME: S3Api,
  }


class CloudApiDelegator(CopyApi):
  """Class that handles delegating requests to storage provider APIs.

  Provider instances are constructed on first use and reused for the
  lifetime of the delegator.
  """

  def __init__(self, logger=None, debug=0, api_class_map=None):
    """Performs necessary setup for delegating API calls.

    Args:
      logger: logging.logger for outputting log messages.
      debug: Debug level for the API implementation (0..3).
      api_class_map: Dict of scheme to CopyApi class (or factory taking
                     logger and debug keyword arguments). Settable for
                     testing/mocking.
    """
    super(CloudApiDelegator, self).__init__(logger=logger, debug=debug)
    self.api_class_map = api_class_map or GetDefaultApiClassMap()
    self.loaded_apis = {}

  def _GetApi(self, url):
    """Returns the CopyApi instance for url's scheme.

    Args:
      url: StorageUrl the call is for.

    Raises:
      ResolutionException: if no provider handles the scheme, or the
                           provider cannot be constructed.

    Returns:
      CopyApi for the scheme.
    """
    scheme = url.scheme
    if scheme not in self.loaded_apis:
      if scheme not in self.api_class_map:
        raise ResolutionException('No storage provider for scheme "%s"' %
                                  scheme, url_string=url.url_string)
      try:
        self.loaded_apis[scheme] = self.api_class_map[scheme](
            logger=self.logger, debug=self.debug)
      except ResolutionException:
        raise
      except Exception as e:
        raise ResolutionException(
            'Unable to initialize %s provider: %s' % (scheme, e),
            url_string=url.url_string) from e
    return self.loaded_apis[scheme]

  def AcquireSource(self, src_url):
    return self._GetApi(src_url).AcquireSource(src_url)

  def AcquireTarget(self, dst_url, md5_hex, size):
    return self._GetApi(dst_url).AcquireTarget(dst_url, md5_hex, size)
