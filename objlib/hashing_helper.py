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
"""MD5 helpers for local files and for bytes as they are written."""

from hashlib import md5

from objlib.progress_callback import ProgressCallbackWithBackoff
from objlib.utils.constants import DEFAULT_FILE_BUFFER_SIZE


def CalculateMd5FromContents(fp):
  """Returns the hex MD5 of everything in fp, leaving fp rewound to 0."""
  hash_dict = {'md5': md5()}
  fp.seek(0)
  CalculateHashesFromContents(fp, hash_dict)
  fp.seek(0)
  return hash_dict['md5'].hexdigest()


def CalculateHashesFromContents(fp, hash_dict, size=None, progress_func=None):
  """Feeds the rest of fp to every digester in hash_dict.

  Args:
    fp: Open binary file; it is read to EOF from its current position.
    hash_dict: Dict of name to hashlib-style digester, updated in place.
    size: Number of bytes expected, needed when progress_func is given.
    progress_func: Optional func(bytes_so_far, size), throttled with
                   ProgressCallbackWithBackoff.
  """
  backoff = None
  if progress_func:
    backoff = ProgressCallbackWithBackoff(size, progress_func)
  data = fp.read(DEFAULT_FILE_BUFFER_SIZE)
  while data:
    for digester in hash_dict.values():
      digester.update(data)
    if backoff:
      backoff.Progress(len(data))
    data = fp.read(DEFAULT_FILE_BUFFER_SIZE)


class HashingWriteWrapper(object):
  """Wraps an output stream, digesting every byte written through it."""

  def __init__(self, stream, hash_alg=None):
    self.orig_fp = stream
    self.digester = hash_alg or md5()
    self.bytes_written = 0

  def write(self, data):  # pylint: disable=invalid-name
    self.orig_fp.write(data)
    self.digester.update(data)
    self.bytes_written += len(data)
    return len(data)

  def hexdigest(self):  # pylint: disable=invalid-name
    return self.digester.hexdigest()

  def close(self):  # pylint: disable=invalid-name
    self.orig_fp.close()
