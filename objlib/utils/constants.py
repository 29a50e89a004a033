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
"""Shared, hard-coded constants.

A constant should not be placed in this file if:
- it requires complicated or conditional logic to initialize.
- it requires importing any modules outside of the Python standard library.
- it is only used in one file (in which case it should be defined within that
  module).
- it semantically belongs somewhere else (e.g. 'ONE_KIB' belongs in
  unit_util.py).
"""

import sys

# Debug levels selected with -d, -D and -DD.
DEBUGLEVEL_DEBUG = 2
DEBUGLEVEL_DETAILED = 3
DEBUGLEVEL_DUMP_REQUESTS = 4

DEFAULT_FILE_BUFFER_SIZE = 8 * 1024
NO_MAX = sys.maxsize
# Number of bytes read from the source per read call while copying.
TRANSFER_BUFFER_SIZE = 8 * 1024
# Maximum number of chunks buffered between a writer and its upload thread.
UPLOAD_QUEUE_MAX_CHUNKS = 8
