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
"""Package marker file."""

import os

import objlib.exception

# Directory containing the objlib module.
OBJLIB_DIR = os.path.abspath(os.path.dirname(__file__))

# Get the version file and store it.
VERSION_FILE = os.path.join(OBJLIB_DIR, 'VERSION')
if not os.path.isfile(VERSION_FILE):
  raise objlib.exception.CommandException(
      'VERSION file not found. Please reinstall objutil from scratch')
with open(VERSION_FILE, 'r') as f:
  VERSION = f.read().strip()
__version__ = VERSION
