#!/usr/bin/env python
# coding=utf8
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

'''Setuptools setup.py script for the objutil object storage tool.'''

import os

from setuptools import find_packages
from setuptools import setup

NAME = 'objutil'


def first_token(filename):
  '''Open file, read first line, parse & return first token to caller.'''
  with open(filename, 'r') as f:
    tokens = f.readline().split()
  return tokens[0] if tokens else None


long_desc = '''
objutil is a Python application that copies objects between object storage
services (Amazon S3 and S3-compatible services) and the local filesystem.
A single cp invocation reads the source object once and writes it to one or
more destinations, verifying length and MD5 at each destination.
'''

VERSION = first_token(os.path.join('objlib', 'VERSION'))
if not VERSION:
  exit('ERROR: can\'t find objutil version...exiting.')

requires = [
    'boto3>=1.26.0',
    'botocore>=1.29.0',
]

setup(name=NAME,
      version=VERSION,
      license='Apache 2.0',
      description='objutil - command line utility for object storage copies',
      long_description=long_desc,
      python_requires='>=3.8',
      packages=find_packages(include=['objlib', 'objlib.*']),
      package_data={'objlib': ['VERSION']},
      install_requires=requires,
      extras_require={
          'test': ['pytest'],
      },
      entry_points={
          'console_scripts': [
              'objutil = objlib.__main__:main',
          ],
      },
     )
