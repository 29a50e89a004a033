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
"""objutil exceptions.

Copy failures are reported with a CopyException subclass. Each exception
carries the url string of the locator that caused it, plus a list of context
annotations added as the exception crosses component boundaries, so that the
debug output traces which source or destination failed.
"""


class CommandException(Exception):
  """Exception raised when a problem is encountered running a command.

  This exception should be used to signal user errors or system failures
  (like timeouts), not bugs (like an incorrect param value). For the
  latter you should raise Exception so we can see where/how it happened
  via objutil -D (which will include a stack trace for raised Exceptions).
  """

  def __init__(self, reason, informational=False):
    """Instantiate a CommandException.

    Args:
      reason: Text describing the problem.
      informational: Indicates reason should be printed as FYI, not a failure.
    """
    super(CommandException, self).__init__()
    self.reason = reason
    self.informational = informational

  def __repr__(self):
    return str(self)

  def __str__(self):
    return 'CommandException: %s' % self.reason


class InvalidUrlError(Exception):
  """Exception raised when a string cannot be parsed as a storage URL."""

  def __init__(self, message):
    super(InvalidUrlError, self).__init__(message)
    self.message = message


class CopyException(Exception):
  """Base exception for failures while copying an object."""

  def __init__(self, reason, url_string=None):
    super(CopyException, self).__init__()
    self.reason = reason
    self.url_string = url_string
    self.context = []

  def AddContext(self, **kwargs):
    """Records a context annotation and returns self, for chaining."""
    self.context.append(kwargs)
    return self

  def GetDiagnosticString(self):
    """Returns a multi-line description including context and causes."""
    lines = [str(self)]
    for annotation in self.context:
      lines.append('  context: %s' % ', '.join(
          '%s=%s' % (k, annotation[k]) for k in sorted(annotation)))
    cause = self.__cause__
    while cause is not None:
      if isinstance(cause, CopyException):
        lines.append('caused by: %s' % cause.GetDiagnosticString())
        break
      lines.append('caused by: %s: %s' % (cause.__class__.__name__, cause))
      cause = cause.__cause__
    return '\n'.join(lines)

  def __repr__(self):
    return str(self)

  def __str__(self):
    if self.url_string:
      return '%s: %s (%s)' % (self.__class__.__name__, self.reason,
                              self.url_string)
    return '%s: %s' % (self.__class__.__name__, self.reason)


class ResolutionException(CopyException):
  """The storage client for a URL could not be constructed."""


class ValidationException(CopyException):
  """The bucket named by a URL does not exist or is not accessible."""


class SourceReadException(CopyException):
  """A readable handle for the source object could not be acquired."""


class TargetWriteException(CopyException):
  """A writable handle for a destination object could not be acquired."""


class StreamException(CopyException):
  """Transferring bytes from the source to the destinations failed."""


class CloseException(CopyException):
  """Releasing a handle after the transfer attempt failed."""


def WrapException(e, exception_class, url_string=None, **context):
  """Annotates e with context, wrapping it if it is not a CopyException.

  Args:
    e: The exception to annotate.
    exception_class: CopyException subclass used to wrap e when e is not
                     already a CopyException.
    url_string: URL string of the locator the failure is attributed to.
    **context: Annotations to record on the returned exception.

  Returns:
    A CopyException carrying the annotations. If e was wrapped, the new
    exception has e as its __cause__.
  """
  if isinstance(e, CopyException):
    if url_string and not e.url_string:
      e.url_string = url_string
    if context:
      e.AddContext(**context)
    return e
  wrapped = exception_class(str(e) or e.__class__.__name__,
                            url_string=url_string)
  wrapped.__cause__ = e
  if context:
    wrapped.AddContext(**context)
  return wrapped
