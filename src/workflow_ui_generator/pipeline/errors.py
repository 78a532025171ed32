"""Error taxonomy for a single pipeline invocation.

Normalization soft-failures and publish timeouts have no exception class: the
first is an empty component, the second a ``TIMED_OUT`` record status.
"""

from __future__ import annotations


class WorkflowUIError(Exception):
    """Base class for errors raised by the generation pipeline."""


class MalformedWorkflowError(WorkflowUIError):
    """The supplied workflow was rejected before any generation call."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class GenerationError(WorkflowUIError):
    """The text-generation service failed for one request."""


class ArchiveError(WorkflowUIError):
    """A project tree could not be serialized into an archive."""


class HostingAPIError(WorkflowUIError):
    """The hosting provider answered with a non-2xx response.

    ``message`` is the provider's own error text, unmodified.
    """

    def __init__(self, status_code: int | None, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
