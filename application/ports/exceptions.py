"""
Application-layer exceptions.

These exceptions are raised by infrastructure adapters and handled by the
services and routers that call them.
"""


class RepositoryUnavailableError(Exception):
    """A backing store could not be reached or rejected the request.

    Raised by repository adapters in place of the client library's own
    errors so callers can decide whether to degrade (lazy dashboard read),
    report (trigger-driven recompute) or fail the request (HTTP 503).
    """

    pass
