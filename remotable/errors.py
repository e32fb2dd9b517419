"""
Failure categories for calls to a remote service.

The tags carry no data of their own. Calling code tells failures apart by
class membership::

    try:
        payload = await client.fetch_tenant(remote_id)
    except RemoteTimeoutError:
        ...
    except RemoteError:
        ...

Nothing stops a class from combining tags; the categories are disjoint in
meaning only.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from fastapi import status

from remotable.logging import get_logger

logger = get_logger(__name__)

# Upstream statuses that mean the remote service cannot answer right now
UNAVAILABLE_STATUSES = frozenset({502, 503})


class RemoteError(Exception):
    """Base tag for anything that went wrong talking to a remote service."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "REMOTE_ERROR"


class RemoteTimeoutError(RemoteError, TimeoutError):
    """The remote service did not answer in time."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    error_code = "REMOTE_TIMEOUT"


class ServiceUnavailableError(RemoteError):
    """The remote service answered, but said it cannot serve the request."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "SERVICE_UNAVAILABLE"


class NetworkError(RemoteError, ConnectionError):
    """The remote service could not be reached."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "NETWORK_ERROR"


def classify_exception(exc: BaseException) -> type[RemoteError] | None:
    """
    Return the tag matching a transport failure, or None if it is not one.

    Exceptions that already carry a tag map to their own class.
    """
    if isinstance(exc, RemoteError):
        return type(exc)

    if isinstance(exc, httpx.TimeoutException):
        return RemoteTimeoutError
    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        if code == status.HTTP_504_GATEWAY_TIMEOUT:
            return RemoteTimeoutError
        if code in UNAVAILABLE_STATUSES:
            return ServiceUnavailableError
        return RemoteError
    if isinstance(exc, httpx.TransportError):
        return NetworkError

    # builtin TimeoutError is an OSError, so it has to be checked first
    if isinstance(exc, TimeoutError):
        return RemoteTimeoutError
    if isinstance(exc, OSError):
        return NetworkError
    return None


@contextmanager
def translate_errors(resource: str) -> Iterator[None]:
    """
    Re-raise transport failures inside the block as tagged errors.

    Unclassified exceptions propagate unchanged.
    """
    try:
        yield
    except RemoteError:
        raise
    except Exception as exc:
        tag = classify_exception(exc)
        if tag is None:
            raise
        logger.warning("Remote call for %s failed (%s): %s", resource, tag.__name__, exc)
        raise tag(f"{resource}: {exc}") from exc
