"""Handler Helpers — shared request unpacking and error-to-envelope conversion.

Invariants:
    - A handler never lets a NewsboardError escape; it becomes an Envelope
      carrying the error's http_status and no body
    - Request bodies that are not JSON objects read as empty
"""

import functools
import logging
from typing import Any, Callable

from newsboard.core.domain_types import Envelope
from newsboard.core.errors import NewsboardError

logger = logging.getLogger(__name__)

Handler = Callable[[str, dict], Envelope]


def returns_envelope(handler: Callable[..., Envelope]) -> Callable[..., Envelope]:
    """Convert domain errors raised inside a handler method to bodiless envelopes."""

    @functools.wraps(handler)
    def wrapper(self, path: str, request: dict) -> Envelope:
        try:
            return handler(self, path, request)
        except NewsboardError as exc:
            logger.info(
                f"{handler.__name__} rejected: {exc.message}",
                extra={"error_code": exc.code, "path": path},
            )
            return Envelope(exc.http_status)

    return wrapper


def request_body(request: dict | None) -> dict[str, Any]:
    """The parsed JSON body of request, or {} when absent or not an object."""
    body = (request or {}).get("body")
    return body if isinstance(body, dict) else {}


def nested_object(body: dict, key: str) -> dict[str, Any] | None:
    """body[key] when it is a JSON object, else None."""
    value = body.get(key)
    return value if isinstance(value, dict) else None
