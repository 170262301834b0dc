"""Resource Transport — catch-all route feeding every request to the dispatcher.

Invariants:
    - GET and DELETE are dispatched with body None; other methods have their
      raw body parsed as JSON first (empty body -> None)
    - Invalid JSON raises MalformedBodyError (400) before dispatch
    - Envelope status is written verbatim; a None body becomes empty content
    - A successful non-GET request schedules a snapshot save as a background
      task, unless persistence is disabled (test mode)
"""

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Request, Response

from newsboard.core.domain_types import Envelope, HttpMethod
from newsboard.core.errors import ErrorContext, MalformedBodyError
from newsboard.core.store_snapshot import store_to_snapshot
from newsboard.infrastructure.persistence import save_in_background

logger = logging.getLogger(__name__)
router = APIRouter(tags=["resources"])

_BODYLESS_METHODS = frozenset({HttpMethod.GET.value, HttpMethod.DELETE.value})


def parse_json_body(raw: bytes, method: str, path: str) -> object | None:
    """Decode a JSON request body. Empty bodies parse to None."""
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedBodyError(
            str(e), ErrorContext(method=method, path=path),
        )


def envelope_to_response(envelope: Envelope) -> Response:
    if envelope.body is None:
        return Response(status_code=envelope.status)
    return Response(
        content=json.dumps(envelope.body, ensure_ascii=False),
        status_code=envelope.status,
        media_type="application/json",
    )


@router.api_route(
    "/{path:path}", methods=["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "TRACE"],
)
async def dispatch_request(request: Request, background_tasks: BackgroundTasks):
    """Dispatch any resource request and write back its envelope."""
    method = request.method
    path = request.url.path
    body = None
    if method not in _BODYLESS_METHODS:
        body = parse_json_body(await request.body(), method, path)

    state = request.app.state
    envelope = state.dispatcher.dispatch(method, path, body)

    if (
        state.persistence is not None
        and method != HttpMethod.GET.value
        and envelope.status < 400
    ):
        background_tasks.add_task(
            save_in_background, state.persistence,
            store_to_snapshot(state.store), next(state.save_generations),
        )
    return envelope_to_response(envelope)
