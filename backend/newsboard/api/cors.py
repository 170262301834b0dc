"""CORS — headers on every response and OPTIONS short-circuit.

Invariants:
    - Every response, including error responses, carries the CORS headers
    - OPTIONS on any path answers 200 with preflight headers and never dispatches

Design Decisions:
    - Hand-written instead of Starlette's CORSMiddleware: that middleware only
      adds headers when the request carries an Origin, and only answers OPTIONS
      as a preflight when Access-Control-Request-Method is present. Clients
      here expect the headers on every response and a 200 for any OPTIONS
"""

from fastapi import FastAPI, Request, Response

from newsboard.config import Settings

ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"


def cors_headers(settings: Settings) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": "X-Requested-With, Content-Type",
    }


def preflight_headers(settings: Settings) -> dict[str, str]:
    return {
        **cors_headers(settings),
        "Access-Control-Allow-Credentials": "false",
        "Access-Control-Max-Age": "86400",
        "Access-Control-Allow-Headers": (
            "X-Requested-With, X-HTTP-Method-Override, Content-Type, Accept"
        ),
    }


def register_cors(app: FastAPI, settings: Settings) -> None:
    """Install the CORS middleware on app."""

    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=preflight_headers(settings))
        response = await call_next(request)
        response.headers.update(cors_headers(settings))
        return response
