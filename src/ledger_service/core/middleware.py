"""ASGI middleware guarding the JSON write endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

JSON_WRITE_PATHS: frozenset[str] = frozenset(
    {
        "/api/signup",
        "/api/signin",
        "/api/generate-account",
        "/api/transaction",
        "/api/transfer",
    }
)


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, "details": {}},
    )


class RequestValidationMiddleware:
    """
    Rejects malformed POSTs to the ledger endpoints before routing.

    A non-JSON Content-Type gets 415 and a body longer than
    ``max_body_size`` gets 413. Accepted bodies are read once and handed
    to the app as a single message.
    """

    def __init__(self, app: ASGIApp, max_body_size: int) -> None:
        self.app = app
        self.max_body_size = max_body_size

    def _guards(self, scope: Scope) -> bool:
        if scope["type"] != "http" or scope["method"] != "POST":
            return False
        return (scope["path"].rstrip("/") or "/") in JSON_WRITE_PATHS

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if not self._guards(scope):
            await self.app(scope, receive, send)
            return

        media_type = Headers(scope=scope).get("content-type", "").split(";")[0].strip().lower()
        if media_type != "application/json":
            response = _error(
                415, "UNSUPPORTED_MEDIA_TYPE", "Content-Type must be application/json"
            )
            await response(scope, receive, send)
            return

        body = bytearray()
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body += message.get("body", b"")
            more_body = message.get("more_body", False)
            if len(body) > self.max_body_size:
                response = _error(
                    413, "PAYLOAD_TOO_LARGE", "Request body exceeds maximum allowed size"
                )
                await response(scope, receive, send)
                return

        pending: list[Message] = [
            {"type": "http.request", "body": bytes(body), "more_body": False},
        ]

        async def replay() -> Message:
            if pending:
                return pending.pop()
            return await receive()

        await self.app(scope, replay, send)
