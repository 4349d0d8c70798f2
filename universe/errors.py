from __future__ import annotations

import json
from typing import Any, Dict, List, Tuple

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class DomainError(Exception):
    """Domain-level exception rendered as ``{"error": detail}`` by the app handler."""

    def __init__(
        self,
        detail: str,
        *,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        code: str | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
        self.code = code


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def _domain_error(request: Request, exc: DomainError) -> JSONResponse:
        payload: Dict[str, Any] = {"error": exc.detail}
        if exc.code:
            payload["code"] = exc.code
        return JSONResponse(payload, status_code=exc.status_code)


class ValidationNormalizeMiddleware:
    """Turn FastAPI 422 validation responses into 400 with a short error body."""

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(self, scope: Dict[str, Any], receive: Any, send: Any) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        start: Dict[str, Any] = {}
        body_chunks: List[bytes] = []

        async def send_wrapper(message: Dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                start.update(message)
                return
            if message["type"] != "http.response.body":
                await send(message)
                return

            body_chunks.append(message.get("body", b"") or b"")
            if message.get("more_body"):
                return

            status_code = start.get("status", 500)
            headers: List[Tuple[bytes, bytes]] = list(start.get("headers", []))
            body = b"".join(body_chunks)
            if status_code == 422:
                status_code = 400
                body = json.dumps({"error": "Invalid input."}).encode("utf-8")
                headers = [
                    (key, value)
                    for key, value in headers
                    if key.lower() not in {b"content-length", b"content-type"}
                ]
                headers.append((b"content-type", b"application/json"))
                headers.append((b"content-length", str(len(body)).encode("ascii")))

            await send(
                {"type": "http.response.start", "status": status_code, "headers": headers}
            )
            await send({"type": "http.response.body", "body": body})

        await self.app(scope, receive, send_wrapper)
