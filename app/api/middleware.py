import logging

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """
    Rechaza con 413 los requests cuyo body supera el límite.

    Si ``Content-Length`` ya excede el límite se responde sin leer nada. En
    otro caso (incluido chunked, sin ``Content-Length``) el body se acumula
    contando bytes y se corta apenas pasa el límite; lo leído se reentrega a
    la app tal cual. ``path_limits`` permite un límite distinto por path
    exacto (``/flight`` acepta cuerpos más grandes).
    """

    def __init__(self, app, max_body_bytes: int, path_limits: dict[str, int] | None = None):
        self.app = app
        self.max_body_bytes = max_body_bytes
        self.path_limits = path_limits or {}

    def limit_for(self, path: str) -> int:
        return self.path_limits.get(path.rstrip("/") or "/", self.max_body_bytes)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope["path"]
        limit = self.limit_for(path)
        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > limit:
            await self._reject(scope, receive, send, path, int(content_length), limit)
            return

        messages = []
        received = 0
        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > limit:
                await self._reject(scope, receive, send, path, received, limit)
                return
            if not message.get("more_body", False):
                break

        async def replay_receive():
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay_receive, send)

    async def _reject(self, scope, receive, send, path: str, size: int, limit: int) -> None:
        logger.warning(
            "Request body too large",
            extra={"path": path, "body_bytes": size, "limit": limit},
        )
        response = JSONResponse(
            status_code=413,
            content={
                "error": "PAYLOAD_TOO_LARGE",
                "message": "Corpo da requisição excede o limite permitido.",
                "maxBytes": limit,
            },
        )
        await response(scope, receive, send)
