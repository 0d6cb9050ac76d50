"""
File: middleware.py
Purpose: ASGI timing middleware recording http_request_duration_seconds per request.

The timer starts on request entry and is stopped in a finally block around the
downstream app, so every request is observed exactly once whether the handler
returned, raised, or the client went away.
"""

import asyncio
import logging

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .histogram import HistogramInstrument

log = logging.getLogger(__name__)

# recorded when the app raised before a response was started
SERVER_ERROR = 500
# recorded when the request was cancelled (client disconnect) before a response was started
CLIENT_CLOSED_REQUEST = 499


def route_label(scope: Scope) -> str:
    """Matched route template (e.g. /items/{id}), or the raw path if nothing matched."""
    route = scope.get("route")
    template = getattr(route, "path", None)
    return template or scope.get("path") or "/"


class TimingMiddleware:
    """Time each HTTP request and observe it into the request-duration histogram."""

    def __init__(self, app: ASGIApp, histogram: HistogramInstrument):
        self.app = app
        self.histogram = histogram

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        timer = self.histogram.start_timer()
        status_code = None
        cancelled = False

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except asyncio.CancelledError:
            cancelled = True
            raise
        finally:
            if status_code is None:
                status_code = CLIENT_CLOSED_REQUEST if cancelled else SERVER_ERROR
            duration = timer.stop(
                {"method": scope["method"], "route": route_label(scope), "code": status_code}
            )
            log.debug("%s %s %s %.4fs", scope["method"], scope.get("path"), status_code, duration)
