"""Culture middleware for Accept-Language header parsing.

Scopes the current culture of a CultureContext to one request:
1. Accept-Language header, matched against the catalog
2. The catalog default culture

Uses pure ASGI middleware to avoid BaseHTTPMiddleware's contextvars issues.
See: https://github.com/encode/starlette/discussions/1729

Only per-thread contexts are scoped. A process-wide context is shared by all
requests, so it is left alone and only reported in Content-Language.
"""

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from rest_localization.cultures.catalog import CultureCatalog
from rest_localization.cultures.context import CultureContext
from rest_localization.cultures.models import CultureContextKind, neutral_culture


def parse_accept_language(header: str | None, catalog: CultureCatalog) -> str | None:
    """Parse Accept-Language header and return the best catalog culture.

    Handles formats like:
    - "de-AT,de;q=0.9,en;q=0.8"
    - "fr"
    - "zh-CN"

    A tag matches a catalog culture exactly (case-insensitive) or, failing
    that, through its neutral language ("de-LI" -> "de").

    Returns:
        The matching catalog culture identifier, or None if no match.
    """
    if not header:
        return None

    # Parse language tags with quality values
    languages: list[tuple[str, float]] = []

    for raw_part in header.split(","):
        part = raw_part.strip()
        if not part:
            continue

        if ";" in part:
            lang, quality_part = part.split(";", 1)
            lang = lang.strip()
            try:
                q_value = float(quality_part.strip().split("=")[1])
            except (IndexError, ValueError):
                q_value = 1.0
        else:
            lang = part
            q_value = 1.0

        if lang and lang != "*" and q_value > 0:
            languages.append((lang, q_value))

    # Stable sort keeps header order among equal quality values
    languages.sort(key=lambda x: x[1], reverse=True)

    for lang, _ in languages:
        for candidate in (lang, neutral_culture(lang)):
            if not candidate:
                continue
            entry = catalog.get_culture(candidate)
            if entry is not None:
                return entry.identifier

    return None


class CultureMiddleware:
    """Pure ASGI middleware to set the request culture from Accept-Language.

    Also adds a Content-Language header to responses.
    """

    def __init__(self, app: ASGIApp, context: CultureContext) -> None:
        self.app = app
        self.context = context

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI interface."""
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        headers: dict[bytes, bytes] = dict(scope.get("headers", []))
        accept_language = headers.get(b"accept-language", b"").decode("utf-8", "ignore")
        culture = (
            parse_accept_language(accept_language, self.context.catalog)
            or self.context.catalog.default_culture
        )

        async def send_with_culture(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = MutableHeaders(raw=list(message.get("headers", [])))
                if "content-language" not in response_headers:
                    response_headers["Content-Language"] = (
                        self.context.current_culture()
                    )
                message["headers"] = response_headers.raw

            await send(message)

        if self.context.kind is CultureContextKind.PROCESS_WIDE:
            await self.app(scope, receive, send_with_culture)
            return

        with self.context.scoped(culture):
            await self.app(scope, receive, send_with_culture)
