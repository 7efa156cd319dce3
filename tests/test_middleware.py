"""
Unit tests for the request culture middleware.
"""
import asyncio

from rest_localization.cultures import CultureMiddleware, parse_accept_language


def _run(middleware, headers):
    scope = {"type": "http", "headers": headers}
    sent = []

    async def receive():
        return {"type": "http.request"}

    async def send(message):
        sent.append(message)

    asyncio.run(middleware(scope, receive, send))
    return scope, sent


class TestParseAcceptLanguage:
    """Tests for parse_accept_language function"""

    def test_quality_order(self, catalog):
        assert parse_accept_language("de-CH;q=0.8, zh", catalog) == "zh"

    def test_wildcard_and_zero_quality_skipped(self, catalog):
        assert parse_accept_language("*, zh;q=0, de-AT;q=0.1", catalog) == "de-AT"

    def test_no_match(self, catalog):
        assert parse_accept_language("fr, it", catalog) is None
        assert parse_accept_language("", catalog) is None


class TestCultureMiddleware:
    """Tests for CultureMiddleware"""

    def test_request_culture_scoped(self, context):
        seen = []

        async def app(scope, receive, send):
            seen.append(context.current_culture())
            await send({"type": "http.response.start", "status": 200, "headers": []})
            await send({"type": "http.response.body", "body": b""})

        scope, sent = _run(
            CultureMiddleware(app, context), [(b"accept-language", b"de-AT")]
        )

        assert seen == ["de-AT"]
        assert (b"content-language", b"de-AT") in sent[0]["headers"]
        assert "state" not in scope
        assert context.current_culture() == "en-US"

    def test_existing_content_language_kept(self, context):
        async def app(scope, receive, send):
            headers = [(b"content-language", b"zh")]
            start = {"type": "http.response.start", "status": 200, "headers": headers}
            await send(start)
            await send({"type": "http.response.body", "body": b""})

        _, sent = _run(CultureMiddleware(app, context), [])

        assert sent[0]["headers"] == [(b"content-language", b"zh")]

    def test_process_wide_context_not_scoped(self, process_context):
        process_context.set_current_culture("zh")
        seen = []

        async def app(scope, receive, send):
            seen.append(process_context.current_culture())

        _run(CultureMiddleware(app, process_context), [(b"accept-language", b"de")])

        assert seen == ["zh"]
