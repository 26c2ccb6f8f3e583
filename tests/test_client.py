"""Unit tests for the TexTra API client."""

import json
import logging
from urllib.parse import parse_qs

import httpx
import pytest

from textra.translation import (
    API_URL,
    ConfigurationError,
    EncodingError,
    FailureKind,
    Mode,
    ParseError,
    SigningError,
    TextraApiClient,
    TextraConfig,
    TextraOptions,
    authenticate,
    configure,
    derive_access_url,
    parse_translation,
)

BASE_URL = "https://textra.example/api/mt/"


@pytest.fixture
def options():
    """Provide valid general ja to en options."""
    return configure("alice", "api-key", "api-secret", Mode.GENERAL, "ja", "en")


def make_client(handler):
    """Build a client whose HTTP traffic goes to ``handler``."""
    return TextraApiClient(
        TextraConfig(base_url=BASE_URL), transport=httpx.MockTransport(handler)
    )


def respond(status_code, payload=None, text=None):
    def handler(request):
        if payload is not None:
            return httpx.Response(status_code, json=payload)
        return httpx.Response(status_code, text=text or "")

    return handler


class TestDeriveAccessUrl:
    """Tests for access URL construction."""

    def test_general(self, options):
        """Mode slug and languages are joined with underscores."""
        assert derive_access_url(options) == API_URL + "general_ja_en/"

    def test_patent_claim_slug(self):
        """Underscores in the mode name become hyphens."""
        opts = TextraOptions(mode=Mode.PATENT_CLAIM, source_lang="zh-cn", target_lang="JA")
        assert derive_access_url(opts, BASE_URL) == BASE_URL + "patent-claim_zh-CN_ja/"

    def test_deterministic(self, options):
        """The same options always produce the same URL."""
        assert derive_access_url(options, BASE_URL) == derive_access_url(options, BASE_URL)

    def test_base_url_without_trailing_slash(self, options):
        """A missing trailing slash on the base URL is tolerated."""
        assert derive_access_url(options, BASE_URL.rstrip("/")) == BASE_URL + "general_ja_en/"

    def test_requires_mode_and_languages(self):
        """Incomplete options cannot produce a URL."""
        with pytest.raises(ConfigurationError):
            derive_access_url(TextraOptions(mode=Mode.GENERAL))


class TestAuthenticate:
    """Tests for request encoding and OAuth1 signing."""

    def test_form_body(self):
        """The body carries key, name, type and text form fields."""
        signed = authenticate(BASE_URL, "alice", "api-key", "api-secret", "こんにちは 世界")
        fields = parse_qs(signed.body)
        assert fields == {
            "key": ["api-key"],
            "name": ["alice"],
            "type": ["json"],
            "text": ["こんにちは 世界"],
        }
        assert signed.headers["Content-Type"] == "application/x-www-form-urlencoded"

    def test_oauth_header(self):
        """The request is signed with the API key as consumer key and no token."""
        signed = authenticate(BASE_URL, "alice", "api-key", "api-secret", "hello")
        auth = signed.headers["Authorization"]
        assert auth.startswith("OAuth ")
        assert 'oauth_consumer_key="api-key"' in auth
        assert 'oauth_signature_method="HMAC-SHA1"' in auth
        assert "oauth_signature=" in auth
        assert "oauth_token=" not in auth
        assert signed.url == BASE_URL

    def test_missing_secret(self):
        """Signing without a secret fails."""
        with pytest.raises(SigningError):
            authenticate(BASE_URL, "alice", "api-key", None, "hello")

    def test_unencodable_text(self):
        """Lone surrogates cannot be UTF-8 encoded."""
        with pytest.raises(EncodingError):
            authenticate(BASE_URL, "alice", "api-key", "api-secret", "bad \ud800")

    def test_relative_url_cannot_be_signed(self):
        """Signing needs an absolute URL."""
        with pytest.raises(SigningError):
            authenticate("general_ja_en/", "alice", "api-key", "api-secret", "hello")


class TestParseTranslation:
    """Tests for response body parsing."""

    def test_extracts_text(self):
        """The nested text field is returned."""
        assert parse_translation('{"resultset":{"result":{"text":"Hello"}}}') == "Hello"

    @pytest.mark.parametrize(
        "body",
        [
            "not json",
            "{}",
            '{"resultset":{}}',
            '{"resultset":{"result":null}}',
            '{"resultset":{"result":{"text":42}}}',
            "[]",
            "[" * 100000 + "]" * 100000,
        ],
    )
    def test_rejects_malformed(self, body):
        """Anything but a string at resultset.result.text is a parse error."""
        with pytest.raises(ParseError):
            parse_translation(body)


class TestTextraApiClient:
    """Tests for transport timeouts and retries."""

    @pytest.fixture
    def transport_calls(self, monkeypatch):
        """Record how the default HTTP transport is constructed."""
        calls = []

        def fake_transport(**kwargs):
            calls.append(kwargs)
            return httpx.MockTransport(respond(200, {"resultset": {"result": {"text": "x"}}}))

        monkeypatch.setattr(httpx, "HTTPTransport", fake_transport)
        return calls

    def test_default_timeouts_and_retries(self, transport_calls):
        """Defaults are a 120 s connect and 600 s read timeout with 3 retries."""
        with TextraApiClient() as client:
            assert client._client.timeout == httpx.Timeout(600.0, connect=120.0)
        assert transport_calls == [{"retries": 3}]

    def test_config_is_passed_through(self, transport_calls):
        """Custom timeouts and retries reach the HTTP client."""
        config = TextraConfig(connect_timeout=5.0, read_timeout=30.0, retries=1)
        with TextraApiClient(config) as client:
            timeout = client._client.timeout
        assert timeout.connect == 5.0
        assert timeout.read == 30.0
        assert transport_calls == [{"retries": 1}]

    def test_injected_transport_skips_default(self, transport_calls):
        """An explicit transport replaces the retrying default."""
        with make_client(respond(200, {"resultset": {"result": {"text": "x"}}})):
            pass
        assert transport_calls == []

    def test_deeply_nested_body_is_no_result(self, options):
        """Pathologically nested JSON is reported as a parse failure."""
        client = make_client(respond(200, text="[" * 200000 + "]" * 200000))
        result = client.request_translation(options, "hello")

        assert result.failure is FailureKind.PARSE
        assert client.translate(options, "hello") is None


class TestTranslate:
    """End-to-end tests against a mocked HTTP transport."""

    def test_success(self, options):
        """A 200 response with a translation returns the text."""
        client = make_client(respond(200, {"resultset": {"result": {"text": "Hello"}}}))
        assert client.translate(options, "こんにちは") == "Hello"

    def test_sends_signed_form_post(self, options):
        """The outbound request is a signed form POST to the access URL."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"resultset": {"result": {"text": "Hello"}}})

        make_client(handler).translate(options, "こんにちは")

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == BASE_URL + "general_ja_en/"
        assert request.headers["Authorization"].startswith("OAuth ")
        fields = parse_qs(request.content.decode())
        assert fields["text"] == ["こんにちは"]
        assert fields["type"] == ["json"]

    def test_server_error(self, options, caplog):
        """A 500 response yields no result and logs the status."""
        client = make_client(respond(500, text="boom"))
        with caplog.at_level(logging.INFO, logger="textra.translation.client"):
            result = client.request_translation(options, "hello")

        assert client.translate(options, "hello") is None
        assert result.failure is FailureKind.PROTOCOL
        assert result.status_code == 500
        assert not result.ok
        assert "500" in caplog.text

    def test_missing_fields(self, options):
        """A 200 response without the nested text yields no result."""
        client = make_client(respond(200, {"resultset": {}}))
        result = client.request_translation(options, "hello")

        assert result.translated_text is None
        assert result.failure is FailureKind.PARSE
        assert client.translate(options, "hello") is None

    def test_transport_error(self, options):
        """Connection failures are reported, not raised."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = make_client(handler).request_translation(options, "hello")
        assert result.failure is FailureKind.TRANSPORT
        assert "connection refused" in result.detail

    def test_signing_error_skips_http(self, options):
        """Without credentials nothing is sent."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"resultset": {"result": {"text": "x"}}})

        options.secret = None
        result = make_client(handler).request_translation(options, "hello")

        assert result.failure is FailureKind.SIGNING
        assert calls == []

    def test_incomplete_options(self):
        """Options without a language pair yield a configuration failure."""
        client = make_client(respond(200, {"resultset": {"result": {"text": "x"}}}))
        result = client.request_translation(TextraOptions(mode=Mode.GENERAL), "hello")
        assert result.failure is FailureKind.CONFIGURATION

    def test_result_metadata(self, options):
        """Successful results echo the language pair and mode."""
        client = make_client(respond(200, {"resultset": {"result": {"text": "Hello"}}}))
        result = client.request_translation(options, "こんにちは")

        assert result.ok
        assert result.translated_text == "Hello"
        assert (result.source_language, result.target_language) == ("ja", "en")
        assert result.mode == "GENERAL"

    def test_client_is_reusable(self, options):
        """Consecutive calls each build their own request."""
        texts = iter(["one", "two"])

        def handler(request):
            return httpx.Response(200, json={"resultset": {"result": {"text": next(texts)}}})

        with make_client(handler) as client:
            assert client.translate(options, "a") == "one"
            assert client.translate(options, "b") == "two"

    def test_json_body_with_charset(self, options):
        """UTF-8 response bodies are decoded before parsing."""
        body = json.dumps({"resultset": {"result": {"text": "你好"}}}, ensure_ascii=False)

        def handler(request):
            return httpx.Response(
                200,
                content=body.encode("utf-8"),
                headers={"Content-Type": "application/json; charset=utf-8"},
            )

        assert make_client(handler).translate(options, "hello") == "你好"
