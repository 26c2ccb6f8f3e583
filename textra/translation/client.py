"""TexTra web API client: OAuth1-signed form POST and JSON result parsing."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx
from oauthlib import oauth1

from textra.translation.base import TranslationResult
from textra.translation.config import API_URL, TextraConfig
from textra.translation.errors import (
    ConfigurationError,
    EncodingError,
    ParseError,
    ProtocolError,
    SigningError,
    TextraError,
    TransportError,
)
from textra.translation.options import TextraOptions

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class SignedRequest:
    """A POST request ready to be sent, built fresh for every call."""

    url: str
    headers: dict[str, str]
    body: str


def derive_access_url(options: TextraOptions, base_url: str = API_URL) -> str:
    """Return ``<base_url>/<mode>_<source>_<target>/`` for the options.

    Raises:
        ConfigurationError: If the mode or a language is unset.
    """
    if options.mode is None or options.source_lang is None or options.target_lang is None:
        raise ConfigurationError("Mode and languages must be set to build the access URL")

    engine = options.mode.api_slug
    url = f"{base_url.rstrip('/')}/{engine}_{options.source_lang}_{options.target_lang}/"
    logger.debug("Access URL: %s", url)
    return url


def authenticate(
    url: str,
    username: str | None,
    api_key: str | None,
    api_secret: str | None,
    text: str,
) -> SignedRequest:
    """Encode the form parameters and sign the request with one-legged OAuth1.

    The API key and secret act as consumer credentials; there is no token.

    Raises:
        EncodingError: If the parameters cannot be encoded as UTF-8.
        SigningError: If credentials are missing or signing fails.
    """
    if not api_key or not api_secret:
        raise SigningError("API key and secret are required to sign the request")

    params = [
        ("key", api_key),
        ("name", username or ""),
        ("type", "json"),
        ("text", text),
    ]
    try:
        body = urlencode(params, encoding="utf-8")
    except (UnicodeEncodeError, TypeError) as exc:
        raise EncodingError(f"Encoding error: {exc}") from exc

    consumer = oauth1.Client(api_key, client_secret=api_secret)
    try:
        signed_url, headers, signed_body = consumer.sign(
            url,
            http_method="POST",
            body=body,
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )
    except (ValueError, TypeError) as exc:
        raise SigningError(f"OAuth error: {exc}") from exc

    return SignedRequest(url=signed_url, headers=dict(headers), body=signed_body)


def parse_translation(body: str) -> str:
    """Extract ``resultset.result.text`` from a response body.

    Raises:
        ParseError: If the body is not JSON or the field is missing.
    """
    try:
        document = json.loads(body)
        text = document["resultset"]["result"]["text"]
    except (ValueError, RecursionError) as exc:
        raise ParseError(f"Invalid http response: {exc}") from exc
    except (KeyError, TypeError) as exc:
        raise ParseError(f"Invalid http response: missing {exc}") from exc

    if not isinstance(text, str):
        raise ParseError(f"Invalid http response: text is {type(text).__name__}")
    return text


class TextraApiClient:
    """Synchronous client for the TexTra translation API.

    Each call builds and signs its own request, so one client can serve
    consecutive calls. It is not meant to be shared between threads.
    """

    def __init__(
        self,
        config: TextraConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or TextraConfig()
        if transport is None:
            transport = httpx.HTTPTransport(retries=self._config.retries)
        self._client = httpx.Client(
            timeout=httpx.Timeout(self._config.read_timeout, connect=self._config.connect_timeout),
            transport=transport,
        )

    def __enter__(self) -> TextraApiClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def prepare(self, options: TextraOptions, text: str) -> SignedRequest:
        """Derive the access URL for the options and sign a request for ``text``."""
        url = derive_access_url(options, self._config.base_url)
        return authenticate(url, options.username, options.api_key, options.secret, text)

    def execute_translation(self, signed: SignedRequest) -> str:
        """Send a signed request and return the translated text.

        Raises:
            TransportError: If the HTTP call fails.
            ProtocolError: If the status is not 200.
            ParseError: If the body does not carry a translation.
        """
        request = self._client.build_request(
            "POST", signed.url, headers=signed.headers, content=signed.body
        )
        try:
            response = self._client.send(request)
        except httpx.HTTPError as exc:
            raise TransportError(f"http access error: {exc}") from exc

        if response.status_code != 200:
            raise ProtocolError(response.status_code, f"Get response: {response.status_code}")

        logger.debug("Http response status: %d", response.status_code)
        return parse_translation(response.text)

    def request_translation(self, options: TextraOptions, text: str) -> TranslationResult:
        """Translate ``text`` and report the outcome without raising.

        Every failure is logged and described by the returned result.
        """
        mode = options.mode.name if options.mode is not None else None
        try:
            translated = self.execute_translation(self.prepare(options, text))
        except TextraError as exc:
            logger.info("Translation failed (%s): %s", exc.kind.value, exc)
            return TranslationResult(
                translated_text=None,
                source_language=options.source_lang,
                target_language=options.target_lang,
                mode=mode,
                failure=exc.kind,
                detail=str(exc),
                status_code=getattr(exc, "status_code", None),
            )

        return TranslationResult(
            translated_text=translated,
            source_language=options.source_lang,
            target_language=options.target_lang,
            mode=mode,
        )

    def translate(self, options: TextraOptions, text: str) -> str | None:
        """Return the translated text, or None when no translation is available."""
        return self.request_translation(options, text).translated_text


def translate(
    options: TextraOptions,
    text: str,
    config: TextraConfig | None = None,
) -> str | None:
    """One-shot translation with a short-lived client."""
    with TextraApiClient(config) as client:
        return client.translate(options, text)
