"""Error types raised while configuring or executing a TexTra translation."""

from __future__ import annotations

from enum import Enum


class FailureKind(Enum):
    """Why a translation call produced no text."""

    CONFIGURATION = "configuration"
    ENCODING = "encoding"
    SIGNING = "signing"
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    PARSE = "parse"


class TextraError(Exception):
    """Base class for every error raised by the TexTra client."""

    kind: FailureKind = FailureKind.CONFIGURATION


class ConfigurationError(TextraError, ValueError):
    """Unknown mode name, malformed language code or incomplete options."""

    kind = FailureKind.CONFIGURATION


class EncodingError(TextraError):
    """The form parameters could not be encoded as UTF-8."""

    kind = FailureKind.ENCODING


class SigningError(TextraError):
    """OAuth1 signing of the outbound request failed."""

    kind = FailureKind.SIGNING


class TransportError(TextraError):
    """Connection or I/O failure while talking to the API."""

    kind = FailureKind.TRANSPORT


class ProtocolError(TextraError):
    """The API answered with a status other than 200."""

    kind = FailureKind.PROTOCOL

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(message or f"Unexpected HTTP status {status_code}")
        self.status_code = status_code


class ParseError(TextraError):
    """The response body is not the expected ``resultset`` JSON document."""

    kind = FailureKind.PARSE
