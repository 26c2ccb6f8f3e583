"""Transport configuration and environment loading for the TexTra client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from textra.translation.errors import ConfigurationError
from textra.translation.options import TextraOptions

logger = logging.getLogger(__name__)

API_URL = "https://mt-auto-minhon-mlt.ucri.jgn-x.jp/api/mt/"


@dataclass
class TextraConfig:
    """Endpoint, timeouts and retry policy for the HTTP transport."""

    base_url: str = API_URL
    connect_timeout: float = 2 * 60.0
    read_timeout: float = 10 * 60.0
    retries: int = 3


def _env(name: str) -> str | None:
    value = os.getenv(name)
    return value.strip() if value and value.strip() else None


def _load_env_file(env_path: Path | None) -> None:
    if env_path is None:
        env_path = Path.cwd() / ".env"
    if env_path.is_file():
        logger.debug("Loading environment from %s", env_path)
        load_dotenv(dotenv_path=env_path)


def load_options_from_env(env_path: Path | None = None) -> TextraOptions:
    """Build options from ``TEXTRA_*`` variables.

    Variables already present in the process environment take precedence
    over the ``.env`` file.

    Args:
        env_path: Path to a ``.env`` file. Defaults to ``./.env``.

    Raises:
        ConfigurationError: If ``TEXTRA_MODE`` or a language code is invalid.
    """
    _load_env_file(env_path)

    options = TextraOptions(
        username=_env("TEXTRA_USERNAME"),
        api_key=_env("TEXTRA_API_KEY"),
        secret=_env("TEXTRA_API_SECRET"),
    )
    mode = _env("TEXTRA_MODE")
    if mode is not None:
        options.set_mode(mode)

    source, target = _env("TEXTRA_SOURCE_LANG"), _env("TEXTRA_TARGET_LANG")
    if source is not None and target is not None:
        options.set_lang(source, target)
    elif source is not None or target is not None:
        raise ConfigurationError(
            "TEXTRA_SOURCE_LANG and TEXTRA_TARGET_LANG must be set together"
        )
    return options


def _env_number(name: str, default: float | int, cast: type[float] | type[int]) -> float | int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


def load_config_from_env(env_path: Path | None = None) -> TextraConfig:
    """Build transport configuration, falling back to the defaults."""
    _load_env_file(env_path)

    defaults = TextraConfig()
    return TextraConfig(
        base_url=_env("TEXTRA_API_URL") or defaults.base_url,
        connect_timeout=_env_number("TEXTRA_CONNECT_TIMEOUT", defaults.connect_timeout, float),
        read_timeout=_env_number("TEXTRA_READ_TIMEOUT", defaults.read_timeout, float),
        retries=_env_number("TEXTRA_RETRIES", defaults.retries, int),
    )
