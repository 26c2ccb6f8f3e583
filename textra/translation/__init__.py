"""TexTra machine-translation API client."""

from textra.translation.base import TranslationResult
from textra.translation.client import (
    SignedRequest,
    TextraApiClient,
    authenticate,
    derive_access_url,
    parse_translation,
    translate,
)
from textra.translation.config import (
    API_URL,
    TextraConfig,
    load_config_from_env,
    load_options_from_env,
)
from textra.translation.errors import (
    ConfigurationError,
    EncodingError,
    FailureKind,
    ParseError,
    ProtocolError,
    SigningError,
    TextraError,
    TransportError,
)
from textra.translation.options import (
    LEGAL_COMBINATIONS,
    Combination,
    GroupRule,
    Mode,
    PivotRule,
    TextraOptions,
    build_combinations,
    configure,
    normalize_lang,
    supported_targets,
)

__all__ = [
    "API_URL",
    "Combination",
    "ConfigurationError",
    "EncodingError",
    "FailureKind",
    "GroupRule",
    "LEGAL_COMBINATIONS",
    "Mode",
    "ParseError",
    "PivotRule",
    "ProtocolError",
    "SignedRequest",
    "SigningError",
    "TextraApiClient",
    "TextraConfig",
    "TextraError",
    "TextraOptions",
    "TranslationResult",
    "TransportError",
    "authenticate",
    "build_combinations",
    "configure",
    "derive_access_url",
    "load_config_from_env",
    "load_options_from_env",
    "normalize_lang",
    "parse_translation",
    "supported_targets",
    "translate",
]
