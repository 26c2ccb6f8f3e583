"""TexTra machine-translation API client.

Run ``check_translation_requirements(options)`` before ``translate`` to find
missing credentials or unsupported language pairs without a network call.
"""

from textra.diagnostics.requirements import RequirementIssue, check_translation_requirements
from textra.translation import (
    Mode,
    TextraApiClient,
    TextraOptions,
    TranslationResult,
    configure,
    translate,
)

__all__ = [
    "Mode",
    "RequirementIssue",
    "TextraApiClient",
    "TextraOptions",
    "TranslationResult",
    "check_translation_requirements",
    "configure",
    "translate",
]
