"""Pre-flight checks for TexTra options.

Callers can run these before ``translate`` to find out why a call would be
rejected without spending a network round trip on it.
"""

from __future__ import annotations

from dataclasses import dataclass

from textra.translation.options import TextraOptions, supported_targets


@dataclass(frozen=True)
class RequirementIssue:
    id: str
    title: str
    details: str
    severity: str = "error"  # "error" | "warning"


_CREDENTIALS = (
    ("username", "TexTra user name", "TEXTRA_USERNAME"),
    ("api_key", "TexTra API key", "TEXTRA_API_KEY"),
    ("secret", "TexTra API secret", "TEXTRA_API_SECRET"),
)


def check_translation_requirements(options: TextraOptions) -> list[RequirementIssue]:
    issues: list[RequirementIssue] = []

    for attr, title, env_name in _CREDENTIALS:
        if not getattr(options, attr):
            issues.append(
                RequirementIssue(
                    id=attr,
                    title=title,
                    details=f"Not configured. Set it on the options or via {env_name}.",
                    severity="error",
                )
            )

    if options.mode is None:
        issues.append(
            RequirementIssue(
                id="mode",
                title="Translation mode",
                details="Not configured. Choose one of: general, patent, patent_claim.",
                severity="error",
            )
        )

    if options.source_lang is None or options.target_lang is None:
        issues.append(
            RequirementIssue(
                id="languages",
                title="Source and target language",
                details="Not configured. Call set_lang(source, target).",
                severity="error",
            )
        )

    if any(issue.id in ("mode", "languages") for issue in issues):
        return issues

    if not options.is_combination_valid():
        targets = supported_targets(options.mode, options.source_lang, options.combinations)
        if targets:
            hint = f"Supported targets for {options.source_lang}: " + ", ".join(targets) + "."
        else:
            hint = f"{options.source_lang} is not a supported source language in this mode."
        issues.append(
            RequirementIssue(
                id="combination",
                title="Unsupported language combination",
                details=(
                    f"{options.mode.api_slug} does not translate "
                    f"{options.source_lang} to {options.target_lang}. {hint}"
                ),
                severity="error",
            )
        )

    return issues
