"""TexTra connection options and the table of supported language combinations.

The remote service only accepts a finite set of (mode, source, target)
triples. The set is described by a short list of declarative rules and
expanded once at import time into ``LEGAL_COMBINATIONS``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from textra.translation.errors import ConfigurationError


class Mode(Enum):
    """Translation engine variants.

    The lowercased, hyphenated name is the engine part of the API URL.
    """

    GENERAL = "general"
    PATENT = "patent"
    PATENT_CLAIM = "patent_claim"

    @property
    def api_slug(self) -> str:
        return self.name.replace("_", "-").lower()

    @classmethod
    def parse(cls, value: Mode | str) -> Mode:
        """Resolve a member, a member name or a value to a ``Mode``.

        Raises:
            ConfigurationError: If ``value`` names no known mode.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ConfigurationError(f"Invalid translation mode: {value!r}")

        key = value.strip().replace("-", "_").upper()
        try:
            return cls[key]
        except KeyError:
            raise ConfigurationError(f"Unknown translation mode: {value!r}") from None


def normalize_lang(code: str) -> str:
    """Format a language code as ``"en"``, ``"ja"`` or ``"zh-CN"``.

    Host applications may hand over codes such as ``"EN"`` or ``"zh-cn"``.
    """
    if not isinstance(code, str) or not code:
        raise ConfigurationError(f"Invalid language code: {code!r}")

    index = code.find("-")
    if index == -1:
        return code.lower()
    return code[:index].lower() + code[index:].upper()


@dataclass(frozen=True, eq=False)
class Combination:
    """A (mode, source, target) triple; languages compare case-insensitively."""

    mode: Mode
    source: str
    target: str

    def _key(self) -> tuple[Mode, str, str]:
        return self.mode, self.source.lower(), self.target.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Combination):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


def _is_chinese(lang: str) -> bool:
    return lang.lower().startswith("zh")


@dataclass(frozen=True)
class GroupRule:
    """Every language in the group translates to every other, in all modes.

    Chinese variants are never paired with each other.
    """

    modes: tuple[Mode, ...]
    languages: tuple[str, ...]

    def expand(self) -> set[Combination]:
        out: set[Combination] = set()
        for source in self.languages:
            for target in self.languages:
                if _is_chinese(source) and _is_chinese(target):
                    continue
                if source.lower() == target.lower():
                    continue
                for mode in self.modes:
                    out.add(Combination(mode, source, target))
        return out


@dataclass(frozen=True)
class PivotRule:
    """Every language translates to and from a single pivot language."""

    mode: Mode
    pivot: str
    languages: tuple[str, ...]

    def expand(self) -> set[Combination]:
        out: set[Combination] = set()
        for lang in self.languages:
            if lang.lower() == self.pivot.lower():
                continue
            out.add(Combination(self.mode, self.pivot, lang))
            out.add(Combination(self.mode, lang, self.pivot))
        return out


ALL_MODES = (Mode.GENERAL, Mode.PATENT, Mode.PATENT_CLAIM)

DEFAULT_RULES: tuple[GroupRule | PivotRule, ...] = (
    GroupRule(ALL_MODES, ("ja", "en", "zh-CN", "zh-TW")),
    GroupRule(ALL_MODES, ("ko", "ja")),
    PivotRule(Mode.GENERAL, "en", ("fr", "pt", "fr", "id", "my", "th", "vi", "es")),
)


def build_combinations(rules: Iterable[GroupRule | PivotRule]) -> frozenset[Combination]:
    """Expand declarative rules into the set of supported combinations."""
    out: set[Combination] = set()
    for rule in rules:
        out |= rule.expand()
    return frozenset(out)


LEGAL_COMBINATIONS = build_combinations(DEFAULT_RULES)


def supported_targets(
    mode: Mode,
    source: str,
    combinations: frozenset[Combination] = LEGAL_COMBINATIONS,
) -> list[str]:
    """Target languages reachable from ``source`` under ``mode``, sorted."""
    wanted = source.lower()
    return sorted(
        c.target for c in combinations if c.mode is mode and c.source.lower() == wanted
    )


@dataclass
class TextraOptions:
    """Credentials, engine mode and language pair for a translation session.

    Setters return the instance so calls can be chained. The object is
    mutable and must not be shared between concurrent translation calls.
    """

    username: str | None = None
    api_key: str | None = field(default=None, repr=False)
    secret: str | None = field(default=None, repr=False)
    mode: Mode | None = None
    source_lang: str | None = None
    target_lang: str | None = None
    combinations: frozenset[Combination] = field(default=LEGAL_COMBINATIONS, repr=False)

    def __post_init__(self) -> None:
        if self.mode is not None:
            self.mode = Mode.parse(self.mode)
        if self.source_lang is not None:
            self.source_lang = normalize_lang(self.source_lang)
        if self.target_lang is not None:
            self.target_lang = normalize_lang(self.target_lang)

    def set_username(self, username: str) -> TextraOptions:
        self.username = username
        return self

    def set_api_key(self, api_key: str) -> TextraOptions:
        self.api_key = api_key
        return self

    def set_secret(self, secret: str) -> TextraOptions:
        self.secret = secret
        return self

    def set_mode(self, mode: Mode | str) -> TextraOptions:
        """Set the engine mode from a ``Mode`` or its name.

        Raises:
            ConfigurationError: If a string does not name a known mode.
        """
        self.mode = Mode.parse(mode)
        return self

    def set_lang(self, source: str, target: str) -> TextraOptions:
        """Normalize and store the source and target language codes."""
        self.source_lang = normalize_lang(source)
        self.target_lang = normalize_lang(target)
        return self

    @property
    def mode_name(self) -> str:
        if self.mode is None:
            raise ConfigurationError("Translation mode is not set")
        return self.mode.name

    def is_mode(self, name: str) -> bool:
        return self.mode is not None and self.mode.name == name

    def is_combination_valid(self) -> bool:
        """Check whether the service supports the configured mode and languages.

        Raises:
            ConfigurationError: If the mode or either language is unset.
        """
        if self.mode is None or self.source_lang is None or self.target_lang is None:
            raise ConfigurationError(
                "Mode, source language and target language must be set "
                "before checking the combination"
            )
        return Combination(self.mode, self.source_lang, self.target_lang) in self.combinations


def configure(
    username: str,
    api_key: str,
    secret: str,
    mode: Mode | str,
    source_lang: str,
    target_lang: str,
) -> TextraOptions:
    """Build a fully populated ``TextraOptions``."""
    return TextraOptions(
        username=username,
        api_key=api_key,
        secret=secret,
        mode=Mode.parse(mode),
        source_lang=source_lang,
        target_lang=target_lang,
    )
