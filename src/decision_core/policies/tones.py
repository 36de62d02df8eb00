"""Tone policy: keyword table and YAML loader.

The tone of a command ("please give food" vs "give food now") is read from
a curated keyword table.  A world may ship its own table at
``<world_root>/policies/tones.yaml``; without one the built-in table below
applies.

Design notes:
- :class:`ToneTable` is frozen and safe to share between components.
- Keywords match whole tokens, never substrings, so "now" does not fire on
  "known".
- When several tone keywords appear, the first one in the input wins.
- :func:`load_tone_policy` raises :exc:`FileNotFoundError` if the file is
  absent and :exc:`ValueError` on schema validation failure.  Neither is
  caught here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

NEUTRAL = "neutral"

#: Built-in keyword lists per tone.  Words that double as action aliases
#: ("help", "support", "command") are left out so they never classify as tone.
DEFAULT_TONE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "positive": ("please", "thank", "thanks", "kindly", "pls"),
    "aggressive": ("now", "immediately", "urgent", "asap", "must", "force"),
    "negative": ("never", "cannot", "refuse", "demand", "no", "not"),
    "neutral": ("perhaps", "maybe"),
    "diplomatic": ("respectfully", "politely"),
}


@dataclass(frozen=True)
class ToneTable:
    """Keyword to tone lookup.

    Attributes:
        keywords:     Lower-cased keyword -> tone name.
        default_tone: Tone reported when no keyword is present.
        version:      Schema version of the source file (``"builtin"`` for
                      the default table).
    """

    keywords: dict[str, str] = field(default_factory=dict)
    default_tone: str = NEUTRAL
    version: str = "builtin"

    @classmethod
    def default(cls) -> ToneTable:
        return cls(keywords=_invert(DEFAULT_TONE_KEYWORDS))

    @property
    def tones(self) -> frozenset[str]:
        return frozenset(self.keywords.values()) | {self.default_tone}

    def lookup(self, token: str) -> str | None:
        """Return the tone for *token*, or ``None`` if it is not a keyword."""
        return self.keywords.get(token.strip().lower())

    def is_keyword(self, token: str) -> bool:
        return self.lookup(token) is not None

    def tone_of(self, tokens: Iterable[str]) -> str:
        """Return the tone of the first keyword in *tokens*, else the default."""
        for token in tokens:
            tone = self.lookup(token)
            if tone is not None:
                return tone
        return self.default_tone


def _invert(tones: Mapping[str, Iterable[str]]) -> dict[str, str]:
    keywords: dict[str, str] = {}
    for tone, words in tones.items():
        for word in words:
            keywords[word.lower()] = tone
    return keywords


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------


def load_tone_policy(world_root: Path) -> ToneTable:
    """Load and validate ``policies/tones.yaml`` from *world_root*.

    Expected shape::

        version: "1.0"
        default_tone: neutral
        tones:
          positive: [please, thanks]
          aggressive: [now, immediately]

    Raises:
        FileNotFoundError: If ``policies/tones.yaml`` does not exist.
        ValueError:        On schema validation failure.
    """
    return load_tone_policy_file(world_root / "policies" / "tones.yaml")


def load_tone_policy_file(policy_path: Path) -> ToneTable:
    """Load a tone table from an explicit YAML file path.

    Raises:
        FileNotFoundError: If *policy_path* does not exist.
        ValueError:        On schema validation failure.
    """
    if not policy_path.exists():
        raise FileNotFoundError(f"Tone policy not found: {policy_path}")

    with policy_path.open() as fh:
        raw = yaml.safe_load(fh)

    if not isinstance(raw, dict):
        raise ValueError("tones.yaml must be a YAML mapping at the top level.")

    version = raw.get("version")
    if not version:
        raise ValueError("tones.yaml: missing required field 'version'.")

    default_tone = raw.get("default_tone", NEUTRAL)
    if not isinstance(default_tone, str) or not default_tone.strip():
        raise ValueError("tones.yaml: 'default_tone' must be a non-empty string.")

    tones_raw = raw.get("tones")
    if not isinstance(tones_raw, dict) or not tones_raw:
        raise ValueError("tones.yaml: missing required field 'tones' (must be a mapping).")

    keywords: dict[str, str] = {}
    for tone, words in tones_raw.items():
        if not isinstance(words, list):
            raise ValueError(f"tones.yaml: tones.{tone} must be a list of keywords.")
        for word in words:
            if not isinstance(word, str) or not word.strip():
                raise ValueError(f"tones.yaml: tones.{tone} contains a non-string keyword.")
            key = word.strip().lower()
            if key in keywords and keywords[key] != tone:
                raise ValueError(
                    f"tones.yaml: keyword '{key}' is listed under both "
                    f"'{keywords[key]}' and '{tone}'."
                )
            keywords[key] = str(tone)

    logger.info("Loaded tone policy v%s with %d keyword(s)", version, len(keywords))
    return ToneTable(keywords=keywords, default_tone=default_tone.strip(), version=str(version))


def resolve_tone_table(policy_path: Path | None) -> ToneTable:
    """Return the table at *policy_path*, or the built-in table when unset."""
    if policy_path is None:
        return ToneTable.default()
    return load_tone_policy_file(policy_path)
