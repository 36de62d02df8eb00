"""Tokenization and number parsing shared by the interpreter and extractor.

Tokens are lower-cased words.  Punctuation is stripped, except that a token
which reads as a number keeps its sign, decimal point and exponent so
``"-2.5e3"`` and ``"0x1F"`` survive intact.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Iterator, Sequence

#: Filler words dropped from parameter tokens.
STOPWORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "to", "from", "for", "by", "in", "on", "at",
        "and", "or", "but", "if", "then", "as", "is", "are", "was", "were", "with", "of",
    }
)

_NUMBER = r"[-+]?(?:0x[0-9a-f]+|(?:\d+\.?\d*|\.\d+)(?:e[-+]?\d+)?)"
_NUMBER_RE = re.compile(rf"^{_NUMBER}$")
_NUMBER_WITH_SUFFIX_RE = re.compile(rf"^({_NUMBER})(?:\s*[a-z]+)?$")
_EDGE_PUNCT = ",;:!?\"'()[]{}"
_NON_WORD_RE = re.compile(r"[^a-z0-9]+")


def tokenize(text: str) -> list[str]:
    """Split *text* into lower-cased tokens."""
    tokens: list[str] = []
    for chunk in text.lower().split():
        trimmed = chunk.strip(_EDGE_PUNCT)
        if _NUMBER_RE.match(trimmed):
            tokens.append(trimmed)
            continue
        # Possessives and contractions: "alice's" -> "alice", "don't" -> "dont".
        trimmed = trimmed.removesuffix("'s").replace("'", "")
        tokens.extend(part for part in _NON_WORD_RE.split(trimmed) if part)
    return tokens


def content_tokens(tokens: Iterable[str]) -> list[str]:
    """Return *tokens* with stopwords removed."""
    return [token for token in tokens if token not in STOPWORDS]


def windows(tokens: Sequence[str], size: int) -> Iterator[tuple[int, str]]:
    """Yield ``(start, joined_text)`` for every run of *size* consecutive tokens."""
    if size <= 0:
        return
    for start in range(len(tokens) - size + 1):
        yield start, " ".join(tokens[start : start + size])


def looks_numeric(token: str) -> bool:
    """Return ``True`` if *token* is written as a number, with or without a unit word."""
    return _NUMBER_WITH_SUFFIX_RE.match(token.strip().lower()) is not None


def parse_number(token: str) -> float | None:
    """Parse a decimal, ``0x`` hex or scientific literal.

    Returns ``None`` for anything else, including literals that overflow to
    infinity.
    """
    text = token.strip().lower()
    if not _NUMBER_RE.match(text):
        return None
    sign = -1 if text.startswith("-") else 1
    body = text.lstrip("+-")
    if body.startswith("0x"):
        integer = int(body, 16)
        if integer.bit_length() > 1023:
            return None
        return float(sign * integer)
    value = sign * float(body)
    if not math.isfinite(value):
        return None
    return value


def leading_number(text: str) -> float | None:
    """Parse a number optionally followed by one unit word (``"50 food"``)."""
    match = _NUMBER_WITH_SUFFIX_RE.match(text.strip().lower())
    if match is None:
        return None
    return parse_number(match.group(1))
