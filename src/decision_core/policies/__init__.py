"""World policy tables loaded from ``<world_root>/policies``."""

from decision_core.policies.tones import (
    DEFAULT_TONE_KEYWORDS,
    NEUTRAL,
    ToneTable,
    load_tone_policy,
    load_tone_policy_file,
    resolve_tone_table,
)

__all__ = [
    "DEFAULT_TONE_KEYWORDS",
    "NEUTRAL",
    "ToneTable",
    "load_tone_policy",
    "load_tone_policy_file",
    "resolve_tone_table",
]
