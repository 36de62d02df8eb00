"""
Interpretation pipeline configuration.

This module handles loading and accessing pipeline configuration from multiple
sources with a clear priority order:

    1. Environment variables (highest priority) - for containerized deployments
    2. Config file (config/decision_core.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. Components
accept explicit settings objects and only fall back to the module-level
``config`` when the caller passes none.

Usage:
    from decision_core.config import config

    print(config.interpreter.near_tie_margin)
    print(config.validation.absolute_max_quantity)

Environment Variable Mapping:
    DECISION_EXACT_WEIGHT           -> interpreter.exact_weight
    DECISION_FUZZY_WEIGHT           -> interpreter.fuzzy_weight
    DECISION_SEMANTIC_WEIGHT        -> interpreter.semantic_weight
    DECISION_AMBIGUITY_THRESHOLD    -> interpreter.ambiguity_threshold
    DECISION_NEAR_TIE_MARGIN        -> interpreter.near_tie_margin
    DECISION_MAX_CANDIDATES         -> interpreter.max_candidates
    DECISION_ENTITY_THRESHOLD       -> extraction.entity_threshold
    DECISION_MAX_QUANTITY           -> validation.default_max_quantity
    DECISION_TONE_POLICY_PATH       -> policies.tone_policy_path
"""

import configparser
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Config file paths
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "decision_core.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "decision_core.example.ini"

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class InterpreterSettings:
    """Action matching and ranking configuration.

    The three weights feed the hybrid confidence model.  They do not need to
    sum to 1.0; the combined score is clamped to [0.0, 1.0] regardless.
    """

    exact_weight: float = 0.3
    fuzzy_weight: float = 0.4
    semantic_weight: float = 0.3
    max_edit_distance: int = 3
    min_candidate_confidence: float = 0.3
    max_candidates: int = 5
    ambiguity_threshold: float = 0.7
    # Gap between the top two scores at or below which the result is ambiguous.
    near_tie_margin: float = 0.05
    entity_threshold: float = 0.6


@dataclass
class ExtractionSettings:
    """Parameter extraction configuration."""

    entity_threshold: float = 0.6


@dataclass
class ValidationSettings:
    """Rule engine configuration."""

    default_min_quantity: int = 1
    default_max_quantity: int = 1000
    absolute_min_quantity: int = 0
    absolute_max_quantity: int = 10000
    max_suggestions: int = 3
    suggestion_floor: float = 0.0
    error_penalty: float = 0.2
    warning_penalty: float = 0.05
    low_confidence_floor: float = 0.5


@dataclass
class PolicySettings:
    """World policy file locations."""

    tone_policy_path: str = ""  # empty = built-in tone table

    @property
    def absolute_tone_policy_path(self) -> Path | None:
        """Absolute path to the tone policy file, or ``None`` when unset."""
        if not self.tone_policy_path:
            return None
        p = Path(self.tone_policy_path)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p


@dataclass
class DecisionCoreConfig:
    """
    Complete pipeline configuration.

    Aggregates all settings sections. Access via the module-level `config`
    singleton or build one explicitly with `load_config()`.
    """

    interpreter: InterpreterSettings = field(default_factory=InterpreterSettings)
    extraction: ExtractionSettings = field(default_factory=ExtractionSettings)
    validation: ValidationSettings = field(default_factory=ValidationSettings)
    policies: PolicySettings = field(default_factory=PolicySettings)


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _load_from_ini(parser: configparser.ConfigParser, cfg: DecisionCoreConfig) -> None:
    """Load configuration from parsed INI file into DecisionCoreConfig."""
    # Interpreter section
    if parser.has_section("interpreter"):
        for name in (
            "exact_weight",
            "fuzzy_weight",
            "semantic_weight",
            "min_candidate_confidence",
            "ambiguity_threshold",
            "near_tie_margin",
            "entity_threshold",
        ):
            if parser.has_option("interpreter", name):
                setattr(cfg.interpreter, name, parser.getfloat("interpreter", name))
        for name in ("max_edit_distance", "max_candidates"):
            if parser.has_option("interpreter", name):
                setattr(cfg.interpreter, name, parser.getint("interpreter", name))

    # Extraction section
    if parser.has_section("extraction"):
        if parser.has_option("extraction", "entity_threshold"):
            cfg.extraction.entity_threshold = parser.getfloat("extraction", "entity_threshold")

    # Validation section
    if parser.has_section("validation"):
        for name in (
            "default_min_quantity",
            "default_max_quantity",
            "absolute_min_quantity",
            "absolute_max_quantity",
            "max_suggestions",
        ):
            if parser.has_option("validation", name):
                setattr(cfg.validation, name, parser.getint("validation", name))
        for name in (
            "suggestion_floor",
            "error_penalty",
            "warning_penalty",
            "low_confidence_floor",
        ):
            if parser.has_option("validation", name):
                setattr(cfg.validation, name, parser.getfloat("validation", name))

    # Policies section
    if parser.has_section("policies"):
        if parser.has_option("policies", "tone_policy_path"):
            cfg.policies.tone_policy_path = parser.get("policies", "tone_policy_path")


def _apply_env_overrides(cfg: DecisionCoreConfig) -> None:
    """Apply environment variable overrides to configuration."""
    # Interpreter settings
    if env_exact := os.getenv("DECISION_EXACT_WEIGHT"):
        cfg.interpreter.exact_weight = float(env_exact)
    if env_fuzzy := os.getenv("DECISION_FUZZY_WEIGHT"):
        cfg.interpreter.fuzzy_weight = float(env_fuzzy)
    if env_semantic := os.getenv("DECISION_SEMANTIC_WEIGHT"):
        cfg.interpreter.semantic_weight = float(env_semantic)
    if env_ambiguity := os.getenv("DECISION_AMBIGUITY_THRESHOLD"):
        cfg.interpreter.ambiguity_threshold = float(env_ambiguity)
    if env_margin := os.getenv("DECISION_NEAR_TIE_MARGIN"):
        cfg.interpreter.near_tie_margin = float(env_margin)
    if env_candidates := os.getenv("DECISION_MAX_CANDIDATES"):
        cfg.interpreter.max_candidates = int(env_candidates)

    # Extraction settings
    if env_entity := os.getenv("DECISION_ENTITY_THRESHOLD"):
        cfg.extraction.entity_threshold = float(env_entity)
        cfg.interpreter.entity_threshold = float(env_entity)

    # Validation settings
    if env_max_qty := os.getenv("DECISION_MAX_QUANTITY"):
        cfg.validation.default_max_quantity = int(env_max_qty)

    # Policy settings
    if env_tones := os.getenv("DECISION_TONE_POLICY_PATH"):
        cfg.policies.tone_policy_path = env_tones


def _warn_on_suspect_values(cfg: DecisionCoreConfig) -> None:
    """Log values that load fine but make ranking or validation degenerate."""
    weights = (
        cfg.interpreter.exact_weight,
        cfg.interpreter.fuzzy_weight,
        cfg.interpreter.semantic_weight,
    )
    if any(w < 0 for w in weights) or sum(weights) <= 0:
        logger.warning("Confidence weights %s are not all positive; scores are clamped", weights)
    if cfg.interpreter.near_tie_margin < 0:
        logger.warning(
            "near_tie_margin %.2f is negative; no command will be reported as ambiguous",
            cfg.interpreter.near_tie_margin,
        )
    if cfg.validation.default_min_quantity > cfg.validation.default_max_quantity:
        logger.warning(
            "default_min_quantity %d exceeds default_max_quantity %d",
            cfg.validation.default_min_quantity,
            cfg.validation.default_max_quantity,
        )


def load_config() -> DecisionCoreConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables
        2. config/decision_core.ini
        3. config/decision_core.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        DecisionCoreConfig: Fully populated configuration object.
    """
    cfg = DecisionCoreConfig()

    config_file = None
    if CONFIG_FILE.exists():
        config_file = CONFIG_FILE
    elif CONFIG_EXAMPLE.exists():
        config_file = CONFIG_EXAMPLE

    if config_file:
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    _apply_env_overrides(cfg)
    _warn_on_suspect_values(cfg)

    return cfg


def reload_config() -> "DecisionCoreConfig":
    """
    Reload configuration from disk and environment.

    This updates the module-level `config` singleton. Components built before
    the reload keep the settings objects they were constructed with.

    Returns:
        DecisionCoreConfig: The newly loaded configuration.
    """
    global config
    config = load_config()
    return config


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

# Load configuration once at module import time
config = load_config()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status() -> dict:
    """
    Get configuration status for diagnostics.

    Returns a dictionary with configuration source information and the
    values that most often explain surprising ranking behaviour.
    """
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "weights": (
            config.interpreter.exact_weight,
            config.interpreter.fuzzy_weight,
            config.interpreter.semantic_weight,
        ),
        "near_tie_margin": config.interpreter.near_tie_margin,
        "entity_threshold": config.extraction.entity_threshold,
        "tone_policy_path": config.policies.tone_policy_path or None,
    }
