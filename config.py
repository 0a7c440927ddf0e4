# -*- coding: utf-8 -*-
"""
Centralised Configuration for MEREC Weighting
=============================================

All configurable parameters are defined here as typed dataclasses.
The master ``Config`` class composes every sub-config and provides
serialisation, summary printing, and global defaults management.

Configuration Groups
--------------------
- MERECConfig    : numerical constants of the weighting pipeline
- LoggingConfig  : logger namespace, level and format
- SummaryConfig  : thresholds for impact / importance labels
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union


# =========================================================================
# Enumerations
# =========================================================================

class CriterionType(Enum):
    """Direction of preference for a criterion."""
    BENEFIT = "benefit"
    COST = "cost"

    @classmethod
    def parse(cls, value: Union["CriterionType", str]) -> "CriterionType":
        """Coerce an enum member or a case-insensitive string to a member."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        # Local import keeps config importable without the weighting package
        from weighting.exceptions import InvalidCriterionTypeError
        raise InvalidCriterionTypeError(
            f"Unknown criterion type {value!r}; expected 'benefit' or 'cost'")


# =========================================================================
# MEREC Parameters
# =========================================================================

@dataclass
class MERECConfig:
    """Numerical constants for the MEREC pipeline."""
    epsilon: float = 1e-10            # floor for log / division
    weight_tolerance: float = 1e-10   # allowed |ΣW − 1|

    def validate(self) -> None:
        from weighting.exceptions import InvalidParameterError
        for name in ("epsilon", "weight_tolerance"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise InvalidParameterError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise InvalidParameterError(f"{name} must be > 0, got {value!r}")


# =========================================================================
# Logging
# =========================================================================

@dataclass
class LoggingConfig:
    """Logger namespace and formatting."""
    logger_name: str = "merec"
    level: str = "WARNING"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"


# =========================================================================
# Criteria Summary Labels
# =========================================================================

@dataclass
class SummaryConfig:
    """Percentage thresholds used by ``weighting.summary``."""
    # Share of total deviation E (percent) → impact level
    impact_thresholds: Dict[str, float] = field(
        default_factory=lambda: {"high": 40.0, "medium": 20.0})
    # Weight (percent) → importance level, checked in descending order
    importance_thresholds: Dict[str, float] = field(
        default_factory=lambda: {
            "very high": 30.0,
            "high": 20.0,
            "medium": 15.0,
            "low": 10.0,
        })


# =========================================================================
# Master Configuration
# =========================================================================

@dataclass
class Config:
    """Master configuration composing every sub-config."""
    merec: MERECConfig = field(default_factory=MERECConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)

    def __post_init__(self):
        self.merec.validate()

    # --- serialisation ---

    def to_dict(self) -> Dict:
        def _cvt(obj):
            if hasattr(obj, '__dataclass_fields__'):
                return {k: _cvt(v) for k, v in obj.__dict__.items()}
            if isinstance(obj, Enum):
                return obj.value
            if isinstance(obj, (list, tuple)):
                return [_cvt(i) for i in obj]
            if isinstance(obj, dict):
                return {k: _cvt(v) for k, v in obj.items()}
            return obj
        return _cvt(self)

    def describe(self) -> str:
        """Human-readable summary of every configuration group."""
        return (
            f"\n{'='*60}\n"
            f"  MEREC Configuration Summary\n"
            f"{'='*60}\n\n"
            f"  PIPELINE\n"
            f"    Epsilon          : {self.merec.epsilon:g}\n"
            f"    Weight tolerance : {self.merec.weight_tolerance:g}\n\n"
            f"  LOGGING\n"
            f"    Logger           : {self.logging.logger_name}\n"
            f"    Level            : {self.logging.level}\n\n"
            f"  SUMMARY LABELS\n"
            f"    Impact           : {self.summary.impact_thresholds}\n"
            f"    Importance       : {self.summary.importance_thresholds}\n"
            f"{'='*60}\n"
        )


# =========================================================================
# Global Config Defaults
# =========================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """Return global config (create default on first call)."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_default_config() -> Config:
    """Return a *fresh* default Config instance."""
    return Config()


def set_config(config: Config) -> None:
    """Replace the global config."""
    global _config
    config.merec.validate()
    _config = config


def reset_config() -> None:
    """Reset to a fresh default Config."""
    global _config
    _config = Config()
