"""
Calculator configuration models.

Each calculator takes an optional partial override. ``resolve_config``
deep-merges the override onto the documented defaults and validates the
result, once per call, so there is no shared mutable configuration.
"""
from typing import Any, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import InvalidConfigError


class ConfigModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ============================================================================
# Trust
# ============================================================================

class TrustWeights(ConfigModel):
    account_authenticity: float = Field(0.25, ge=0.0, le=1.0)
    contribution_authenticity: float = Field(0.35, ge=0.0, le=1.0)
    collaboration_signals: float = Field(0.25, ge=0.0, le=1.0)
    anti_gaming_score: float = Field(0.15, ge=0.0, le=1.0)


class TrustScoreConfig(ConfigModel):
    max_prs_per_day: int = Field(20, ge=0)
    min_account_age_days: int = Field(30, ge=0)
    min_unique_repos: int = Field(2, ge=0)
    identical_message_threshold: int = Field(5, ge=1)
    weights: TrustWeights = Field(default_factory=TrustWeights)


# ============================================================================
# Impact
# ============================================================================

class ImpactWeights(ConfigModel):
    pr_impact: float = Field(0.4, ge=0.0, le=1.0)
    collaboration: float = Field(0.3, ge=0.0, le=1.0)
    longevity: float = Field(0.2, ge=0.0, le=1.0)
    quality: float = Field(0.1, ge=0.0, le=1.0)


class ImpactScoreConfig(ConfigModel):
    weights: ImpactWeights = Field(default_factory=ImpactWeights)
    time_decay_factor: float = Field(0.95, gt=0.0, le=1.0)
    min_pr_size: int = Field(1, ge=0)
    max_pr_frequency: int = Field(10, ge=1)


# ============================================================================
# Recruiter Match
# ============================================================================

class MatchWeights(ConfigModel):
    trust: float = Field(0.4, ge=0.0, le=1.0)
    compatibility: float = Field(0.4, ge=0.0, le=1.0)
    impact: float = Field(0.2, ge=0.0, le=1.0)


class MinimumThresholds(ConfigModel):
    trust: float = Field(50, ge=0.0, le=100.0)
    compatibility: float = Field(30, ge=0.0, le=100.0)
    impact: float = Field(20, ge=0.0, le=100.0)


class BoostFactors(ConfigModel):
    high_trust_boost: float = Field(1.1, ge=1.0)
    high_compatibility_boost: float = Field(1.15, ge=1.0)
    high_impact_boost: float = Field(1.05, ge=1.0)


class RecruiterMatchScoreConfig(ConfigModel):
    weights: MatchWeights = Field(default_factory=MatchWeights)
    minimum_thresholds: MinimumThresholds = Field(default_factory=MinimumThresholds)
    boost_factors: BoostFactors = Field(default_factory=BoostFactors)


# ============================================================================
# Resolution
# ============================================================================

C = TypeVar("C", bound=ConfigModel)
ConfigOverride = Union[ConfigModel, Dict[str, Any], None]


def resolve_config(model_cls: Type[C], override: ConfigOverride = None) -> C:
    """
    Merge a partial override onto the defaults of ``model_cls``.

    Args:
        model_cls: Config model whose field defaults are the documented defaults
        override: Nested dict of overrides, a full config instance, or None

    Returns:
        Validated, frozen config instance

    Raises:
        InvalidConfigError: If the merged config fails validation
    """
    if override is None:
        return model_cls()
    if isinstance(override, model_cls):
        return override
    if isinstance(override, BaseModel):
        override = override.model_dump()
    if not isinstance(override, dict):
        raise InvalidConfigError(model_cls.__name__, f"expected a mapping, got {type(override).__name__}")

    defaults = model_cls().model_dump()
    merged = _merge_dicts(defaults, override)
    try:
        return model_cls.model_validate(merged)
    except ValidationError as e:
        raise InvalidConfigError(model_cls.__name__, str(e)) from e


def _merge_dicts(base: Dict[str, Any], override: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    override = override or {}
    result = {}
    for key, value in base.items():
        if isinstance(value, dict) and isinstance(override.get(key), dict):
            result[key] = _merge_dicts(value, override[key])
        else:
            result[key] = override.get(key, value)
    for key, value in override.items():
        if key not in result:
            result[key] = value
    return result
