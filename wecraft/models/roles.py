"""Role query and role knowledge-base records."""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


SIGNAL_NAMES = [
    "technology_stack_match",
    "domain_contribution_depth",
    "architecture_pattern_match",
    "file_type_alignment",
    "activity_type_match",
    "repository_type_match",
    "review_domain_expertise",
]

# Structural PR flags a role profile may list under relevant_change_types
CHANGE_TYPES = ["api", "ui", "database", "config", "infrastructure", "test", "documentation"]
ISSUE_TYPES = ["bug", "feature", "infrastructure", "security"]


class RoleQuery(BaseModel):
    """The role a recruiter is hiring for, with optional hints."""
    model_config = ConfigDict(frozen=True)

    role: str
    required_technologies: List[str] = Field(default_factory=list)
    preferred_experience: List[str] = Field(default_factory=list)


class RoleProfile(BaseModel):
    """Static technology/keyword table for one supported role."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    role: str
    languages: List[str]
    file_extensions: List[str]
    keywords: List[str]
    architecture_patterns: List[str]
    negative_indicators: List[str] = Field(default_factory=list)
    relevant_change_types: List[str] = Field(default_factory=list)
    relevant_issue_types: List[str] = Field(default_factory=list)
    signal_weights: Optional[Dict[str, float]] = None

    @field_validator("relevant_change_types")
    @classmethod
    def _known_change_types(cls, value: List[str]) -> List[str]:
        unknown = set(value) - set(CHANGE_TYPES)
        if unknown:
            raise ValueError(f"unknown change types: {sorted(unknown)}")
        return value

    @field_validator("relevant_issue_types")
    @classmethod
    def _known_issue_types(cls, value: List[str]) -> List[str]:
        unknown = set(value) - set(ISSUE_TYPES)
        if unknown:
            raise ValueError(f"unknown issue types: {sorted(unknown)}")
        return value

    @field_validator("signal_weights")
    @classmethod
    def _complete_signal_weights(cls, value: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
        if value is None:
            return value
        if set(value) != set(SIGNAL_NAMES):
            raise ValueError(f"signal_weights must name exactly: {', '.join(SIGNAL_NAMES)}")
        if any(not 0.0 <= weight <= 1.0 for weight in value.values()):
            raise ValueError("signal weights must be within [0, 1]")
        return value
