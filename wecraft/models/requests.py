"""
Pydantic models for HTTP request schemas.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator

from .github import ContributionPattern, EngineerActivity, GitHubAccount, GitHubActivity
from .roles import RoleQuery
from .scores import CompatibilityScoreResult, ImpactScoreResult, TrustScoreResult


class TrustScoreRequest(BaseModel):
    """Request model for a trust score. Send a pattern, or activity to derive one from."""
    account: GitHubAccount
    contribution_pattern: Optional[ContributionPattern] = None
    activity: Optional[GitHubActivity] = None
    config: Optional[Dict[str, Any]] = Field(None, description="Partial TrustScoreConfig override")
    as_of: Optional[datetime] = Field(None, description="Reference time; defaults to now")

    @model_validator(mode="after")
    def _require_pattern_source(self):
        if self.contribution_pattern is None and self.activity is None:
            raise ValueError("either contribution_pattern or activity is required")
        return self


class ImpactScoreRequest(BaseModel):
    """Request model for an impact score."""
    activity: GitHubActivity
    config: Optional[Dict[str, Any]] = Field(None, description="Partial ImpactScoreConfig override")
    as_of: Optional[datetime] = Field(None, description="Reference time; defaults to now")


class CompatibilityScoreRequest(BaseModel):
    """Request model for a role compatibility score."""
    activity: EngineerActivity
    role_query: Optional[RoleQuery] = Field(None, description="Defaults to the service default role")


class MatchScoreRequest(BaseModel):
    """Request model for either recruiter match view."""
    trust: TrustScoreResult
    compatibility: CompatibilityScoreResult
    impact: ImpactScoreResult
    config: Optional[Dict[str, Any]] = Field(None, description="Partial RecruiterMatchScoreConfig override")


class ExplanationRequest(BaseModel):
    """Request model for a match explanation."""
    trust: TrustScoreResult
    impact: ImpactScoreResult
    compatibility: CompatibilityScoreResult
