"""
Wecraft - explainable engineer reputation scoring from public GitHub activity.

Five pure, deterministic calculators:
- compute_trust_score: is this engineer real?
- compute_impact_score: what have they shipped?
- compute_compatibility_score: do they fit a given role?
- compute_recruiter_match_score: combined match, with recruiter and engineer views
- generate_match_explanation: human-readable evidence for the three scores
"""
__version__ = "1.0.0"

from .agents.analyst import (
    SUPPORTED_ROLES,
    compute_compatibility_score,
    compute_impact_score,
    compute_trust_score,
    get_role_profile,
    load_role_profiles,
)
from .agents.architect import (
    compute_recruiter_match_score,
    generate_match_explanation,
    project_engineer_view,
    project_recruiter_view,
)
from .agents.researcher import build_contribution_pattern, build_pr_analysis, detect_change_types
from .exceptions import InvalidConfigError, UnknownRoleError, WecraftError
from .pipeline import EngineerScoreBundle, score_engineer

__all__ = [
    "EngineerScoreBundle",
    "InvalidConfigError",
    "SUPPORTED_ROLES",
    "UnknownRoleError",
    "WecraftError",
    "build_contribution_pattern",
    "build_pr_analysis",
    "compute_compatibility_score",
    "compute_impact_score",
    "compute_recruiter_match_score",
    "compute_trust_score",
    "detect_change_types",
    "generate_match_explanation",
    "get_role_profile",
    "load_role_profiles",
    "project_engineer_view",
    "project_recruiter_view",
    "score_engineer",
    "__version__",
]
