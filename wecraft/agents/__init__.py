"""
Agents package - The scoring agents of the Wecraft engine.

Modules:
- researcher/: derives contribution patterns and PR analyses from activity
- analyst/: trust, impact and role compatibility scorers, role knowledge base
- architect/: recruiter match scoring, recruiter/engineer views, explanations
- utils: shared numeric helpers (clamping, guarded ratios, log scaling)
"""
from .analyst import compute_compatibility_score, compute_impact_score, compute_trust_score
from .architect import (
    compute_recruiter_match_score,
    generate_match_explanation,
    project_engineer_view,
    project_recruiter_view,
)
from .researcher import build_contribution_pattern, build_pr_analysis, detect_change_types

__all__ = [
    "build_contribution_pattern",
    "build_pr_analysis",
    "compute_compatibility_score",
    "compute_impact_score",
    "compute_recruiter_match_score",
    "compute_trust_score",
    "detect_change_types",
    "generate_match_explanation",
    "project_engineer_view",
    "project_recruiter_view",
]
