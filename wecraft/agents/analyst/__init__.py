"""
Analyst Agent - Trust, impact and role compatibility scoring.
"""
from .compatibility import CompatibilityScorer, compatibility_level, compute_compatibility_score
from .impact import ImpactScorer, compute_impact_score
from .role_profiles import SUPPORTED_ROLES, get_role_profile, load_role_profiles
from .trust import TrustScorer, compute_trust_score

__all__ = [
    "CompatibilityScorer",
    "ImpactScorer",
    "TrustScorer",
    "SUPPORTED_ROLES",
    "compatibility_level",
    "compute_compatibility_score",
    "compute_impact_score",
    "compute_trust_score",
    "get_role_profile",
    "load_role_profiles",
]
