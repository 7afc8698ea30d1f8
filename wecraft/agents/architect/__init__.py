"""
Architect Agent - Recruiter match scoring, view projection and explanations.
"""
from .explanation_generator import ExplanationGenerator, generate_match_explanation
from .recruiter_match import (
    RecruiterMatchScorer,
    compute_recruiter_match_score,
    project_engineer_view,
    project_recruiter_view,
)

__all__ = [
    "ExplanationGenerator",
    "RecruiterMatchScorer",
    "compute_recruiter_match_score",
    "generate_match_explanation",
    "project_engineer_view",
    "project_recruiter_view",
]
