"""
Researcher Agent - Derives contribution patterns and PR analyses from activity.
"""
from .activity_analyzer import build_contribution_pattern, build_pr_analysis, detect_change_types

__all__ = ["build_contribution_pattern", "build_pr_analysis", "detect_change_types"]
