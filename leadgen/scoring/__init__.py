"""Scoring module for prospect prioritization."""

from .classify import BusinessClassifier
from .prospect import ProspectScorer, calculate_prospect_score, get_score_breakdown
from .temperature import temperature_for, temperature_ranges
from .notes import next_action, action_plan

__all__ = [
    "BusinessClassifier",
    "ProspectScorer",
    "calculate_prospect_score",
    "get_score_breakdown",
    "temperature_for",
    "temperature_ranges",
    "next_action",
    "action_plan",
]
