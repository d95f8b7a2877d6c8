"""Rules package."""

from mafiascore.rules.catalog import RuleSet, DEFAULT_RULES

__all__ = [
    "RuleSet",
    "DEFAULT_RULES",
]
