"""Transaction categorization utilities.

This module assigns categories to transactions from user-defined keyword
rules. Matching is local and deterministic.
"""

from .rules import UNCATEGORIZED, CategorizationResult, categorize, match_rule

__all__ = ["UNCATEGORIZED", "CategorizationResult", "categorize", "match_rule"]
