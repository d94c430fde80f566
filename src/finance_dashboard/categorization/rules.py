"""Deterministic keyword-rule categorization.

Each user keeps their own keyword -> category rules. A transaction's
description is matched against those rules with a case-insensitive substring
test, and the first matching rule in store order wins. There is no
"most specific rule" heuristic.

Descriptions that match nothing stay uncategorized; a future automatic
classifier may fill them in, but never as a confirmed assignment.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


class KeywordRule(Protocol):
    keyword: str
    category_id: int


@dataclass(frozen=True)
class CategorizationResult:
    """Outcome of categorizing one description."""

    category_id: int | None
    is_confirmed: bool


UNCATEGORIZED = CategorizationResult(category_id=None, is_confirmed=False)


def _norm(text: str | None) -> str:
    return (text or "").upper()


def match_rule(description: str | None, rules: Iterable[KeywordRule]) -> KeywordRule | None:
    """Return the first rule whose keyword occurs in the description.

    Ordering matters: rules are scanned in the order given and the first
    hit wins, even if a later keyword is longer or more specific. Empty
    keywords never match.
    """
    text = _norm(description)
    if not text:
        return None

    for rule in rules:
        keyword = _norm(rule.keyword)
        if keyword and keyword in text:
            return rule
    return None


def categorize(description: str | None, rules: Iterable[KeywordRule]) -> CategorizationResult:
    """Categorize a description against a user's rules.

    Args:
        description: Free-text transaction description.
        rules: The user's rules in store order.

    Returns:
        The matched rule's category (confirmed), or UNCATEGORIZED.
    """
    rule = match_rule(description, rules)
    if rule is None:
        return UNCATEGORIZED
    return CategorizationResult(category_id=rule.category_id, is_confirmed=True)
