"""
Condition evaluation for field visibility.

A condition is a single field lookup plus set membership with optional
negation. There is no compound boolean logic, so evaluation never depends on
the order conditions are checked in.
"""

from typing import Any, Mapping

from blockflow.models.contracts.blocks import VisibilityCondition
from blockflow.services.resolution.values import is_empty, same_value


def evaluate(condition: VisibilityCondition, values: Mapping[str, Any]) -> bool:
    """
    Check a visibility condition against the current form values.

    Args:
        condition: Condition to evaluate
        values: Current raw values keyed by field key

    Returns:
        True if the referenced value is one of condition.matches_any_of
        (inverted when condition.negate is set). A referenced field with no
        value never satisfies the condition, negated or not.
    """
    current = values.get(condition.on_field)
    if is_empty(current):
        return False

    matched = any(same_value(current, expected) for expected in condition.matches_any_of)
    return matched != condition.negate
