"""Per-line matching and transformation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ldx.rules import RuleSet

logger = logging.getLogger(__name__)

# Prefix used to attribute diagnostics to this tool
LOG_NAMESPACE = "LDX"


def process_line(line: str, rules: RuleSet | Mapping[str, Any] | Iterable[tuple[str, Any]]) -> str | None:
    """Rewrite ``line`` using the first rule whose pattern it contains.

    Args:
        line: A single line of child output, without its newline.
        rules: Ordered rules. Mappings and pair lists are converted to a RuleSet.

    Returns:
        The replacement text, or None when the line should be dropped: no rule
        matched, the matched transform raised, or the matched action is neither
        a string nor a callable. The last two cases are logged as warnings.
    """
    rule = RuleSet.coerce(rules).first_match(line)
    if rule is None:
        return None

    action = rule.action
    if isinstance(action, str):
        return action

    if callable(action):
        try:
            result = action(line)
        except Exception as e:  # noqa: BLE001
            logger.warning("%s: provided function errored: %s", LOG_NAMESPACE, e)
            return None
        if result is None or isinstance(result, str):
            return result
        return str(result)

    logger.warning("Invalid configuration for key: %s. Expected string or function.", rule.pattern)
    return None
