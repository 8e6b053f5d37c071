"""
Rule Option Registry - Bind clause kinds to occurrence counts and generators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping
import logging

from authzgen.errors import InvalidOccurrenceError
from authzgen.policy.generators import ClauseGenerator, generator_for
from authzgen.policy.model import ClauseKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleOption:
    """How many clauses of one kind to generate, and with which generator."""
    occurrence: int
    generator: ClauseGenerator


def build_rule_options(rule_to_occurrences: Mapping[str, int]) -> Dict[str, RuleOption]:
    """
    Build the rule option map for one policy.

    Args:
        rule_to_occurrences: Clause kind name (when, to, from) -> occurrence count

    Returns:
        Clause kind name -> RuleOption, with exactly the input keys

    Raises:
        UnknownRuleKindError: A key is not a recognized clause kind
        InvalidOccurrenceError: An occurrence count is negative
    """
    options: Dict[str, RuleOption] = {}
    for rule, occurrence in rule_to_occurrences.items():
        kind = ClauseKind.parse(rule)
        if occurrence < 0:
            raise InvalidOccurrenceError(rule, occurrence)
        options[rule] = RuleOption(occurrence=occurrence, generator=generator_for(kind))

    logger.debug(f"Built {len(options)} rule options: {sorted(options)}")
    return options


def ordered_rule_names(rule_options: Mapping[str, RuleOption]) -> List[str]:
    """Rule names in the order they are applied: lexicographic."""
    return sorted(rule_options)
