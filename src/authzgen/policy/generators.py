"""
Clause Generators - Synthesize rule clauses for policy fixtures.

One generator per clause kind:
- ConditionGenerator: ``when`` conditions on request headers
- OperationGenerator: ``to`` operations (methods and paths)
- SourceGenerator: ``from`` sources (peer principals)

Generated values are placeholders that never match real benchmark traffic.
DENY rules list them directly and ALLOW rules negate them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Type
import logging

from authzgen.errors import InvalidOccurrenceError, UnknownRuleKindError
from authzgen.policy.model import (
    Action,
    ClauseKind,
    Condition,
    From,
    Operation,
    Rule,
    Source,
    To,
)

logger = logging.getLogger(__name__)


class ClauseGenerator(ABC):
    """
    Base class for clause generators.

    Subclasses build one clause per occurrence and wrap the clause list
    into a Rule.
    """

    clause_kind: ClauseKind

    def generate(self, name: str, occurrence: int, action: Action) -> Rule:
        """
        Generate a rule carrying ``occurrence`` clauses of this kind.

        Args:
            name: Clause kind name the generator was registered under
            occurrence: Number of clauses to synthesize (0 gives an empty rule)
            action: Policy action the clauses are generated for

        Returns:
            Rule with a single populated clause list
        """
        if name != self.clause_kind.value:
            raise UnknownRuleKindError(name)
        if occurrence < 0:
            raise InvalidOccurrenceError(name, occurrence)

        logger.debug(f"Generating {occurrence} '{name}' clauses for {action.value}")
        clauses = [self._build_clause(i, action) for i in range(1, occurrence + 1)]
        return self._to_rule(clauses)

    @abstractmethod
    def _build_clause(self, index: int, action: Action):
        """Build the clause for 1-based position ``index``."""

    @abstractmethod
    def _to_rule(self, clauses: List) -> Rule:
        """Wrap generated clauses into a Rule."""


class ConditionGenerator(ClauseGenerator):
    """Generates ``when`` conditions keyed on request headers."""

    clause_kind = ClauseKind.WHEN

    def _build_clause(self, index: int, action: Action) -> Condition:
        key = f"request.headers[x-token-{index}]"
        token = f"invalid-token-{index}"
        if action is Action.DENY:
            return Condition(key=key, values=[token])
        return Condition(key=key, not_values=[token])

    def _to_rule(self, clauses: List[Condition]) -> Rule:
        return Rule(when=clauses)


class OperationGenerator(ClauseGenerator):
    """Generates ``to`` operations matching GET requests on a path."""

    clause_kind = ClauseKind.TO

    def _build_clause(self, index: int, action: Action) -> To:
        path = f"/invalid-path-{index}"
        if action is Action.DENY:
            operation = Operation(methods=["GET"], paths=[path])
        else:
            operation = Operation(methods=["GET"], not_paths=[path])
        return To(operation=operation)

    def _to_rule(self, clauses: List[To]) -> Rule:
        return Rule(to=clauses)


class SourceGenerator(ClauseGenerator):
    """Generates ``from`` sources matching peer principals."""

    clause_kind = ClauseKind.FROM

    def _build_clause(self, index: int, action: Action) -> From:
        principal = f"cluster.local/ns/invalid-ns-{index}/sa/invalid-sa-{index}"
        if action is Action.DENY:
            source = Source(principals=[principal])
        else:
            source = Source(not_principals=[principal])
        return From(source=source)

    def _to_rule(self, clauses: List[From]) -> Rule:
        return Rule(from_=clauses)


GENERATORS: Dict[ClauseKind, Type[ClauseGenerator]] = {
    ClauseKind.WHEN: ConditionGenerator,
    ClauseKind.TO: OperationGenerator,
    ClauseKind.FROM: SourceGenerator,
}


def generator_for(kind: ClauseKind) -> ClauseGenerator:
    """Return a generator instance for a clause kind."""
    return GENERATORS[kind]()
