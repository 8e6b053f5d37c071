"""
Policy Assembler - Build policy specs from rule options.

Runs the clause generators in lexicographic order of their clause kind
names so identical inputs always produce byte-identical documents.
"""

from __future__ import annotations

from typing import List, Mapping, Union
import logging

from authzgen.errors import UnimplementedPolicyKindError
from authzgen.policy.model import (
    Action,
    AuthorizationPolicySpec,
    PolicyHeader,
    PolicyKind,
    Rule,
)
from authzgen.policy.registry import RuleOption, ordered_rule_names
from authzgen.policy.renderer import policy_to_yaml

logger = logging.getLogger(__name__)


class PolicyAssembler:
    """
    Assemble and render security policies for a single action.

    Example:
        >>> assembler = PolicyAssembler(Action.DENY)
        >>> options = build_rule_options({"when": 1, "to": 1, "from": 1})
        >>> print(assembler.render(header, options))
    """

    def __init__(self, action: Union[str, Action]):
        """
        Initialize the assembler.

        Args:
            action: ALLOW or DENY; other values raise UnsupportedActionError
        """
        self.action = Action.parse(action)

    def build_rules(self, rule_options: Mapping[str, RuleOption]) -> List[Rule]:
        """Generate one rule per option, in sorted option-name order."""
        rules = []
        for name in ordered_rule_names(rule_options):
            option = rule_options[name]
            rules.append(option.generator.generate(name, option.occurrence, self.action))
        return rules

    def assemble(self, rule_options: Mapping[str, RuleOption]) -> AuthorizationPolicySpec:
        """Build the AuthorizationPolicy spec body."""
        rules = self.build_rules(rule_options)
        return AuthorizationPolicySpec(action=self.action, rules=rules)

    def render(self, header: PolicyHeader, rule_options: Mapping[str, RuleOption]) -> str:
        """
        Generate the YAML document for one policy.

        Raises:
            UnimplementedPolicyKindError: PeerAuthentication or RequestAuthentication
        """
        if header.kind is PolicyKind.AUTHORIZATION_POLICY:
            spec = self.assemble(rule_options)
            logger.debug(f"Assembled {header.name} with {len(spec.rules)} rules")
            return policy_to_yaml(header, spec)

        raise UnimplementedPolicyKindError(header.kind.value)


def assemble_authorization_policy(
    action: Union[str, Action],
    rule_options: Mapping[str, RuleOption],
) -> AuthorizationPolicySpec:
    """Convenience wrapper around PolicyAssembler.assemble."""
    return PolicyAssembler(action).assemble(rule_options)


def create_rules(
    action: Union[str, Action],
    rule_options: Mapping[str, RuleOption],
    header: PolicyHeader,
) -> str:
    """
    Create the rendered policy document for ``header``.

    Args:
        action: Policy action (ALLOW or DENY)
        rule_options: Output of build_rule_options()
        header: Header of the policy being generated

    Returns:
        YAML policy document
    """
    return PolicyAssembler(action).render(header, rule_options)
