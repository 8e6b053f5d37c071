"""
authzgen Policy Module

Rule generation engine for security policy fixtures.

Key components:
- ClauseGenerator: Synthesize when/to/from clauses
- build_rule_options: Bind clause kinds to counts and generators
- PolicyAssembler: Build ordered rule lists and render documents
- policy_to_yaml: Merge header and spec into a YAML document
"""

from authzgen.policy.model import (
    API_VERSION,
    Action,
    ClauseKind,
    PolicyKind,
    PolicyHeader,
    AuthorizationPolicySpec,
    Rule,
    From,
    To,
    Source,
    Operation,
    Condition,
    create_policy_header,
)
from authzgen.policy.generators import (
    ClauseGenerator,
    ConditionGenerator,
    OperationGenerator,
    SourceGenerator,
    generator_for,
)
from authzgen.policy.registry import RuleOption, build_rule_options, ordered_rule_names
from authzgen.policy.renderer import to_json, to_yaml, header_to_yaml, policy_to_yaml
from authzgen.policy.assembler import (
    PolicyAssembler,
    assemble_authorization_policy,
    create_rules,
)

__all__ = [
    # Model
    "API_VERSION",
    "Action",
    "ClauseKind",
    "PolicyKind",
    "PolicyHeader",
    "AuthorizationPolicySpec",
    "Rule",
    "From",
    "To",
    "Source",
    "Operation",
    "Condition",
    "create_policy_header",
    # Generators
    "ClauseGenerator",
    "ConditionGenerator",
    "OperationGenerator",
    "SourceGenerator",
    "generator_for",
    # Registry
    "RuleOption",
    "build_rule_options",
    "ordered_rule_names",
    # Rendering
    "to_json",
    "to_yaml",
    "header_to_yaml",
    "policy_to_yaml",
    # Assembly
    "PolicyAssembler",
    "assemble_authorization_policy",
    "create_rules",
]
