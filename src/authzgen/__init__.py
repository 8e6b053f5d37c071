"""
authzgen - Security policy fixture generator

Synthesizes Istio AuthorizationPolicy documents with a configurable number
of when/to/from clauses for service-mesh performance benchmarks.

Modules:
- config: Generator options
- policy: Clause generators, rule option registry, assembly and rendering
- cli: Command line driver
"""

__version__ = "0.1.0"

from authzgen.config import GeneratorConfig
from authzgen.errors import (
    AuthzGenError,
    ConfigurationError,
    UnknownRuleKindError,
    InvalidOccurrenceError,
    UnsupportedActionError,
    UnknownPolicyKindError,
    UnimplementedPolicyKindError,
    SerializationError,
)
from authzgen.policy import (
    Action,
    ClauseKind,
    PolicyKind,
    PolicyHeader,
    PolicyAssembler,
    build_rule_options,
    create_policy_header,
    create_rules,
    policy_to_yaml,
)

__all__ = [
    "__version__",
    # Config
    "GeneratorConfig",
    # Errors
    "AuthzGenError",
    "ConfigurationError",
    "UnknownRuleKindError",
    "InvalidOccurrenceError",
    "UnsupportedActionError",
    "UnknownPolicyKindError",
    "UnimplementedPolicyKindError",
    "SerializationError",
    # Policy
    "Action",
    "ClauseKind",
    "PolicyKind",
    "PolicyHeader",
    "PolicyAssembler",
    "build_rule_options",
    "create_policy_header",
    "create_rules",
    "policy_to_yaml",
]
