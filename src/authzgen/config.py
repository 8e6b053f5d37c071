"""
authzgen Configuration

Generator options, parsed once into an immutable config and passed into
the core. Environment variables override the built-in defaults; command
line flags override both.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union
import os

from authzgen.errors import ConfigurationError
from authzgen.policy.model import Action, PolicyKind


DEFAULT_NAMESPACE = "twopods-istio"
DEFAULT_POLICY_TYPE = PolicyKind.AUTHORIZATION_POLICY
DEFAULT_ACTION = Action.DENY
DEFAULT_NUM_POLICIES = 1
DEFAULT_OCCURRENCE = 1

# Declaration order of the clause flags; generation order is always sorted.
RULE_NAMES = ("when", "to", "from")

POLICY_NAME_FORMAT = "test-{index}"

ENV_OPTIONS = {
    "AUTHZGEN_NAMESPACE": "namespace",
    "AUTHZGEN_POLICY_TYPE": "policy_type",
    "AUTHZGEN_ACTION": "action",
    "AUTHZGEN_NUM_POLICIES": "num_policies",
}


def _default_rule_occurrences() -> Dict[str, int]:
    return {name: DEFAULT_OCCURRENCE for name in RULE_NAMES}


@dataclass(frozen=True)
class GeneratorConfig:
    """Options for one generator run."""

    namespace: str = DEFAULT_NAMESPACE
    policy_kind: PolicyKind = DEFAULT_POLICY_TYPE
    action: Action = DEFAULT_ACTION
    num_policies: int = DEFAULT_NUM_POLICIES

    # Clause kind name -> occurrence count, shared by every policy of the batch
    rule_occurrences: Mapping[str, int] = field(default_factory=_default_rule_occurrences)

    def __post_init__(self):
        object.__setattr__(self, "rule_occurrences", MappingProxyType(dict(self.rule_occurrences)))
        if self.num_policies < 0:
            raise ConfigurationError(
                f"invalid number of policies: {self.num_policies} (must be >= 0)"
            )

    @classmethod
    def from_options(
        cls,
        namespace: str = DEFAULT_NAMESPACE,
        policy_type: Union[str, PolicyKind] = DEFAULT_POLICY_TYPE,
        action: Union[str, Action] = DEFAULT_ACTION,
        num_policies: int = DEFAULT_NUM_POLICIES,
        rule_occurrences: Optional[Mapping[str, int]] = None,
    ) -> "GeneratorConfig":
        """
        Create config from raw option values.

        Policy type and action strings are parsed here, so unknown values
        fail before any policy is generated.
        """
        if rule_occurrences is None:
            rule_occurrences = _default_rule_occurrences()
        return cls(
            namespace=namespace,
            policy_kind=PolicyKind.parse(policy_type),
            action=Action.parse(action),
            num_policies=num_policies,
            rule_occurrences=dict(rule_occurrences),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GeneratorConfig":
        """Create config from environment variables."""
        options: Dict[str, Any] = dict(env_options(environ))
        if num_policies := options.get("num_policies"):
            try:
                options["num_policies"] = int(num_policies)
            except ValueError:
                raise ConfigurationError(
                    f"invalid AUTHZGEN_NUM_POLICIES: {num_policies!r}"
                ) from None

        return cls.from_options(**options)

    def policy_name(self, index: int) -> str:
        """Name of the ``index``-th (1-based) generated policy."""
        return POLICY_NAME_FORMAT.format(index=index)


def env_options(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Read AUTHZGEN_* variables as raw option strings.

    Values are not parsed here; the command line uses them as flag defaults
    and from_options() parses whatever wins.
    """
    if environ is None:
        environ = os.environ

    options = {}
    for variable, option in ENV_OPTIONS.items():
        if value := environ.get(variable):
            options[option] = value
    return options
