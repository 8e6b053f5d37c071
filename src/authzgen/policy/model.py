"""
Policy Model - Structural objects for Istio security policies.

Mirrors the security.istio.io/v1beta1 AuthorizationPolicy schema closely
enough to produce valid fixtures. Field names serialize in camelCase, and
the Rule ``from`` clause is held in the ``from_`` attribute.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from authzgen.errors import (
    UnknownPolicyKindError,
    UnknownRuleKindError,
    UnsupportedActionError,
)

API_VERSION = "security.istio.io/v1beta1"


class Action(str, Enum):
    """Effect of a matched rule."""
    ALLOW = "ALLOW"
    DENY = "DENY"

    @classmethod
    def parse(cls, value: Union[str, "Action"]) -> "Action":
        """Parse an action flag value. Matching is case-sensitive."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedActionError(str(value)) from None


class PolicyKind(str, Enum):
    """Security policy resource kinds."""
    AUTHORIZATION_POLICY = "AuthorizationPolicy"
    PEER_AUTHENTICATION = "PeerAuthentication"
    REQUEST_AUTHENTICATION = "RequestAuthentication"

    @classmethod
    def parse(cls, value: Union[str, "PolicyKind"]) -> "PolicyKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownPolicyKindError(str(value)) from None


class ClauseKind(str, Enum):
    """Rule dimensions: source (from), operation (to), condition (when)."""
    FROM = "from"
    TO = "to"
    WHEN = "when"

    @classmethod
    def parse(cls, value: Union[str, "ClauseKind"]) -> "ClauseKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownRuleKindError(str(value)) from None


class _PolicyObject(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Source(_PolicyObject):
    """Identity of the request originator."""
    principals: List[str] = Field(default_factory=list)
    not_principals: List[str] = Field(default_factory=list)
    request_principals: List[str] = Field(default_factory=list)
    not_request_principals: List[str] = Field(default_factory=list)
    namespaces: List[str] = Field(default_factory=list)
    not_namespaces: List[str] = Field(default_factory=list)
    ip_blocks: List[str] = Field(default_factory=list)
    not_ip_blocks: List[str] = Field(default_factory=list)


class Operation(_PolicyObject):
    """Attributes of the request being matched."""
    hosts: List[str] = Field(default_factory=list)
    not_hosts: List[str] = Field(default_factory=list)
    ports: List[str] = Field(default_factory=list)
    not_ports: List[str] = Field(default_factory=list)
    methods: List[str] = Field(default_factory=list)
    not_methods: List[str] = Field(default_factory=list)
    paths: List[str] = Field(default_factory=list)
    not_paths: List[str] = Field(default_factory=list)


class Condition(_PolicyObject):
    """Additional attribute match, e.g. a request header."""
    key: str
    values: List[str] = Field(default_factory=list)
    not_values: List[str] = Field(default_factory=list)


class From(_PolicyObject):
    source: Source


class To(_PolicyObject):
    operation: Operation


class Rule(_PolicyObject):
    """
    A single rule of an AuthorizationPolicy.

    A request matches the rule when it matches every non-empty clause list.
    """
    from_: List[From] = Field(default_factory=list, alias="from")
    to: List[To] = Field(default_factory=list)
    when: List[Condition] = Field(default_factory=list)


class AuthorizationPolicySpec(_PolicyObject):
    """The ``spec`` body of an AuthorizationPolicy."""
    action: Optional[Action] = None
    rules: List[Rule] = Field(default_factory=list)


class PolicyHeader(_PolicyObject):
    """
    Resource header of a generated policy document.

    Immutable once created; one header is built per generated policy.
    """
    model_config = ConfigDict(frozen=True)

    api_version: str = API_VERSION
    kind: PolicyKind
    namespace: str
    name: str

    def to_dict(self) -> Dict:
        """Convert to the manifest header layout."""
        return {
            "apiVersion": self.api_version,
            "kind": self.kind.value,
            "metadata": {
                "name": self.name,
                "namespace": self.namespace,
            },
        }


def create_policy_header(
    namespace: str,
    name: str,
    kind: Union[str, PolicyKind],
) -> PolicyHeader:
    """Create the header for one generated policy."""
    return PolicyHeader(kind=PolicyKind.parse(kind), namespace=namespace, name=name)
