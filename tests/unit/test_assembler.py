"""
Unit tests for the policy assembler.
"""

import pytest
import yaml

from authzgen.errors import UnimplementedPolicyKindError, UnsupportedActionError
from authzgen.policy.assembler import (
    PolicyAssembler,
    assemble_authorization_policy,
    create_rules,
)
from authzgen.policy.model import Action, PolicyKind, create_policy_header
from authzgen.policy.registry import build_rule_options


EXPECTED_DENY_POLICY = """\
apiVersion: security.istio.io/v1beta1
kind: AuthorizationPolicy
metadata:
  name: test-1
  namespace: twopods-istio
spec:
  action: DENY
  rules:
  - from:
    - source:
        principals:
        - cluster.local/ns/invalid-ns-1/sa/invalid-sa-1
  - to:
    - operation:
        methods:
        - GET
        paths:
        - /invalid-path-1
  - when:
    - key: request.headers[x-token-1]
      values:
      - invalid-token-1
"""


@pytest.fixture
def header():
    return create_policy_header("twopods-istio", "test-1", "AuthorizationPolicy")


class TestPolicyAssembler:
    """Tests for PolicyAssembler."""

    def test_action_parsed(self):
        """Test string actions are parsed once."""
        assert PolicyAssembler("ALLOW").action is Action.ALLOW
        assert PolicyAssembler(Action.DENY).action is Action.DENY

    @pytest.mark.parametrize("action", ["AUDIT", "deny", ""])
    def test_unsupported_action(self, action):
        """Test unknown actions fail fast."""
        with pytest.raises(UnsupportedActionError):
            PolicyAssembler(action)

    def test_rules_in_lexicographic_order(self):
        """Test rules follow sorted clause kind names, not insertion order."""
        options = build_rule_options({"when": 1, "to": 1, "from": 1})
        spec = PolicyAssembler(Action.DENY).assemble(options)

        assert spec.action is Action.DENY
        assert len(spec.rules) == 3
        assert spec.rules[0].from_ and not spec.rules[0].to
        assert spec.rules[1].to and not spec.rules[1].when
        assert spec.rules[2].when and not spec.rules[2].from_

    def test_occurrence_counts(self):
        """Test each rule carries its configured number of clauses."""
        options = build_rule_options({"from": 3, "when": 2, "to": 0})
        spec = assemble_authorization_policy("ALLOW", options)

        assert len(spec.rules[0].from_) == 3
        assert spec.rules[1].to == []
        assert len(spec.rules[2].when) == 2

    def test_render_deny_policy(self, header):
        """Test the full DENY document."""
        options = build_rule_options({"when": 1, "to": 1, "from": 1})
        assert PolicyAssembler("DENY").render(header, options) == EXPECTED_DENY_POLICY

    def test_render_is_idempotent(self, header):
        """Test identical inputs give byte-identical documents."""
        first = create_rules("ALLOW", build_rule_options({"when": 2, "to": 1, "from": 0}), header)
        second = create_rules("ALLOW", build_rule_options({"when": 2, "to": 1, "from": 0}), header)
        assert first == second

    def test_render_independent_of_key_order(self, header):
        """Test permuted rule requests give byte-identical output."""
        a = create_rules("DENY", build_rule_options({"when": 1, "to": 2, "from": 3}), header)
        b = create_rules("DENY", build_rule_options({"from": 3, "when": 1, "to": 2}), header)
        assert a == b

    def test_zero_occurrence_document(self, header):
        """Test a zero count renders an empty rule instead of failing."""
        document = create_rules("DENY", build_rule_options({"when": 0, "to": 1}), header)
        rules = yaml.safe_load(document)["spec"]["rules"]

        assert len(rules) == 2
        assert "to" in rules[0]
        assert rules[1] == {}

    @pytest.mark.parametrize("kind", [
        PolicyKind.PEER_AUTHENTICATION,
        PolicyKind.REQUEST_AUTHENTICATION,
    ])
    def test_unimplemented_kinds(self, kind):
        """Test non-AuthorizationPolicy kinds fail as unimplemented."""
        header = create_policy_header("twopods-istio", "test-1", kind)
        options = build_rule_options({"when": 1})

        with pytest.raises(UnimplementedPolicyKindError, match="unimplemented"):
            create_rules("DENY", options, header)
