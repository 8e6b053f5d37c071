"""
Unit tests for the rule option registry.
"""

import itertools

import pytest

from authzgen.errors import InvalidOccurrenceError, UnknownRuleKindError
from authzgen.policy.generators import ConditionGenerator, OperationGenerator, SourceGenerator
from authzgen.policy.registry import build_rule_options, ordered_rule_names


class TestBuildRuleOptions:
    """Tests for build_rule_options."""

    def test_default_options(self):
        """Test all three clause kinds are bound to their generators."""
        options = build_rule_options({"when": 1, "to": 2, "from": 3})

        assert set(options) == {"when", "to", "from"}
        assert isinstance(options["when"].generator, ConditionGenerator)
        assert isinstance(options["to"].generator, OperationGenerator)
        assert isinstance(options["from"].generator, SourceGenerator)
        assert options["to"].occurrence == 2
        assert options["from"].occurrence == 3

    @pytest.mark.parametrize("size", [0, 1, 2, 3])
    def test_keys_preserved_for_every_subset(self, size):
        """Test result keys equal input keys for each valid subset."""
        for subset in itertools.combinations(["when", "to", "from"], size):
            request = {name: 0 for name in subset}
            assert set(build_rule_options(request)) == set(subset)

    def test_zero_occurrence_allowed(self):
        """Test zero counts are valid."""
        options = build_rule_options({"when": 0})
        assert options["when"].occurrence == 0

    def test_unknown_rule_rejected(self):
        """Test an unrecognized key fails and names the key."""
        with pytest.raises(UnknownRuleKindError, match="bogus") as exc_info:
            build_rule_options({"when": 1, "bogus": 1})

        assert exc_info.value.rule == "bogus"

    def test_negative_occurrence_rejected(self):
        """Test negative counts fail."""
        with pytest.raises(InvalidOccurrenceError):
            build_rule_options({"to": -2})


class TestOrderedRuleNames:
    """Tests for ordered_rule_names."""

    def test_lexicographic_order(self):
        """Test names come back sorted regardless of insertion order."""
        for permutation in itertools.permutations(["when", "to", "from"]):
            options = build_rule_options({name: 1 for name in permutation})
            assert ordered_rule_names(options) == ["from", "to", "when"]
