"""Tests for the pattern front end."""
import pytest

from src.dna.parser import iter_nodes, parse_pattern
from src.errors import DNAError, InvalidInputError, PatternSyntaxError


class TestParsePattern:
    """Parsing pattern source."""

    def test_parses_chained_calls(self, muffled_bass):
        tree = parse_pattern(muffled_bass)
        assert tree.type == "Program"

    def test_parses_template_literals(self):
        tree = parse_pattern("s(`bd ${x} sd`).fast(2)")
        types = {node.type for node in iter_nodes(tree)}
        assert "TemplateLiteral" in types

    def test_invalid_source_raises_typed_error(self):
        with pytest.raises(PatternSyntaxError) as exc_info:
            parse_pattern("{ invalid")
        assert exc_info.value.code == "SYNTAX_ERROR"
        assert exc_info.value.status == 400
        assert isinstance(exc_info.value, DNAError)

    def test_unbalanced_call_raises(self):
        with pytest.raises(PatternSyntaxError):
            parse_pattern('s("bass".slow(2)')

    @pytest.mark.parametrize("source", [
        "stack(" * 100 + 's("bd")' + ")" * 100,
        "f(" * 300 + ")" * 300,
        "(" * 400 + "1" + ")" * 400,
    ])
    def test_deep_nesting_raises_typed_error(self, source):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_pattern(source)
        assert exc_info.value.code == "CODE_TOO_DEEP"

    @pytest.mark.parametrize("source", [
        's("bd")?.fast(2)',
        "s(x ?? 1)",
        "s(10n)",
    ])
    def test_syntax_after_es2017_is_rejected(self, source):
        with pytest.raises(PatternSyntaxError):
            parse_pattern(source)

    def test_es2017_syntax_parses(self):
        tree = parse_pattern('s("bd").every(2, async (p) => p.fast(2 ** 2))')
        assert tree.type == "Program"


class TestIterNodes:
    """Tree traversal."""

    def test_root_comes_first(self, muffled_bass):
        tree = parse_pattern(muffled_bass)
        assert next(iter_nodes(tree)) is tree

    def test_visits_each_node_once(self, fast_techno):
        nodes = list(iter_nodes(parse_pattern(fast_techno)))
        assert len(nodes) == len({id(n) for n in nodes})

    def test_outer_calls_before_inner_calls(self, muffled_bass):
        calls = [
            n for n in iter_nodes(parse_pattern(muffled_bass))
            if n.type == "CallExpression"
        ]
        names = [
            c.callee.property.name if c.callee.type == "MemberExpression" else c.callee.name
            for c in calls
        ]
        assert names == ["lpf", "distort", "slow", "s"]

    def test_traversal_is_deterministic(self, fast_techno):
        first = [n.type for n in iter_nodes(parse_pattern(fast_techno))]
        second = [n.type for n in iter_nodes(parse_pattern(fast_techno))]
        assert first == second
