"""Feature extraction from pattern syntax trees.

A feature is one call expression reduced to its callee name and its literal
arguments. Arguments that are not literals (identifiers, nested calls,
arithmetic, spreads) are dropped from the call rather than rejected, so only
literal parameters contribute to the DNA.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from esprima.nodes import Node

from src.dna.normalize import Scalar, normalize_arg
from src.dna.parser import iter_nodes


class ArgKind(Enum):
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class ClassifiedArg:
    """A call argument resolved once to its literal kind."""
    kind: ArgKind
    value: Any = None

    @property
    def is_literal(self) -> bool:
        return self.kind is not ArgKind.UNSUPPORTED


UNSUPPORTED = ClassifiedArg(ArgKind.UNSUPPORTED)


@dataclass(frozen=True)
class FeatureCall:
    """One call expression: callee name and normalized literal arguments."""
    name: str
    args: Tuple[Scalar, ...] = ()


def _template_head(node: Node) -> Optional[str]:
    quasis = getattr(node, "quasis", None) or []
    if not quasis:
        return None
    value = getattr(quasis[0], "value", None)
    if isinstance(value, dict):
        return value.get("raw")
    return getattr(value, "raw", None)


def classify_arg(node: Node) -> ClassifiedArg:
    """Classify a call argument node.

    Template literals contribute the raw text of their first static segment.
    ``null`` and regular expression literals are unsupported.
    """
    node_type = getattr(node, "type", None)
    if node_type == "Literal":
        if getattr(node, "regex", None):
            return UNSUPPORTED
        value = node.value
        if isinstance(value, bool):
            return ClassifiedArg(ArgKind.BOOLEAN, value)
        if isinstance(value, (int, float)):
            return ClassifiedArg(ArgKind.NUMBER, value)
        if isinstance(value, str):
            return ClassifiedArg(ArgKind.STRING, value)
        return UNSUPPORTED
    if node_type == "TemplateLiteral":
        head = _template_head(node)
        if head is None:
            return UNSUPPORTED
        return ClassifiedArg(ArgKind.STRING, head)
    return UNSUPPORTED


def callee_name(call: Node) -> Optional[str]:
    """Resolve ``foo(...)`` and ``x.foo(...)`` to ``foo``.

    Computed members (``x["foo"]()``) and calls of call results are not
    resolvable and return None.
    """
    callee = call.callee
    callee_type = getattr(callee, "type", None)
    if callee_type == "Identifier":
        return callee.name or None
    if callee_type == "MemberExpression" and not getattr(callee, "computed", False):
        prop = callee.property
        if getattr(prop, "type", None) == "Identifier":
            return prop.name or None
    return None


def extract_features(tree: Node) -> List[FeatureCall]:
    """Collect every resolvable call in pre-order traversal order.

    Args:
        tree: Root node returned by ``parse_pattern``

    Returns:
        FeatureCall list with normalized arguments, duplicates included
    """
    features = []
    for node in iter_nodes(tree):
        if getattr(node, "type", None) != "CallExpression":
            continue
        name = callee_name(node)
        if not name:
            continue
        classified = [classify_arg(arg) for arg in node.arguments or []]
        args = tuple(normalize_arg(arg.value) for arg in classified if arg.is_literal)
        features.append(FeatureCall(name=name, args=args))
    return features
