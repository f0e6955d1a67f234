"""Front end: Strudel pattern source to a JavaScript syntax tree.

Strudel patterns are plain JavaScript expressions, so the tree comes from
esprima. Only the shape of call expressions is used downstream.

esprima implements ECMAScript 2017. Later syntax such as optional chaining,
nullish coalescing and BigInt literals is reported as a syntax error.
"""
import logging
from typing import Iterator, List

import esprima
from esprima.error_handler import Error as EsprimaError
from esprima.nodes import Node

from src.errors import InvalidInputError, PatternSyntaxError

logger = logging.getLogger(__name__)


def parse_pattern(source: str) -> Node:
    """Parse pattern source as an ES module.

    Args:
        source: Pattern text, already validated

    Returns:
        The root ``Module`` node

    Raises:
        PatternSyntaxError: If the source is not valid ES2017 JavaScript
        InvalidInputError: If the source nests deeper than the parser can descend
    """
    try:
        return esprima.parseModule(source)
    except EsprimaError as e:
        logger.debug("Pattern failed to parse: %s", e)
        raise PatternSyntaxError(f"Invalid pattern syntax: {e}") from e
    except RecursionError as e:
        logger.debug("Pattern nesting exceeded the parser recursion limit")
        raise InvalidInputError("Pattern is nested too deeply", "CODE_TOO_DEEP") from e


def _children(node: Node) -> List[Node]:
    children = []
    for value in vars(node).values():
        if isinstance(value, Node):
            children.append(value)
        elif isinstance(value, list):
            children.extend(item for item in value if isinstance(item, Node))
    return children


def iter_nodes(tree: Node) -> Iterator[Node]:
    """Yield every node of the tree once, parents before children."""
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        # Reversed so the first field is visited first
        stack.extend(reversed(_children(node)))
