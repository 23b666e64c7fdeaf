"""
Structural parser: Brainfuck source -> nested loop tree.

A tree is a list whose elements are either single-character leaves or nested
lists holding the contents of one loop, with the enclosing brackets stripped.
Only unterminated '[' is rejected; a stray ']' is kept as an ordinary leaf.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, Tuple, Union

from .errors import make_unterminated_error
from .tokens import Token


logger = logging.getLogger(__name__)

Node = Union[str, List["Node"]]


def _collect_loop(blob: str, start: int) -> Tuple[str, int]:
    """
    Collect the body of the loop opened at blob[start].

    Returns the inner text (outermost brackets excluded) and the index just
    past the matching ']', or -1 as the index when input runs out first.
    """
    inner: List[str] = []
    balance = 1
    i = start + 1
    while i < len(blob):
        tok = Token.classify(blob[i])
        if tok is Token.LOOP_START:
            balance += 1
        elif tok is Token.LOOP_STOP:
            balance -= 1
            if balance == 0:
                return ''.join(inner), i + 1
        inner.append(blob[i])
        i += 1
    return ''.join(inner), -1


def _parse(source: str) -> List[Node]:
    # frames are [res, blob, offset, index]; nesting depth is bounded by memory, not recursion
    root: List[Node] = []
    stack = [[root, source, 0, 0]]
    while stack:
        frame = stack[-1]
        res, blob, offset, i = frame
        if i >= len(blob):
            stack.pop()
            continue

        if Token.classify(blob[i]) is not Token.LOOP_START:
            res.append(blob[i])
            frame[3] = i + 1
            continue

        inner, end = _collect_loop(blob, i)
        if end < 0:
            raise make_unterminated_error(source=source, position=offset + i)
        child: List[Node] = []
        res.append(child)
        frame[3] = end
        stack.append([child, inner, offset + i + 1, 0])

    return root


def parse_tree(source: str) -> List[Node]:
    """Parse source into a nested tree. Raises UnterminatedLoopError."""
    tree = _parse(source)
    logger.debug("parsed %d chars into %d top-level nodes", len(source), len(tree))
    return tree


def emit(tree: List[Node]) -> str:
    """Render a tree back to source text."""
    out: List[str] = []
    stack: List[Iterator[Node]] = [iter(tree)]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            if stack:
                out.append(Token.LOOP_STOP.value)
        elif isinstance(node, list):
            out.append(Token.LOOP_START.value)
            stack.append(iter(node))
        else:
            out.append(node)
    return ''.join(out)


def format_tree(tree: List[Node]) -> str:
    """Same text as repr(tree), without recursing per nesting level."""
    out: List[str] = ['[']
    stack: List[Iterator[Node]] = [iter(tree)]
    first = True
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            out.append(']')
            first = False
            continue
        if not first:
            out.append(', ')
        if isinstance(node, list):
            out.append('[')
            stack.append(iter(node))
            first = True
        else:
            out.append(repr(node))
            first = False
    return ''.join(out)


def count_nodes(tree: List[Node]) -> Tuple[int, int]:
    """Count (leaves, loops) across every nesting level."""
    leaves = 0
    loops = 0
    pending = [tree]
    while pending:
        for node in pending.pop():
            if isinstance(node, list):
                loops += 1
                pending.append(node)
            else:
                leaves += 1
    return leaves, loops


def max_depth(tree: List[Node]) -> int:
    depth = 0
    pending = [(tree, 0)]
    while pending:
        nodes, level = pending.pop()
        depth = max(depth, level)
        for node in nodes:
            if isinstance(node, list):
                pending.append((node, level + 1))
    return depth
