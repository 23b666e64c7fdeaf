from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


UNTERMINATED_LOOP = 'unterminated loop'


def _build_context(lines: List[str], line_no_1: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
    return "\n".join(out)


def _locate(source: str, position: int) -> Tuple[int, int]:
    # 1-based line and column of a 0-based source index
    before = source[:position]
    line = before.count('\n') + 1
    column = position - (before.rfind('\n') + 1) + 1
    return line, column


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class UnterminatedLoopError(BFError):
    position: int = -1
    line: int = 0
    column: int = 0
    context: str = ''

    def report(self) -> str:
        head = f"{self.message} (line {self.line}, column {self.column})"
        if not self.context:
            return head
        hint = "Hint: every '[' needs a matching ']' (and a ']' that jumps back needs an earlier '[')."
        return f"{head}\n{self.context}\n{hint}"


@dataclass
class StepLimitExceeded(BFError):
    steps: int = 0
    limit: int = 0


def make_unterminated_error(*, source: str, position: int) -> UnterminatedLoopError:
    line, column = _locate(source, position)
    ctx = _build_context(source.split('\n'), line)
    return UnterminatedLoopError(
        message=UNTERMINATED_LOOP,
        position=position,
        line=line,
        column=column,
        context=ctx,
    )


def make_step_limit_error(*, steps: int, limit: int) -> StepLimitExceeded:
    return StepLimitExceeded(
        message=f"step limit exceeded ({limit} steps)",
        steps=steps,
        limit=limit,
    )
