from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import numpy as np

from .errors import BFError
from .evaluator import TapeEvaluator
from .parser import Node, parse_tree


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvalOptions:
    max_steps: Optional[int] = None


@dataclass(frozen=True)
class ParseResult:
    result: Optional[List[Node]]
    error: str = ''

    @property
    def ok(self) -> bool:
        return self.error == ''


@dataclass(frozen=True)
class EvalResult:
    # pointer and memory are None whenever error is set
    pointer: Optional[int]
    memory: Optional[np.ndarray]
    output: str = ''
    error: str = ''
    steps: int = 0

    @property
    def ok(self) -> bool:
        return self.error == ''


def parse(source: str) -> ParseResult:
    try:
        tree = parse_tree(source)
    except BFError as e:
        logger.debug("parse failed: %s", e)
        return ParseResult(result=None, error=str(e))
    return ParseResult(result=tree)


def evaluate(source: str, *, options: Optional[EvalOptions] = None) -> EvalResult:
    max_steps = None if options is None else options.max_steps
    evaluator = TapeEvaluator(source, max_steps=max_steps)
    try:
        state = evaluator.run()
    except BFError as e:
        logger.debug("evaluation failed: %s", e)
        return EvalResult(pointer=None, memory=None, error=str(e), steps=evaluator.state.steps)
    return EvalResult(
        pointer=state.pointer,
        memory=state.memory,
        output=''.join(state.output),
        steps=state.steps,
    )


def parse_file(path: str | Path, *, encoding: str = "utf-8") -> ParseResult:
    p = Path(path)
    return parse(p.read_text(encoding=encoding))


def evaluate_file(path: str | Path, *, options: Optional[EvalOptions] = None, encoding: str = "utf-8") -> EvalResult:
    p = Path(path)
    return evaluate(p.read_text(encoding=encoding), options=options)
