"""
Tape evaluator.

Runs Brainfuck source directly from text. Loop boundaries are found by
balance-counted scans each time a jump is taken, independently of the
structural parser.

Out-of-range policy: cells are 8-bit and wrap modulo 256, the data pointer
wraps modulo TAPE_LENGTH.
"""
from __future__ import annotations

import logging
from typing import Optional

from .errors import make_step_limit_error, make_unterminated_error
from .state import CELL_MASK, TAPE_LENGTH, TapeState
from .tokens import Token


logger = logging.getLogger(__name__)


def scan_forward(source: str, start: int) -> int:
    """
    Given the index of a '[', return the index of its matching ']'.
    Returns -1 when the input ends first.
    """
    balance = 0
    i = start
    while i < len(source):
        tok = Token.classify(source[i])
        if tok is Token.LOOP_START:
            balance += 1
        elif tok is Token.LOOP_STOP:
            balance -= 1
        if balance == 0:
            return i
        i += 1
    return -1


def scan_backward(source: str, start: int) -> int:
    """
    Given the index of a ']', return the index of its matching '['.
    Returns -1 when the scan runs off the start.
    """
    balance = 0
    i = start
    while i >= 0:
        tok = Token.classify(source[i])
        if tok is Token.LOOP_STOP:
            balance += 1
        elif tok is Token.LOOP_START:
            balance -= 1
        if balance == 0:
            return i
        i -= 1
    return -1


class TapeEvaluator:
    """Single-use evaluator over one source text and one fresh tape."""

    def __init__(self, source: str, max_steps: Optional[int] = None):
        if max_steps is not None and max_steps < 0:
            raise ValueError(f"max_steps must be >= 0, got {max_steps}")
        self.source = source
        self.max_steps = max_steps
        self.state = TapeState()

    def reset(self) -> None:
        self.state.reset()

    def step(self) -> bool:
        """
        Execute the character at the program counter.

        Returns:
            True while there is more source to execute.
        """
        st = self.state
        if st.pc >= len(self.source):
            return False

        tok = Token.classify(self.source[st.pc])
        if tok is not Token.OTHER:
            if self.max_steps is not None and st.steps >= self.max_steps:
                raise make_step_limit_error(steps=st.steps, limit=self.max_steps)
            st.steps += 1

        if tok is Token.INCR:
            st.memory[st.pointer] = (st.cell + 1) & CELL_MASK
        elif tok is Token.DECR:
            st.memory[st.pointer] = (st.cell - 1) & CELL_MASK
        elif tok is Token.RIGHT:
            st.pointer = (st.pointer + 1) % TAPE_LENGTH
        elif tok is Token.LEFT:
            st.pointer = (st.pointer - 1) % TAPE_LENGTH
        elif tok is Token.INPUT:
            pass  # input is accepted but never read
        elif tok is Token.PRINT:
            st.output.append(chr(st.cell))
        elif tok is Token.LOOP_START:
            if st.cell == 0:
                match = scan_forward(self.source, st.pc)
                if match < 0:
                    raise make_unterminated_error(source=self.source, position=st.pc)
                st.pc = match
        elif tok is Token.LOOP_STOP:
            if st.cell > 0:
                match = scan_backward(self.source, st.pc)
                if match < 0:
                    raise make_unterminated_error(source=self.source, position=st.pc)
                st.pc = match
        elif tok is Token.OTHER:
            pass

        st.pc += 1
        return st.pc < len(self.source)

    def run(self) -> TapeState:
        logger.debug("evaluating %d chars (max_steps=%s)", len(self.source), self.max_steps)
        while self.step():
            pass
        logger.debug("finished after %d steps, pointer=%d", self.state.steps, self.state.pointer)
        return self.state


def execute(source: str, *, max_steps: Optional[int] = None) -> TapeState:
    return TapeEvaluator(source, max_steps=max_steps).run()
