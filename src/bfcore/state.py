from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np


TAPE_LENGTH = 30000
CELL_MASK = 0xFF


def _zeroed_tape() -> np.ndarray:
    return np.zeros(TAPE_LENGTH, dtype=np.uint8)


@dataclass
class TapeState:
    memory: np.ndarray = field(default_factory=_zeroed_tape)
    pointer: int = 0
    pc: int = 0
    output: List[str] = field(default_factory=list)
    steps: int = 0

    def reset(self) -> None:
        self.memory[:] = 0
        self.pointer = 0
        self.pc = 0
        self.output.clear()
        self.steps = 0

    def snapshot(self) -> 'TapeState':
        return TapeState(
            memory=self.memory.copy(),
            pointer=self.pointer,
            pc=self.pc,
            output=list(self.output),
            steps=self.steps,
        )

    @property
    def cell(self) -> int:
        return int(self.memory[self.pointer])
