from __future__ import annotations

from enum import Enum


VALID_TOKENS = '+-<>[],.'


class Token(Enum):
    """The Brainfuck alphabet. OTHER stands for every comment character."""

    INCR = '+'
    DECR = '-'
    LEFT = '<'
    RIGHT = '>'
    LOOP_START = '['
    LOOP_STOP = ']'
    INPUT = ','
    PRINT = '.'
    OTHER = ''

    @classmethod
    def classify(cls, ch: str) -> 'Token':
        return _BY_CHAR.get(ch, cls.OTHER)


_BY_CHAR = {tok.value: tok for tok in Token if tok is not Token.OTHER}


def is_code_char(ch: str) -> bool:
    return Token.classify(ch) is not Token.OTHER
