import logging

from .api import EvalOptions, EvalResult, ParseResult, evaluate, evaluate_file, parse, parse_file
from .errors import BFError, StepLimitExceeded, UnterminatedLoopError
from .evaluator import TapeEvaluator, execute
from .parser import emit, parse_tree
from .state import TAPE_LENGTH, TapeState
from .tokens import Token, VALID_TOKENS

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'parse',
    'evaluate',
    'parse_file',
    'evaluate_file',
    'EvalOptions',
    'EvalResult',
    'ParseResult',
    'BFError',
    'UnterminatedLoopError',
    'StepLimitExceeded',
    'TapeEvaluator',
    'TapeState',
    'execute',
    'parse_tree',
    'emit',
    'Token',
    'VALID_TOKENS',
    'TAPE_LENGTH',
]
