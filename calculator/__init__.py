from .accumulator import Accumulator
from .operations import Operation, Add, Subtract, OperationVisitor
from .evaluator import Evaluator, evaluate, parse_operations, OperationSyntaxError
from .greeting import greet

__all__ = [
    'Accumulator',
    'Operation', 'Add', 'Subtract', 'OperationVisitor',
    'Evaluator', 'evaluate', 'parse_operations', 'OperationSyntaxError',
    'greet',
]
