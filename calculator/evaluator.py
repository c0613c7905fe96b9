"""
Применение последовательности операций к аккумулятору
и разбор текстовой записи вида "+5 -2 add 3 sub 1.5".
"""
import logging
from typing import List, Optional, Sequence

from .accumulator import Accumulator
from .operations import Operation, OperationVisitor, Add, Subtract

logger = logging.getLogger(__name__)

# Словесные синонимы операторов
OPERATOR_WORDS = {
    '+': Add,
    'add': Add,
    'plus': Add,
    '-': Subtract,
    'sub': Subtract,
    'subtract': Subtract,
    'minus': Subtract,
}


class OperationSyntaxError(ValueError):
    """Некорректная текстовая запись операции."""

    def __init__(self, message: str, token: str, position: int):
        super().__init__(message)
        self.token = token
        self.position = position


class Evaluator(OperationVisitor):
    """Применяет операции строго слева направо."""

    def __init__(self, start: Optional[Accumulator] = None):
        self.acc = start if start is not None else Accumulator.new()

    def visit_add(self, op: Add) -> Accumulator:
        self.acc = self.acc.add(op.amount)
        return self.acc

    def visit_subtract(self, op: Subtract) -> Accumulator:
        self.acc = self.acc.subtract(op.amount)
        return self.acc

    def run(self, operations: Sequence[Operation]) -> Accumulator:
        for op in operations:
            op.accept(self)
            logger.debug(f"{op} -> {self.acc.value}")
        return self.acc


def evaluate(operations: Sequence[Operation], start: Optional[Accumulator] = None) -> float:
    return Evaluator(start).run(operations).get_value()


def _parse_amount(token: str, position: int) -> float:
    try:
        return float(token)
    except ValueError:
        raise OperationSyntaxError(f"Expected a number, got '{token}'", token, position) from None


def parse_operations(text: str) -> List[Operation]:
    tokens = text.split()
    operations: List[Operation] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        op_cls = OPERATOR_WORDS.get(token.lower())

        if op_cls is not None:
            # Оператор отдельным словом: число идёт следующим токеном
            if i + 1 >= len(tokens):
                raise OperationSyntaxError(f"Operator '{token}' is missing an operand", token, i)
            operations.append(op_cls(_parse_amount(tokens[i + 1], i + 1)))
            i += 2
            continue

        if token[0] in '+-':
            # float() сам принял бы второй знак: "--5" превратилось бы в Subtract(-5)
            if token[1:2] and token[1] in '+-':
                raise OperationSyntaxError(f"Doubled sign in '{token}'", token, i)
            op_cls = OPERATOR_WORDS[token[0]]
            operations.append(op_cls(_parse_amount(token[1:], i)))
        else:
            # Число без знака считается прибавлением
            operations.append(Add(_parse_amount(token, i)))
        i += 1

    logger.debug(f"Parsed {len(operations)} operations from {text!r}")
    return operations
