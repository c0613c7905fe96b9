from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .accumulator import Accumulator


class OperationVisitor(ABC):
    @abstractmethod
    def visit_add(self, op: 'Add') -> Any: pass

    @abstractmethod
    def visit_subtract(self, op: 'Subtract') -> Any: pass


class Operation(ABC):
    amount: float

    @abstractmethod
    def accept(self, visitor: OperationVisitor) -> Any:
        pass

    @abstractmethod
    def apply_to(self, acc: 'Accumulator') -> 'Accumulator':
        pass


@dataclass(frozen=True)
class Add(Operation):
    amount: float

    def accept(self, visitor: OperationVisitor) -> Any:
        return visitor.visit_add(self)

    def apply_to(self, acc: 'Accumulator') -> 'Accumulator':
        return acc.add(self.amount)

    def __str__(self):
        return f"+{self.amount:g}"


@dataclass(frozen=True)
class Subtract(Operation):
    amount: float

    def accept(self, visitor: OperationVisitor) -> Any:
        return visitor.visit_subtract(self)

    def apply_to(self, acc: 'Accumulator') -> 'Accumulator':
        return acc.subtract(self.amount)

    def __str__(self):
        return f"-{self.amount:g}"
