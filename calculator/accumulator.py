from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .operations import Operation


@dataclass(frozen=True)
class Accumulator:
    """
    Числовой аккумулятор с цепочкой операций.
    Неизменяемый: add/subtract возвращают новый экземпляр, исходный не меняется.
    Арифметика по IEEE-754, NaN и inf просто распространяются.
    """
    value: float = 0.0

    @classmethod
    def new(cls) -> 'Accumulator':
        return cls(0.0)

    def add(self, amount: float) -> 'Accumulator':
        return Accumulator(self.value + amount)

    def subtract(self, amount: float) -> 'Accumulator':
        return Accumulator(self.value - amount)

    def apply(self, operation: 'Operation') -> 'Accumulator':
        return operation.apply_to(self)

    def get_value(self) -> float:
        return self.value
