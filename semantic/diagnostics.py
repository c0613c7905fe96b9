from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from frontend.span import SourceSpan


class Severity(Enum):
    ERROR = auto()
    WARNING = auto()


class Category(Enum):
    """Закрытый набор категорий, которые умеет находить классификатор."""
    TYPE_MISMATCH = "TypeMismatch"
    UNDEFINED_REFERENCE = "UndefinedReference"
    SYNTAX_ERROR = "SyntaxError"
    UNUSED_BINDING = "UnusedBinding"
    MISSING_RETURN_VALUE = "MissingReturnValue"


@dataclass(kw_only=True)
class DiagnosticFinding:
    """Базовый класс найденной проблемы."""
    message: str
    location: SourceSpan
    severity: Severity = Severity.ERROR
    # Стек контекста
    context_stack: List[str] = field(default_factory=list)

    @property
    def category(self) -> Category:
        raise NotImplementedError

    @property
    def error_code(self) -> str:
        return "SEM000"

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "code": self.error_code,
            "severity": self.severity.name.lower(),
            "message": self.message,
            "line": self.location.start_line,
            "column": self.location.start_col,
            "end_line": self.location.end_line,
            "end_column": self.location.end_col,
            "context": list(self.context_stack),
        }


@dataclass(kw_only=True)
class TypeMismatchFinding(DiagnosticFinding):
    binding_name: str
    expected_type: str
    actual_type: str

    @property
    def category(self) -> Category:
        return Category.TYPE_MISMATCH

    @property
    def error_code(self) -> str:
        return "SEM002"


@dataclass(kw_only=True)
class SyntaxErrorFinding(DiagnosticFinding):
    """Для нарушений синтаксиса, в первую очередь пропущенного ';'"""
    expected_syntax: str

    @property
    def category(self) -> Category:
        return Category.SYNTAX_ERROR

    @property
    def error_code(self) -> str:
        return "SEM003"


@dataclass(kw_only=True)
class UndefinedReferenceFinding(DiagnosticFinding):
    symbol_name: str

    @property
    def category(self) -> Category:
        return Category.UNDEFINED_REFERENCE

    @property
    def error_code(self) -> str:
        return "SEM004"


@dataclass(kw_only=True)
class UnusedBindingFinding(DiagnosticFinding):
    binding_name: str
    severity: Severity = Severity.WARNING

    @property
    def category(self) -> Category:
        return Category.UNUSED_BINDING

    @property
    def error_code(self) -> str:
        return "SEM005"


@dataclass(kw_only=True)
class MissingReturnValueFinding(DiagnosticFinding):
    func_name: str
    return_type: str
    # Тип хвостового выражения, если оно есть, но не подходит
    actual_type: Optional[str] = None

    @property
    def category(self) -> Category:
        return Category.MISSING_RETURN_VALUE

    @property
    def error_code(self) -> str:
        return "SEM006"
