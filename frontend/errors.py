"""
Ошибки фронтенда и слушатели ошибок ANTLR.

Лексер сообщает об ошибке через слушателя: LexErrorListener прерывает
токенизацию исключением LexError. Ошибки парсера собирает
ParseIssueCollector, парсер при этом продолжает работу.
"""
from dataclasses import dataclass
from typing import List

from antlr4.error.ErrorListener import ErrorListener
from antlr4.error.Errors import RecognitionException

from .span import SourceSpan


class FatalSyntaxError(Exception):
    """Фрагмент нельзя разобрать дальше: одна находка вместо всех остальных."""
    expected = "valid syntax"

    def __init__(self, message: str, line: int, column: int, offset: int):
        super().__init__(f"{message} at {line}:{column}")
        self.message = message
        self.line = line
        self.column = column
        self.offset = offset

    @property
    def span(self) -> SourceSpan:
        return SourceSpan.point(self.line, self.column, self.offset)


class LexError(FatalSyntaxError):
    expected = "valid token"


class NestingLimitError(FatalSyntaxError):
    expected = "shallower nesting"


@dataclass(frozen=True)
class ParseIssue:
    """Синтаксическая проблема, найденная парсером."""
    message: str
    span: SourceSpan
    expected: str


class FragmentRecognitionError(RecognitionException):
    """RecognitionException с точной позицией и описанием ожидаемого."""

    def __init__(self, recognizer, span: SourceSpan, expected: str):
        super().__init__(recognizer=recognizer, input=recognizer.getInputStream(), ctx=recognizer._ctx)
        self.offendingToken = recognizer.getCurrentToken()
        self.span = span
        self.expected = expected


class LexErrorListener(ErrorListener):
    def syntaxError(self, recognizer, offendingSymbol, line, column, msg, e):
        offset = e.startIndex if e is not None else recognizer._tokenStartCharIndex
        # ANTLR считает колонки с 0
        raise LexError(msg, line, column + 1, offset)


class ParseIssueCollector(ErrorListener):
    def __init__(self):
        self.issues: List[ParseIssue] = []

    def syntaxError(self, recognizer, offendingSymbol, line, column, msg, e):
        if isinstance(e, FragmentRecognitionError):
            span, expected = e.span, e.expected
        else:
            span = SourceSpan.point(line, column + 1, offendingSymbol.start if offendingSymbol else -1)
            expected = "valid syntax"
        self.issues.append(ParseIssue(msg, span, expected))
