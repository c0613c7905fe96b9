from dataclasses import dataclass

from antlr4 import Token


@dataclass(frozen=True, kw_only=True)
class SourceSpan:
    """
    Точная локация в коде.
    Строки и колонки считаются с 1, индексы символов с 0.
    """
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    start_index: int = -1
    stop_index: int = -1

    @classmethod
    def point(cls, line: int, col: int, index: int) -> 'SourceSpan':
        return cls(start_line=line, start_col=col, end_line=line, end_col=col,
                   start_index=index, stop_index=index)

    def merge(self, other: 'SourceSpan') -> 'SourceSpan':
        return SourceSpan(
            start_line=self.start_line,
            start_col=self.start_col,
            end_line=other.end_line,
            end_col=other.end_col,
            start_index=self.start_index,
            stop_index=other.stop_index
        )

    def end_point(self) -> 'SourceSpan':
        return SourceSpan.point(self.end_line, self.end_col, self.stop_index)


def token_span(token) -> SourceSpan:
    """Span токена ANTLR. Колонки у ANTLR считаются с 0, у SourceSpan с 1."""
    text = '' if token.type == Token.EOF else token.text
    lines = text.split('\n')
    if len(lines) == 1:
        end_line, end_col = token.line, token.column + 1 + len(text)
    else:
        end_line, end_col = token.line + len(lines) - 1, len(lines[-1]) + 1
    return SourceSpan(
        start_line=token.line,
        start_col=token.column + 1,
        end_line=end_line,
        end_col=end_col,
        start_index=token.start,
        stop_index=token.start + len(text)
    )


def tokens_span(start, stop) -> SourceSpan:
    """Span от начала start до конца stop включительно."""
    first = token_span(start)
    if stop is None or stop.tokenIndex < start.tokenIndex:
        return first
    return first.merge(token_span(stop))
