"""
Лексер фрагментов на рантайме ANTLR (grammar/Fragment.g4).

FragmentLexer выдаёт CommonToken с типами из грамматики, пропускает
пробелы и комментарии, а об ошибках сообщает слушателям ANTLR.
"""
import logging
import re
import sys
from typing import Callable, List, Tuple, Union

from antlr4 import CommonTokenStream, InputStream, Lexer, LexerATNSimulator, Token
from antlr4.error.Errors import LexerNoViableAltException

from .errors import LexErrorListener

if sys.version_info[1] > 5:
    from typing import TextIO
else:
    from typing.io import TextIO

logger = logging.getLogger(__name__)

DIGITS = '0123456789'

ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '0': '\0', '\\': '\\', '"': '"', "'": "'"}

NUMERIC_SUFFIXES = (
    'i8', 'i16', 'i32', 'i64', 'i128', 'isize',
    'u8', 'u16', 'u32', 'u64', 'u128', 'usize',
    'f32', 'f64',
)

NUMBER_RE = re.compile(r'([0-9][0-9_]*(?:\.[0-9][0-9_]*)?(?:[eE][+-]?[0-9]+)?)([a-z][a-z0-9]*)?')


def _is_digit(ch: str) -> bool:
    # str.isdigit пропускает '²' и '①', int() их уже не примет
    return ch != '' and ch in DIGITS


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == '_'


def _is_ident_part(ch: str) -> bool:
    return ch.isalpha() or _is_digit(ch) or ch == '_'


class FragmentLexer(Lexer):

    grammarFileName = "Fragment.g4"

    FN = 1
    LET = 2
    MUT = 3
    RETURN = 4
    IF = 5
    ELSE = 6
    TRUE = 7
    FALSE = 8
    LPAREN = 9
    RPAREN = 10
    LBRACE = 11
    RBRACE = 12
    LBRACKET = 13
    RBRACKET = 14
    COMMA = 15
    SEMI = 16
    COLON = 17
    PATH_SEP = 18
    DOT = 19
    ARROW = 20
    BANG = 21
    AMP = 22
    ASSIGN = 23
    PLUS_ASSIGN = 24
    MINUS_ASSIGN = 25
    PLUS = 26
    MINUS = 27
    STAR = 28
    SLASH = 29
    PERCENT = 30
    EQ = 31
    NEQ = 32
    LT = 33
    GT = 34
    LTE = 35
    GTE = 36
    AND_AND = 37
    OR_OR = 38
    IDENT = 39
    INT = 40
    FLOAT = 41
    STRING = 42
    CHAR = 43
    LIFETIME = 44

    literalNames = [ "<INVALID>",
            "'fn'", "'let'", "'mut'", "'return'", "'if'", "'else'", "'true'", "'false'",
            "'('", "')'", "'{'", "'}'", "'['", "']'", "','", "';'", "':'", "'::'",
            "'.'", "'->'", "'!'", "'&'", "'='", "'+='", "'-='", "'+'", "'-'", "'*'",
            "'/'", "'%'", "'=='", "'!='", "'<'", "'>'", "'<='", "'>='", "'&&'", "'||'" ]

    symbolicNames = [ "<INVALID>",
            "FN", "LET", "MUT", "RETURN", "IF", "ELSE", "TRUE", "FALSE",
            "LPAREN", "RPAREN", "LBRACE", "RBRACE", "LBRACKET", "RBRACKET", "COMMA",
            "SEMI", "COLON", "PATH_SEP", "DOT", "ARROW", "BANG", "AMP", "ASSIGN",
            "PLUS_ASSIGN", "MINUS_ASSIGN", "PLUS", "MINUS", "STAR", "SLASH", "PERCENT",
            "EQ", "NEQ", "LT", "GT", "LTE", "GTE", "AND_AND", "OR_OR",
            "IDENT", "INT", "FLOAT", "STRING", "CHAR", "LIFETIME" ]

    KEYWORDS = {
        'fn': FN,
        'let': LET,
        'mut': MUT,
        'return': RETURN,
        'if': IF,
        'else': ELSE,
        'true': TRUE,
        'false': FALSE,
    }

    # Двухсимвольные проверяются раньше односимвольных
    SYMBOLS = {
        '::': PATH_SEP,
        '->': ARROW,
        '+=': PLUS_ASSIGN,
        '-=': MINUS_ASSIGN,
        '==': EQ,
        '!=': NEQ,
        '<=': LTE,
        '>=': GTE,
        '&&': AND_AND,
        '||': OR_OR,
        '(': LPAREN,
        ')': RPAREN,
        '{': LBRACE,
        '}': RBRACE,
        '[': LBRACKET,
        ']': RBRACKET,
        ',': COMMA,
        ';': SEMI,
        ':': COLON,
        '.': DOT,
        '!': BANG,
        '&': AMP,
        '=': ASSIGN,
        '+': PLUS,
        '-': MINUS,
        '*': STAR,
        '/': SLASH,
        '%': PERCENT,
        '<': LT,
        '>': GT,
    }

    def __init__(self, input: InputStream, output: TextIO = sys.stdout):
        super().__init__(input, output)
        # Симулятор нужен только для учёта строки и колонки
        self._interp = LexerATNSimulator(self, None, None, None)

    def nextToken(self) -> Token:
        while True:
            if self._input.LA(1) == Token.EOF:
                return self.emitEOF()

            self._token = None
            self._channel = Token.DEFAULT_CHANNEL
            self._tokenStartCharIndex = self._input.index
            self._tokenStartLine = self.line
            self._tokenStartColumn = self.column
            self._interp.startIndex = self._input.index
            self._text = None

            self._type = self._scan()
            if self._type != self.SKIP:
                return self.emit()

    # --- Scanning ---

    def _scan(self) -> int:
        ch = self._la(1)
        if ch in ' \t\r\n':
            self._consume_while(lambda c: c in ' \t\r\n')
            return self.SKIP
        if ch == '/' and self._la(2) == '/':
            self._consume_while(lambda c: c != '\n')
            return self.SKIP
        if ch == '/' and self._la(2) == '*':
            return self._block_comment()
        if _is_ident_start(ch):
            text = self._consume_while(_is_ident_part)
            return self.KEYWORDS.get(text, self.IDENT)
        if _is_digit(ch):
            return self._number()
        if ch == '"':
            return self._string()
        if ch == "'":
            return self._char_or_lifetime()
        return self._symbol()

    def _block_comment(self) -> int:
        self._consume()
        self._consume()
        depth = 1
        while depth > 0:
            if self._la(1) == '':
                return self._fail("Unterminated block comment")
            if self._la(1) == '/' and self._la(2) == '*':
                depth += 1
                self._consume()
            elif self._la(1) == '*' and self._la(2) == '/':
                depth -= 1
                self._consume()
            self._consume()
        return self.SKIP

    def _number(self) -> int:
        ttype = self.INT
        self._consume_while(lambda c: _is_digit(c) or c == '_')

        # "1.5" это float, а "1.max(2)" или "1..2" нет
        if self._la(1) == '.' and _is_digit(self._la(2)):
            ttype = self.FLOAT
            self._consume()
            self._consume_while(lambda c: _is_digit(c) or c == '_')

        if self._la(1) in ('e', 'E') and (
                _is_digit(self._la(2)) or (self._la(2) in ('+', '-') and _is_digit(self._la(3)))):
            ttype = self.FLOAT
            self._consume()
            if self._la(1) in ('+', '-'):
                self._consume()
            self._consume_while(_is_digit)

        if _is_ident_start(self._la(1)):
            suffix = self._consume_while(_is_ident_part)
            if suffix not in NUMERIC_SUFFIXES:
                return self._fail(f"Invalid suffix '{suffix}' for number literal")
            if suffix.startswith('f'):
                ttype = self.FLOAT
        return ttype

    def _string(self) -> int:
        self._consume()
        while True:
            ch = self._la(1)
            if ch == '':
                return self._fail("Unterminated string literal")
            self._consume()
            if ch == '"':
                return self.STRING
            if ch == '\\':
                esc = self._la(1)
                if esc == '':
                    return self._fail("Unterminated string literal")
                if esc not in ESCAPES:
                    return self._fail(f"Unknown character escape '\\{esc}'")
                self._consume()

    def _char_or_lifetime(self) -> int:
        self._consume()  # открывающая кавычка
        ch = self._la(1)
        if ch == '':
            return self._fail("Unterminated character literal")

        if ch == '\\':
            self._consume()
            esc = self._la(1)
            if esc == '':
                return self._fail("Unterminated character literal")
            if esc not in ESCAPES:
                return self._fail(f"Unknown character escape '\\{esc}'")
            self._consume()
        elif _is_ident_start(ch) and self._la(2) != "'":
            # 'a без закрывающей кавычки это время жизни
            self._consume_while(_is_ident_part)
            return self.LIFETIME
        else:
            self._consume()

        if self._la(1) != "'":
            return self._fail("Unterminated character literal")
        self._consume()
        return self.CHAR

    def _symbol(self) -> int:
        pair = self._la(1) + self._la(2)
        if len(pair) == 2 and pair in self.SYMBOLS:
            self._consume()
            self._consume()
            return self.SYMBOLS[pair]
        ch = self._la(1)
        if ch in self.SYMBOLS:
            self._consume()
            return self.SYMBOLS[ch]
        return self._fail(f"Unexpected character '{ch}'")

    def _fail(self, message: str) -> int:
        e = LexerNoViableAltException(self, self._input, self._tokenStartCharIndex, None)
        self.getErrorListenerDispatch().syntaxError(
            self, None, self._tokenStartLine, self._tokenStartColumn, message, e)
        # Слушатель не прервал разбор: пропускаем символ и идём дальше
        self.recover(e)
        return self.SKIP

    # --- Input helpers ---

    def _la(self, offset: int) -> str:
        c = self._input.LA(offset)
        return '' if c == Token.EOF else chr(c)

    def _consume(self):
        self._interp.consume(self._input)

    def _consume_while(self, predicate: Callable[[str], bool]) -> str:
        start = self._input.index
        while self._la(1) != '' and predicate(self._la(1)):
            self._consume()
        return self._input.getText(start, self._input.index - 1)


def unescape(literal: str) -> str:
    """Значение строкового или символьного литерала без кавычек."""
    body = literal[1:-1]
    chars = []
    i = 0
    while i < len(body):
        if body[i] == '\\':
            chars.append(ESCAPES[body[i + 1]])
            i += 2
        else:
            chars.append(body[i])
            i += 1
    return ''.join(chars)


def number_value(token: Token) -> Tuple[Union[int, float], Union[str, None]]:
    """(значение, суффикс) числового токена: '1_000u32' -> (1000, 'u32')"""
    match = NUMBER_RE.fullmatch(token.text)
    digits, suffix = match.group(1).replace('_', ''), match.group(2)
    if token.type == FragmentLexer.FLOAT:
        return float(digits), suffix
    return int(digits), suffix


def token_stream(source: str) -> CommonTokenStream:
    """Полностью прочитанный поток токенов. LexError при ошибке лексера."""
    lexer = FragmentLexer(InputStream(source))
    lexer.removeErrorListeners()
    lexer.addErrorListener(LexErrorListener())
    stream = CommonTokenStream(lexer)
    stream.fill()
    logger.debug(f"Lexed {len(stream.tokens)} tokens")
    return stream


def tokenize(source: str) -> List[Token]:
    return token_stream(source).tokens
