import pytest
from antlr4 import InputStream, Token

from frontend.errors import LexError, LexErrorListener
from frontend.lexer import FragmentLexer as L, number_value, tokenize, unescape
from frontend.span import token_span


def kinds(source: str):
    return [t.type for t in tokenize(source)]


class TestLexer:
    def test_let_statement(self):
        assert kinds("let x: i32 = 5;") == [
            L.LET, L.IDENT, L.COLON, L.IDENT, L.ASSIGN, L.INT, L.SEMI, Token.EOF
        ]

    def test_function_header(self):
        assert kinds("fn f(a: &str) -> f64 {}") == [
            L.FN, L.IDENT, L.LPAREN, L.IDENT, L.COLON, L.AMP, L.IDENT, L.RPAREN,
            L.ARROW, L.IDENT, L.LBRACE, L.RBRACE, Token.EOF
        ]

    def test_two_char_operators(self):
        assert kinds("a == b != c <= d >= e && f || g :: h += 1 -= 2") == [
            L.IDENT, L.EQ, L.IDENT, L.NEQ, L.IDENT, L.LTE, L.IDENT, L.GTE, L.IDENT,
            L.AND_AND, L.IDENT, L.OR_OR, L.IDENT, L.PATH_SEP, L.IDENT,
            L.PLUS_ASSIGN, L.INT, L.MINUS_ASSIGN, L.INT, Token.EOF
        ]

    def test_closing_generics_are_two_tokens(self):
        assert kinds("Vec<Option<i32>>")[-3:] == [L.GT, L.GT, Token.EOF]

    def test_number_literals(self):
        tokens = tokenize("42 1_000 2.5 3e2 7u8 1.5f32 9f64")
        assert [(t.type, number_value(t)) for t in tokens[:-1]] == [
            (L.INT, (42, None)),
            (L.INT, (1000, None)),
            (L.FLOAT, (2.5, None)),
            (L.FLOAT, (300.0, None)),
            (L.INT, (7, 'u8')),
            (L.FLOAT, (1.5, 'f32')),
            (L.FLOAT, (9.0, 'f64')),
        ]

    def test_integer_method_call_is_not_float(self):
        assert kinds("1.max(2)")[:3] == [L.INT, L.DOT, L.IDENT]

    def test_string_escapes(self):
        tokens = tokenize(r'"a\n\"b\""')
        assert tokens[0].type == L.STRING
        assert unescape(tokens[0].text) == 'a\n"b"'

    def test_char_and_lifetime(self):
        tokens = tokenize("'x' '\\n' &'a str")
        assert [(t.type, unescape(t.text)) for t in tokens[:2]] == [(L.CHAR, 'x'), (L.CHAR, '\n')]
        assert [t.type for t in tokens[2:5]] == [L.AMP, L.LIFETIME, L.IDENT]

    def test_comments_are_skipped(self):
        assert kinds("// line\n/* block /* nested */ still */ let") == [L.LET, Token.EOF]

    def test_positions(self):
        tokens = tokenize("fn f() {\n    let value = 1;\n}")
        value = next(t for t in tokens if t.text == "value")
        assert (value.line, value.column) == (2, 8)
        span = token_span(value)
        assert span.start_line == 2
        assert span.start_col == 9
        assert span.end_col == 14
        assert span.start_index == 17
        assert span.stop_index == 22

    def test_token_indexes_follow_stream_order(self):
        tokens = tokenize("let a = 1;")
        assert [t.tokenIndex for t in tokens] == list(range(len(tokens)))

    def test_unexpected_character(self):
        with pytest.raises(LexError) as exc:
            tokenize("let a = 1;\nlet b = #;")
        assert exc.value.line == 2
        assert exc.value.column == 9
        assert exc.value.offset == 19
        assert exc.value.message == "Unexpected character '#'"

    def test_unterminated_string(self):
        with pytest.raises(LexError) as exc:
            tokenize('let s = "open')
        assert exc.value.offset == 8
        assert "Unterminated" in exc.value.message

    def test_unknown_escape(self):
        with pytest.raises(LexError):
            tokenize(r'"\q"')

    def test_invalid_numeric_suffix(self):
        with pytest.raises(LexError):
            tokenize("5abc")

    @pytest.mark.parametrize("source, offset", [
        ("1²", 1),
        ("①", 0),
        ("1.²", 2),
        ("x٣", 1),
    ])
    def test_only_ascii_digits_form_numbers(self, source, offset):
        with pytest.raises(LexError) as exc:
            tokenize(source)
        assert exc.value.offset == offset

    def test_lexer_without_listener_skips_bad_character(self):
        lexer = L(InputStream("a # b"))
        lexer.removeErrorListeners()
        types = [t.type for t in lexer.getAllTokens()]
        assert types == [L.IDENT, L.IDENT]

    def test_listener_reports_first_error(self):
        lexer = L(InputStream("let $x"))
        lexer.removeErrorListeners()
        lexer.addErrorListener(LexErrorListener())
        with pytest.raises(LexError) as exc:
            lexer.getAllTokens()
        assert exc.value.span.start_col == 5
