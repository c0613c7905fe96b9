import pytest
from antlr4 import CommonTokenStream, InputStream
from antlr4.tree.Tree import ErrorNode

from frontend.ast_builder import parse
from frontend.ast_nodes import (
    Program, FunctionDecl, LetStmt, ReturnStmt, ExprStmt, Block,
    IntLiteral, StringLiteral, Identifier, CallExpr, MethodCallExpr, FieldExpr, MacroCall,
    BinaryExpr, UnaryExpr, IfExpr, AssignExpr, ErrorExpr
)
from frontend.errors import NestingLimitError
from frontend.lexer import FragmentLexer, tokenize
from frontend.parser import FragmentParser, MAX_NESTING


def parse_source(source: str):
    return parse(tokenize(source))


def parse_tree(source: str):
    parser = FragmentParser(CommonTokenStream(FragmentLexer(InputStream(source))))
    parser.removeErrorListeners()
    return parser, parser.program()


class TestParser:
    def test_function_declaration(self):
        program, issues = parse_source("fn add(a: i32, b: i32) -> i32 { a + b }")
        assert issues == []
        func = program.items[0]
        assert isinstance(func, FunctionDecl)
        assert func.name == "add"
        assert [p.name for p in func.params] == ["a", "b"]
        assert [p.type_ref.name for p in func.params] == ["i32", "i32"]
        assert func.return_type.name == "i32"
        assert not func.return_type.is_unit
        assert func.body.statements == []
        assert isinstance(func.body.tail, BinaryExpr)

    def test_let_with_type(self):
        program, issues = parse_source('let mut s: &str = "hi";')
        assert issues == []
        stmt = program.items[0]
        assert isinstance(stmt, LetStmt)
        assert stmt.name == "s"
        assert stmt.mutable
        assert stmt.type_ref.name == "&str"
        assert isinstance(stmt.init, StringLiteral)

    def test_generic_and_reference_types(self):
        program, issues = parse_source("fn f(v: &mut Vec<Option<i32>>, s: &'a str) -> () {}")
        assert issues == []
        func = program.items[0]
        assert [p.type_ref.name for p in func.params] == ["&mut Vec<Option<i32>>", "&str"]
        assert func.return_type.is_unit

    def test_tuple_and_path_types(self):
        program, issues = parse_source("fn f(p: (i32, f64), m: std::collections::HashMap<String, u8>) {}")
        assert issues == []
        assert [p.type_ref.name for p in program.items[0].params] == [
            "(i32, f64)", "std::collections::HashMap<String, u8>"
        ]

    def test_self_parameter_has_no_type(self):
        program, issues = parse_source("fn get(&self, i: usize) {}")
        assert issues == []
        params = program.items[0].params
        assert params[0].name == "self"
        assert params[0].type_ref is None

    def test_precedence(self):
        program, _ = parse_source("1 + 2 * 3;")
        expr = program.items[0].expr
        assert isinstance(expr, BinaryExpr)
        assert expr.op == "+"
        assert isinstance(expr.left, IntLiteral)
        assert isinstance(expr.right, BinaryExpr)
        assert expr.right.op == "*"

    def test_binary_operators_are_left_associative(self):
        program, _ = parse_source("10 - 3 - 2;")
        expr = program.items[0].expr
        assert expr.left.op == "-"
        assert expr.right.value == 2

    def test_assignment_is_right_associative(self):
        program, _ = parse_source("a = b = 1;")
        expr = program.items[0].expr
        assert isinstance(expr, AssignExpr)
        assert isinstance(expr.value, AssignExpr)

    def test_unary_and_comparison(self):
        program, _ = parse_source("-x < 0 && !done;")
        expr = program.items[0].expr
        assert expr.op == "&&"
        assert expr.left.op == "<"
        assert isinstance(expr.left.left, UnaryExpr)
        assert isinstance(expr.right, UnaryExpr)

    def test_unary_binds_to_postfix_chain(self):
        program, issues = parse_source("&mut v.items;")
        assert issues == []
        expr = program.items[0].expr
        assert isinstance(expr, UnaryExpr)
        assert expr.op == "&mut"
        assert isinstance(expr.operand, FieldExpr)

    def test_macro_and_calls(self):
        program, issues = parse_source('println!("{}", calc.add(5.0).get_value()); vec![1, 2];')
        assert issues == []
        macro = program.items[0].expr
        assert isinstance(macro, MacroCall)
        assert macro.name == "println"
        assert isinstance(macro.args[1], MethodCallExpr)
        assert macro.args[1].method == "get_value"
        assert isinstance(macro.args[1].receiver, MethodCallExpr)
        assert program.items[1].expr.name == "vec"

    def test_path_call(self):
        program, _ = parse_source('String::from("x");')
        call = program.items[0].expr
        assert isinstance(call, CallExpr)
        assert isinstance(call.callee, Identifier)
        assert call.callee.name == "String::from"
        assert call.callee.is_path

    def test_missing_semicolon_is_recorded_and_parsing_continues(self):
        program, issues = parse_source("let x = 5\nlet y = 10;")
        assert len(issues) == 1
        assert issues[0].expected == "';'"
        assert issues[0].span.start_line == 1
        assert issues[0].span.start_col == 10
        assert [s.name for s in program.items] == ["x", "y"]

    def test_no_issue_before_closing_brace_or_end(self):
        _, issues = parse_source("fn f() { return 1 }\nlet z = 3")
        assert issues == []

    def test_block_tail_and_if_statement(self):
        program, issues = parse_source("fn f(c: bool) -> i32 { if c { g(); } else { h(); } 1 }")
        assert issues == []
        body = program.items[0].body
        assert isinstance(body.statements[0], ExprStmt)
        assert isinstance(body.statements[0].expr, IfExpr)
        assert isinstance(body.tail, IntLiteral)

    def test_else_if_chain(self):
        program, issues = parse_source("fn f(n: i32) { if n < 0 { a(); } else if n > 0 { b(); } else { c(); } }")
        assert issues == []
        outer = program.items[0].body.statements[0].expr
        assert isinstance(outer.else_branch, IfExpr)
        assert isinstance(outer.else_branch.else_branch, Block)

    def test_return_and_assignment(self):
        program, _ = parse_source("fn f() { total += 1; return; }")
        body = program.items[0].body
        assert isinstance(body.statements[0].expr, AssignExpr)
        assert body.statements[0].expr.op == "+="
        assert isinstance(body.statements[1], ReturnStmt)
        assert body.statements[1].value is None

    def test_recovery_after_bad_expression(self):
        program, issues = parse_source("fn f() { let a = ); let b = 2; }")
        assert len(issues) == 1
        assert "Expected expression" in issues[0].message
        body = program.items[0].body
        assert isinstance(body.statements[0].init, ErrorExpr)
        assert body.statements[1].name == "b"

    def test_cascading_errors_are_reported_once(self):
        _, issues = parse_source("fn f() { let a = (1 + ; }")
        assert len(issues) == 1
        assert issues[0].expected == "expression"

    def test_stray_closing_brace(self):
        program, issues = parse_source("let a = 1; } let b = 2;")
        assert len(issues) == 1
        assert len(program.items) == 2

    def test_empty_source(self):
        program, issues = parse_source("")
        assert isinstance(program, Program)
        assert program.items == []
        assert issues == []

    def test_nested_block_expression(self):
        program, issues = parse_source("let v = { let t = 1; t };")
        assert issues == []
        assert isinstance(program.items[0].init, Block)
        assert isinstance(program.items[0].init.tail, Identifier)


class TestParseTree:
    def test_labeled_contexts(self):
        parser, tree = parse_tree("fn f() -> i32 { g(1) }")
        assert parser.getNumberOfSyntaxErrors() == 0
        item = tree.statement(0)
        assert isinstance(item, FragmentParser.ItemStatementContext)
        func = item.functionDecl()
        assert func.name.text == "f"
        assert isinstance(func.retType, FragmentParser.PathTypeContext)
        assert isinstance(func.body.tail, FragmentParser.CallExprContext)
        assert func.body.tail.callee.getText() == "g"

    def test_skipped_tokens_become_error_nodes(self):
        parser, tree = parse_tree("let a = 1 ) ) ;")
        assert parser.getNumberOfSyntaxErrors() == 1
        let = tree.statement(0)
        errors = [c for c in let.getChildren() if isinstance(c, ErrorNode)]
        assert [e.getText() for e in errors] == [")", ")", ";"]

    def test_failed_expression_keeps_exception(self):
        _, tree = parse_tree("let a = ;")
        let = tree.statement(0)
        assert let.init.exception is not None
        assert let.init.exception.expected == "expression"


class TestNestingLimit:
    def test_limit_is_not_hit_by_ordinary_nesting(self):
        source = "fn f() -> i32 { " + "(" * 20 + "1" + ")" * 20 + " }"
        _, issues = parse_source(source)
        assert issues == []

    @pytest.mark.parametrize("source", [
        "fn f() -> i32 { " + "(" * 200 + "1" + ")" * 200 + " }",
        "let _x = " + "-" * 1500 + "1;",
        "fn f() " + "{ " * 100 + "}" * 100,
        "let v = " + "f(" * 100 + ")" * 100 + ";",
    ])
    def test_deep_nesting_stops_parsing(self, source):
        with pytest.raises(NestingLimitError) as exc:
            parse_source(source)
        assert str(MAX_NESTING) in exc.value.message
        assert exc.value.line == 1
