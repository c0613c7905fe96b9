"""
Классификатор диагностик для фрагментов исходного кода.

Фрагмент проходит через лексер и восстанавливающийся парсер,
после чего FragmentAnalyzer обходит AST один раз и раскладывает
найденные проблемы по закрытому набору категорий (см. Category).
Проверки независимы: одна находка не отменяет другие.
"""
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from antlr4 import Token

from frontend.ast_builder import parse
from frontend.ast_nodes import *
from frontend.errors import FatalSyntaxError, NestingLimitError
from frontend.lexer import tokenize
from frontend.span import SourceSpan

from . import types
from .diagnostics import (
    DiagnosticFinding, TypeMismatchFinding, SyntaxErrorFinding,
    UndefinedReferenceFinding, UnusedBindingFinding, MissingReturnValueFinding
)
from .error_collector import ErrorCollector
from .symbol_table import Environment, SymbolKind

logger = logging.getLogger(__name__)

# Макросы, первый аргумент которых строка формата
FORMAT_MACROS = {
    'print', 'println', 'eprint', 'eprintln', 'format', 'write', 'writeln',
    'panic', 'assert', 'assert_eq', 'assert_ne',
}

# Макросы, после которых управление не возвращается
DIVERGING_MACROS = {'panic', 'todo', 'unimplemented', 'unreachable'}

MACRO_TYPES = {
    'print': types.UNIT,
    'println': types.UNIT,
    'eprint': types.UNIT,
    'eprintln': types.UNIT,
    'format': types.STRING,
    'assert': types.UNIT,
    'assert_eq': types.UNIT,
    'assert_ne': types.UNIT,
}

METHOD_TYPES = {
    'to_string': types.STRING,
    'to_owned': None,
    'len': 'usize',
}

# {name} или {name:?} внутри строки формата
INLINE_ARG_RE = re.compile(r'\{([A-Za-z_][A-Za-z0-9_]*)(?::[^{}]*)?\}')


@dataclass(frozen=True)
class Fragment:
    """Единица входа классификатора: имя для отчётов и исходный текст."""
    text: str
    name: str = "<fragment>"

    @classmethod
    def from_file(cls, path: Path) -> 'Fragment':
        return cls(path.read_text(encoding='utf-8'), str(path))


@dataclass
class _FunctionFrame:
    decl: FunctionDecl
    return_type: str
    produces_value: bool = False
    diverges: bool = False


class FragmentAnalyzer(ASTVisitor):
    """
    Один проход по AST: разрешение имён по цепочке окружений,
    вывод типов выражений (None = неизвестен) и учёт достижимости.
    Каждый visit_* для выражений возвращает тип выражения.
    """

    def __init__(self, collector: ErrorCollector):
        self.collector = collector
        self.global_env = Environment.with_prelude()
        self.current_env = Environment(parent=self.global_env)
        self._functions: List[_FunctionFrame] = []
        self._reachable = True

    def analyze(self, program: Program):
        program.accept(self)

    # --- Scopes ---

    def _declare_functions(self, items: List[ASTNode]):
        """Функции видны во всём окружении, независимо от порядка объявления."""
        for item in items:
            if isinstance(item, FunctionDecl):
                ret = item.return_type.name if item.return_type else types.UNIT
                self.current_env.define(item.name, kind=SymbolKind.FUNCTION,
                                        type_name=ret, span=item.name_span, value=item)

    def _item_scope(self) -> Environment:
        """
        Окружение, над которым строится тело функции.
        Вложенная функция видит объявленные снаружи функции,
        но не локальные привязки объемлющей функции.
        """
        items = Environment(parent=self.global_env)
        env = self.current_env
        while env is not None and env is not self.global_env:
            for info in env.bindings:
                if info.kind == SymbolKind.FUNCTION and info.name not in items.symbols:
                    items.define(info.name, kind=SymbolKind.FUNCTION, type_name=info.type_name,
                                 span=info.span, value=info.value)
            env = env.parent
        return items

    def _report_unused(self, env: Environment):
        for info in env.unused_bindings():
            what = "parameter" if info.kind == SymbolKind.PARAM else "variable"
            self.collector.add(UnusedBindingFinding(
                message=f"Unused {what} '{info.name}'",
                location=info.span,
                binding_name=info.name
            ))

    def _undefined(self, name: str, node: ASTNode, what: str = "value"):
        self.collector.add(UndefinedReferenceFinding(
            message=f"Cannot find {what} '{name}' in this scope",
            location=node.span,
            symbol_name=name
        ))

    # --- Items & statements ---

    def visit_program(self, node: Program):
        self._declare_functions(node.items)
        for item in node.items:
            item.accept(self)
        self._report_unused(self.current_env)

    def visit_function(self, node: FunctionDecl):
        ret = node.return_type.name if node.return_type else types.UNIT
        frame = _FunctionFrame(node, ret)

        func_env = Environment(parent=self._item_scope())
        previous_env, previous_reachable = self.current_env, self._reachable
        self.current_env = func_env
        self._reachable = True
        self._functions.append(frame)

        try:
            with self.collector.context(f"Function '{node.name}'"):
                for p in node.params:
                    func_env.define(p.name, kind=SymbolKind.PARAM,
                                    type_name=p.type_ref.name if p.type_ref else None, span=p.span)

                body_type = node.body.accept(self)
                self._check_return_value(frame, body_type)
                self._report_unused(func_env)
        finally:
            self._functions.pop()
            self.current_env = previous_env
            self._reachable = previous_reachable

    def _check_return_value(self, frame: _FunctionFrame, body_type: Optional[str]):
        decl = frame.decl
        if decl.return_type is None or decl.return_type.is_unit or frame.return_type == types.NEVER:
            return
        if frame.produces_value or frame.diverges:
            return

        tail = decl.body.tail
        if tail is not None and body_type != types.NEVER and types.is_compatible(frame.return_type, body_type):
            return

        actual = body_type if tail is not None and body_type != types.NEVER else None
        if actual is not None:
            message = (f"Function '{decl.name}' must return '{frame.return_type}', "
                       f"but its final expression has type '{actual}'")
        else:
            message = (f"Function '{decl.name}' declares return type '{frame.return_type}' "
                       f"but its body produces no value")
        self.collector.add(MissingReturnValueFinding(
            message=message,
            location=decl.return_type.span,
            func_name=decl.name,
            return_type=frame.return_type,
            actual_type=actual
        ))

    def visit_block(self, node: Block) -> Optional[str]:
        block_env = Environment(parent=self.current_env)
        previous_env = self.current_env
        self.current_env = block_env

        try:
            self._declare_functions(node.statements)
            for stmt in node.statements:
                stmt.accept(self)

            result = types.UNIT
            if node.tail is not None:
                result = node.tail.accept(self)
            if not self._reachable:
                result = types.NEVER

            self._report_unused(block_env)
        finally:
            self.current_env = previous_env
        return result

    def visit_let(self, node: LetStmt):
        # Инициализатор видит предыдущую привязку с тем же именем
        init_type = node.init.accept(self) if node.init is not None else None
        declared = node.type_ref.name if node.type_ref else None

        if declared is not None and node.init is not None and not types.is_compatible(declared, init_type):
            self.collector.add(TypeMismatchFinding(
                message=(f"Mismatched types: '{node.name}' is declared as '{declared}' "
                         f"but initialized with '{init_type}'"),
                location=node.init.span,
                binding_name=node.name,
                expected_type=declared,
                actual_type=init_type
            ))

        self.current_env.define(node.name, kind=SymbolKind.LOCAL,
                                type_name=declared or init_type, span=node.name_span)

    def visit_return(self, node: ReturnStmt):
        value_type = node.value.accept(self) if node.value is not None else None
        if self._functions and self._reachable and node.value is not None:
            frame = self._functions[-1]
            if types.is_compatible(frame.return_type, value_type):
                frame.produces_value = True
        self._reachable = False

    def visit_expr_stmt(self, node: ExprStmt):
        node.expr.accept(self)

    # --- Literals ---

    def visit_int(self, node: IntLiteral) -> str:
        return node.suffix or types.INTEGER_LITERAL

    def visit_float(self, node: FloatLiteral) -> str:
        return node.suffix or types.FLOAT_LITERAL

    def visit_string(self, node: StringLiteral) -> str:
        return types.STR_REF

    def visit_char(self, node: CharLiteral) -> str:
        return types.CHAR

    def visit_bool(self, node: BoolLiteral) -> str:
        return types.BOOL

    def visit_unit(self, node: UnitLiteral) -> str:
        return types.UNIT

    # --- Expressions ---

    def visit_identifier(self, node: Identifier) -> Optional[str]:
        if node.is_path:
            return None
        info = self.current_env.reference(node.name)
        if info is None:
            self._undefined(node.name, node)
            return None
        if info.is_function:
            return None
        return info.type_name

    def visit_call(self, node: CallExpr) -> Optional[str]:
        result = None
        callee = node.callee
        if isinstance(callee, Identifier) and not callee.is_path:
            info = self.current_env.reference(callee.name)
            if info is None:
                self._undefined(callee.name, callee, what="function")
            elif info.kind == SymbolKind.FUNCTION:
                result = info.type_name
        else:
            callee.accept(self)

        for arg in node.args:
            arg.accept(self)
        return result

    def visit_method_call(self, node: MethodCallExpr) -> Optional[str]:
        node.receiver.accept(self)
        for arg in node.args:
            arg.accept(self)
        return METHOD_TYPES.get(node.method)

    def visit_field(self, node: FieldExpr) -> Optional[str]:
        node.receiver.accept(self)
        return None

    def visit_macro_call(self, node: MacroCall) -> Optional[str]:
        for arg in node.args:
            arg.accept(self)

        if node.name in FORMAT_MACROS and node.args and isinstance(node.args[0], StringLiteral):
            self._check_inline_args(node.args[0])

        if node.name in DIVERGING_MACROS:
            if self._functions and self._reachable:
                self._functions[-1].diverges = True
            self._reachable = False
            return types.NEVER
        return MACRO_TYPES.get(node.name)

    def _check_inline_args(self, fmt: StringLiteral):
        """Имена внутри {name} в строке формата тоже считаются обращениями."""
        text = fmt.value.replace('{{', '').replace('}}', '')
        for name in INLINE_ARG_RE.findall(text):
            if self.current_env.reference(name) is None:
                self._undefined(name, fmt)

    def visit_unary(self, node: UnaryExpr) -> Optional[str]:
        operand = node.operand.accept(self)
        if node.op == '-' and types.is_numeric(operand):
            return operand
        if node.op == '!' and (operand == types.BOOL or operand in types.INTEGER_TYPES
                               or operand == types.INTEGER_LITERAL):
            return operand
        return None

    def visit_binary(self, node: BinaryExpr) -> Optional[str]:
        left = node.left.accept(self)
        right = node.right.accept(self)
        if node.op in types.COMPARISON_OPS or node.op in types.LOGICAL_OPS:
            return types.BOOL
        if node.op == '+' and left == types.STRING:
            return types.STRING
        if types.is_numeric(left) and types.is_numeric(right):
            return types.unify(left, right)
        return None

    def visit_assign(self, node: AssignExpr) -> str:
        node.target.accept(self)
        node.value.accept(self)
        return types.UNIT

    def visit_if(self, node: IfExpr) -> Optional[str]:
        node.condition.accept(self)
        before = self._reachable

        then_type = node.then_branch.accept(self)
        then_reachable = self._reachable

        if node.else_branch is None:
            self._reachable = before
            return types.UNIT

        self._reachable = before
        else_type = node.else_branch.accept(self)
        self._reachable = then_reachable or self._reachable
        return types.unify(then_type, else_type)

    def visit_error(self, node: ErrorExpr) -> None:
        return None


class Classifier:
    """Фрагмент -> список находок в порядке позиции в исходнике."""

    def classify(self, fragment: Union[Fragment, str]) -> List[DiagnosticFinding]:
        if isinstance(fragment, str):
            fragment = Fragment(fragment)
        logger.debug(f"Classifying {fragment.name} ({len(fragment.text)} chars)")

        try:
            tokens = tokenize(fragment.text)
        except FatalSyntaxError as e:
            # Токенизировать нельзя: одна находка и дальше не идём
            logger.debug(f"Lexing failed in {fragment.name}: {e}")
            return [self._fatal_finding(e)]

        return self.classify_tokens(tokens)

    def classify_tokens(self, tokens: List[Token]) -> List[DiagnosticFinding]:
        """Классификация уже токенизированного фрагмента."""
        collector = ErrorCollector()
        try:
            program, issues = parse(tokens)
            for issue in issues:
                collector.add(SyntaxErrorFinding(
                    message=issue.message,
                    location=issue.span,
                    expected_syntax=issue.expected
                ))
            FragmentAnalyzer(collector).analyze(program)
        except NestingLimitError as e:
            logger.debug(f"Parsing stopped: {e}")
            return [self._fatal_finding(e)]
        except RecursionError:
            # Длинные цепочки операторов без скобок глубиной не ограничены
            logger.debug("Recursion limit reached while analyzing fragment")
            return [SyntaxErrorFinding(
                message="Fragment is nested too deeply to analyze",
                location=SourceSpan.point(1, 1, 0),
                expected_syntax=NestingLimitError.expected
            )]

        logger.debug(f"Found {len(collector.errors)} errors and {len(collector.warnings)} warnings")
        return collector.findings

    @staticmethod
    def _fatal_finding(e: FatalSyntaxError) -> SyntaxErrorFinding:
        return SyntaxErrorFinding(message=e.message, location=e.span, expected_syntax=e.expected)


def classify(fragment: Union[Fragment, str]) -> List[DiagnosticFinding]:
    return Classifier().classify(fragment)
