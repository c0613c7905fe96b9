"""
Построение AST из дерева разбора FragmentParser.

Сломанные при разборе выражения превращаются в ErrorExpr, а
ошибочные let и параметры без имени в дерево не попадают.
"""
import logging
from typing import List, Optional, Tuple

from antlr4 import CommonTokenStream, Token
from antlr4.ListTokenSource import ListTokenSource

from .ast_nodes import *
from .errors import ParseIssue, ParseIssueCollector
from .fragment_visitor import FragmentVisitor
from .lexer import number_value, unescape
from .parser import FragmentParser
from .span import SourceSpan, token_span, tokens_span

logger = logging.getLogger(__name__)


class AstBuilder(FragmentVisitor):
    """Проходит по дереву разбора и строит узлы frontend.ast_nodes."""

    def get_span(self, ctx) -> SourceSpan:
        return tokens_span(ctx.start, ctx.stop)

    def _expr(self, ctx: FragmentParser.ExpressionContext) -> ASTNode:
        if ctx.exception is not None:
            return ErrorExpr(self.get_span(ctx))
        return self.visit(ctx)

    def _statements(self, contexts) -> List[ASTNode]:
        nodes = [self.visit(s) for s in contexts]
        return [n for n in nodes if n is not None]

    # --- Items ---

    def visitProgram(self, ctx: FragmentParser.ProgramContext) -> Program:
        return Program(self._statements(ctx.statement()), self.get_span(ctx))

    def visitFunctionDecl(self, ctx: FragmentParser.FunctionDeclContext) -> FunctionDecl:
        if ctx.name is not None:
            name, name_span = ctx.name.text, token_span(ctx.name)
        else:
            name, name_span = "<missing>", token_span(ctx.start)

        params = [p for p in (self.visit(c) for c in ctx.param()) if p is not None]
        return_type = self.visit(ctx.retType) if ctx.retType is not None else None
        body = self.visit(ctx.body)
        return FunctionDecl(name, params, return_type, body, self.get_span(ctx), name_span)

    def visitParam(self, ctx: FragmentParser.ParamContext) -> Optional[Param]:
        if ctx.exception is not None:
            return None
        type_ref = self.visit(ctx.paramType) if ctx.paramType is not None else None
        return Param(ctx.name.text, type_ref, self.get_span(ctx))

    # --- Types ---

    def visitRefType(self, ctx: FragmentParser.RefTypeContext) -> Optional[TypeRef]:
        inner = self.visit(ctx.inner)
        if inner is None:
            return None
        prefix = "&mut " if ctx.mut is not None else "&"
        return TypeRef(prefix + inner.name, self.get_span(ctx))

    def visitTupleType(self, ctx: FragmentParser.TupleTypeContext) -> TypeRef:
        parts = [self.visit(p) for p in ctx.parts]
        names = [p.name for p in parts if p is not None]
        return TypeRef(f"({', '.join(names)})", self.get_span(ctx))

    def visitPathType(self, ctx: FragmentParser.PathTypeContext) -> TypeRef:
        name = "::".join(s.text for s in ctx.segments)
        if ctx.args or ctx.getToken(FragmentParser.LT, 0) is not None:
            args = [self.visit(a) for a in ctx.args]
            name += f"<{', '.join(a.name for a in args if a is not None)}>"
        return TypeRef(name, self.get_span(ctx))

    def visitChildren(self, node):
        # Базовый TypeContext остаётся только у неразобранного типа
        if isinstance(node, FragmentParser.TypeContext):
            return None
        return super().visitChildren(node)

    # --- Statements ---

    def visitBlock(self, ctx: FragmentParser.BlockContext) -> Block:
        if ctx.exception is not None:
            return Block([], None, token_span(ctx.start))
        tail = self._expr(ctx.tail) if ctx.tail is not None else None
        return Block(self._statements(ctx.statement()), tail, self.get_span(ctx))

    def visitLetStatement(self, ctx: FragmentParser.LetStatementContext) -> Optional[LetStmt]:
        if ctx.exception is not None:
            return None
        type_ref = self.visit(ctx.declType) if ctx.declType is not None else None
        init = self._expr(ctx.init) if ctx.init is not None else None
        return LetStmt(ctx.name.text, ctx.mut is not None, type_ref, init,
                       self.get_span(ctx), token_span(ctx.name))

    def visitReturnStatement(self, ctx: FragmentParser.ReturnStatementContext) -> ReturnStmt:
        value = self._expr(ctx.value) if ctx.value is not None else None
        return ReturnStmt(value, self.get_span(ctx))

    def visitItemStatement(self, ctx: FragmentParser.ItemStatementContext) -> FunctionDecl:
        return self.visit(ctx.functionDecl())

    def visitExpressionStatement(self, ctx: FragmentParser.ExpressionStatementContext) -> ExprStmt:
        expr = self._expr(ctx.expr)
        span = tokens_span(ctx.start, ctx.semi) if ctx.semi is not None else expr.span
        return ExprStmt(expr, span)

    def visitEmptyStatement(self, ctx: FragmentParser.EmptyStatementContext) -> None:
        return None

    # --- Expressions ---

    def visitLiteralExpr(self, ctx: FragmentParser.LiteralExprContext) -> ASTNode:
        token = ctx.value
        span = token_span(token)
        if token.type == FragmentParser.INT:
            value, suffix = number_value(token)
            return IntLiteral(value, suffix, span)
        if token.type == FragmentParser.FLOAT:
            value, suffix = number_value(token)
            return FloatLiteral(value, suffix, span)
        if token.type == FragmentParser.STRING:
            return StringLiteral(unescape(token.text), span)
        if token.type == FragmentParser.CHAR:
            return CharLiteral(unescape(token.text), span)
        return BoolLiteral(token.type == FragmentParser.TRUE, span)

    def visitPathExpr(self, ctx: FragmentParser.PathExprContext) -> Identifier:
        # Путь вида String::from хранится одним именем
        return Identifier("::".join(s.text for s in ctx.segments), self.get_span(ctx))

    def visitMacroCallExpr(self, ctx: FragmentParser.MacroCallExprContext) -> MacroCall:
        name = "::".join(s.text for s in ctx.segments)
        return MacroCall(name, self.visit(ctx.macroArgs()), self.get_span(ctx))

    def visitMacroArgs(self, ctx: FragmentParser.MacroArgsContext) -> List[ASTNode]:
        return [self._expr(a) for a in ctx.args]

    def visitUnitExpr(self, ctx: FragmentParser.UnitExprContext) -> UnitLiteral:
        return UnitLiteral(self.get_span(ctx))

    def visitParenExpr(self, ctx: FragmentParser.ParenExprContext) -> ASTNode:
        return self._expr(ctx.inner)

    def visitBlockExpr(self, ctx: FragmentParser.BlockExprContext) -> Block:
        return self.visit(ctx.block())

    def visitIfExpr(self, ctx: FragmentParser.IfExprContext) -> IfExpr:
        return self.visit(ctx.ifExpression())

    def visitIfExpression(self, ctx: FragmentParser.IfExpressionContext) -> IfExpr:
        else_branch = None
        if ctx.elseIf is not None:
            else_branch = self.visit(ctx.elseIf)
        elif ctx.elseBlock is not None:
            else_branch = self.visit(ctx.elseBlock)
        return IfExpr(self._expr(ctx.cond), self.visit(ctx.then), else_branch, self.get_span(ctx))

    def visitUnaryExpr(self, ctx: FragmentParser.UnaryExprContext) -> UnaryExpr:
        op = '&mut' if ctx.mut is not None else ctx.op.text
        return UnaryExpr(op, self._expr(ctx.operand), self.get_span(ctx))

    def visitBinaryExpr(self, ctx: FragmentParser.BinaryExprContext) -> BinaryExpr:
        return BinaryExpr(ctx.op.text, self._expr(ctx.left), self._expr(ctx.right), self.get_span(ctx))

    def visitAssignExpr(self, ctx: FragmentParser.AssignExprContext) -> AssignExpr:
        return AssignExpr(ctx.op.text, self._expr(ctx.target), self._expr(ctx.value), self.get_span(ctx))

    def visitCallExpr(self, ctx: FragmentParser.CallExprContext) -> CallExpr:
        args = [self._expr(a) for a in ctx.args]
        return CallExpr(self._expr(ctx.callee), args, self.get_span(ctx))

    def visitMethodCallExpr(self, ctx: FragmentParser.MethodCallExprContext) -> MethodCallExpr:
        args = [self._expr(a) for a in ctx.args]
        return MethodCallExpr(self._expr(ctx.receiver), ctx.method.text, args, self.get_span(ctx))

    def visitFieldExpr(self, ctx: FragmentParser.FieldExprContext) -> FieldExpr:
        return FieldExpr(self._expr(ctx.receiver), ctx.member.text, self.get_span(ctx))


def parse(tokens: List[Token]) -> Tuple[Program, List[ParseIssue]]:
    """
    Токены (с EOF в конце) -> AST и найденные синтаксические проблемы.
    NestingLimitError пробрасывается наружу.
    """
    stream = CommonTokenStream(ListTokenSource(tokens))
    parser = FragmentParser(stream)
    collector = ParseIssueCollector()
    parser.removeErrorListeners()
    parser.addErrorListener(collector)

    tree = parser.program()
    program = AstBuilder().visit(tree)
    logger.debug(f"Built AST with {len(program.items)} items, {len(collector.issues)} issues")
    return program, collector.issues
