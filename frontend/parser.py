"""
Парсер фрагментов на рантайме ANTLR по грамматике grammar/Fragment.g4.

Правила разбираются нисходящим спуском, expression разбирается по
приоритетам так же, как ANTLR разворачивает левую рекурсию
(enterRecursionRule / pushNewRecursionContext / precpred).

Парсер не падает на некорректном коде. Ошибки уходят слушателям,
сломанный контекст получает exception, пропущенные при восстановлении
токены попадают в дерево как ErrorNode. Исключение одно: слишком
глубокая вложенность прерывает разбор NestingLimitError.
"""
import logging
import sys

from antlr4 import Parser, ParserRuleContext, ParseTreeVisitor, Token, TokenStream

from .errors import FragmentRecognitionError, NestingLimitError
from .span import SourceSpan, token_span

if sys.version_info[1] > 5:
    from typing import TextIO
else:
    from typing.io import TextIO

logger = logging.getLogger(__name__)

# Выражения и блоки глубже этого не разбираются
MAX_NESTING = 64


class FragmentParser ( Parser ):

    grammarFileName = "Fragment.g4"

    RULE_program = 0
    RULE_functionDecl = 1
    RULE_param = 2
    RULE_type = 3
    RULE_block = 4
    RULE_statement = 5
    RULE_expression = 6
    RULE_macroArgs = 7
    RULE_ifExpression = 8

    ruleNames =  [ "program", "functionDecl", "param", "type", "block", "statement",
                   "expression", "macroArgs", "ifExpression" ]

    EOF = Token.EOF
    FN=1
    LET=2
    MUT=3
    RETURN=4
    IF=5
    ELSE=6
    TRUE=7
    FALSE=8
    LPAREN=9
    RPAREN=10
    LBRACE=11
    RBRACE=12
    LBRACKET=13
    RBRACKET=14
    COMMA=15
    SEMI=16
    COLON=17
    PATH_SEP=18
    DOT=19
    ARROW=20
    BANG=21
    AMP=22
    ASSIGN=23
    PLUS_ASSIGN=24
    MINUS_ASSIGN=25
    PLUS=26
    MINUS=27
    STAR=28
    SLASH=29
    PERCENT=30
    EQ=31
    NEQ=32
    LT=33
    GT=34
    LTE=35
    GTE=36
    AND_AND=37
    OR_OR=38
    IDENT=39
    INT=40
    FLOAT=41
    STRING=42
    CHAR=43
    LIFETIME=44

    # Токены, с которых может начинаться следующий оператор
    STATEMENT_START = {
        LET, FN, RETURN, IF, IDENT, INT, FLOAT, STRING, CHAR, TRUE, FALSE,
        LPAREN, LBRACE, MINUS, BANG, AMP, STAR,
    }

    LITERALS = {INT, FLOAT, STRING, CHAR, TRUE, FALSE}

    UNARY_OPS = {MINUS, BANG, STAR, AMP}

    ASSIGN_OPS = {ASSIGN, PLUS_ASSIGN, MINUS_ASSIGN}

    # Сила связывания бинарных операторов, больше = сильнее
    BINARY_PRECEDENCE = {
        OR_OR: 2,
        AND_AND: 3,
        EQ: 4, NEQ: 4, LT: 4, GT: 4, LTE: 4, GTE: 4,
        PLUS: 5, MINUS: 5,
        STAR: 6, SLASH: 6, PERCENT: 6,
    }
    ASSIGN_PRECEDENCE = 1
    UNARY_PRECEDENCE = 7
    POSTFIX_PRECEDENCE = 8

    MACRO_DELIMITERS = {
        LPAREN: RPAREN,
        LBRACKET: RBRACKET,
        LBRACE: RBRACE,
    }

    CLOSING_TEXT = {RPAREN: ')', RBRACKET: ']', RBRACE: '}', GT: '>'}

    def __init__(self, input:TokenStream, output:TextIO = sys.stdout):
        super().__init__(input, output)
        self._depth = 0


    class ProgramContext(ParserRuleContext):
        __slots__ = 'parser'

        def __init__(self, parser, parent:ParserRuleContext=None, invokingState:int=-1):
            super().__init__(parent, invokingState)
            self.parser = parser

        def EOF(self):
            return self.getToken(FragmentParser.EOF, 0)

        def statement(self, i:int=None):
            if i is None:
                return self.getTypedRuleContexts(FragmentParser.StatementContext)
            else:
                return self.getTypedRuleContext(FragmentParser.StatementContext,i)

        def getRuleIndex(self):
            return FragmentParser.RULE_program

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitProgram" ):
                return visitor.visitProgram(self)
            else:
                return visitor.visitChildren(self)


    def program(self):

        localctx = FragmentParser.ProgramContext(self, self._ctx, self.state)
        self.enterRule(localctx, 0, self.RULE_program)
        try:
            while self._la() != Token.EOF:
                start = self._input.index
                if self._la() == self.RBRACE:
                    self._report(f"Unexpected '}}'", token_span(self.getCurrentToken()), "statement")
                    self.consume()
                    continue

                self.statement()
                self._ensure_progress(start)

            self._match()
        finally:
            self.exitRule()
        logger.debug(f"Parsed {len(localctx.statement())} top-level statements, {self._syntaxErrors} issues")
        return localctx


    class FunctionDeclContext(ParserRuleContext):
        __slots__ = ('parser', 'name', 'retType', 'body')

        def __init__(self, parser, parent:ParserRuleContext=None, invokingState:int=-1):
            super().__init__(parent, invokingState)
            self.parser = parser
            self.name = None # Token
            self.retType = None # TypeContext
            self.body = None # BlockContext

        def FN(self):
            return self.getToken(FragmentParser.FN, 0)

        def param(self, i:int=None):
            if i is None:
                return self.getTypedRuleContexts(FragmentParser.ParamContext)
            else:
                return self.getTypedRuleContext(FragmentParser.ParamContext,i)

        def getRuleIndex(self):
            return FragmentParser.RULE_functionDecl

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitFunctionDecl" ):
                return visitor.visitFunctionDecl(self)
            else:
                return visitor.visitChildren(self)


    def functionDecl(self):

        localctx = FragmentParser.FunctionDeclContext(self, self._ctx, self.state)
        self.enterRule(localctx, 2, self.RULE_functionDecl)
        try:
            self._match()  # fn
            localctx.name = self._expect(self.IDENT, "function name")

            if self._expect(self.LPAREN, "'('"):
                while self._la() not in (self.RPAREN, Token.EOF):
                    param = self.param()
                    if param.exception is not None or not self._optional(self.COMMA):
                        break
                self._expect(self.RPAREN, "')'")

            if self._optional(self.ARROW):
                localctx.retType = self.type_()

            localctx.body = self.block()
        finally:
            self.exitRule()
        return localctx


    class ParamContext(ParserRuleContext):
        __slots__ = ('parser', 'name', 'paramType')

        def __init__(self, parser, parent:ParserRuleContext=None, invokingState:int=-1):
            super().__init__(parent, invokingState)
            self.parser = parser
            self.name = None # Token
            self.paramType = None # TypeContext

        def getRuleIndex(self):
            return FragmentParser.RULE_param

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitParam" ):
                return visitor.visitParam(self)
            else:
                return visitor.visitChildren(self)


    def param(self):

        localctx = FragmentParser.ParamContext(self, self._ctx, self.state)
        self.enterRule(localctx, 4, self.RULE_param)
        try:
            self._optional(self.AMP)
            self._optional(self.MUT)
            localctx.name = self._expect(self.IDENT, "parameter name")
            if localctx.name is None:
                raise self._error(token_span(self.getCurrentToken()), "parameter name")

            # self записывается без типа
            if localctx.name.text != 'self' and self._expect(self.COLON, "':'"):
                localctx.paramType = self.type_()
        except FragmentRecognitionError as re:
            localctx.exception = re
        finally:
            self.exitRule()
        return localctx


    class TypeContext(ParserRuleContext):
        __slots__ = 'parser'

        def __init__(self, parser, parent:ParserRuleContext=None, invokingState:int=-1):
            super().__init__(parent, invokingState)
            self.parser = parser

        def getRuleIndex(self):
            return FragmentParser.RULE_type

        def copyFrom(self, ctx:ParserRuleContext):
            super().copyFrom(ctx)


    class RefTypeContext(TypeContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.TypeContext
            super().__init__(parser)
            self.mut = None # Token
            self.inner = None # TypeContext
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitRefType" ):
                return visitor.visitRefType(self)
            else:
                return visitor.visitChildren(self)


    class TupleTypeContext(TypeContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.TypeContext
            super().__init__(parser)
            self.parts = list() # of TypeContexts
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitTupleType" ):
                return visitor.visitTupleType(self)
            else:
                return visitor.visitChildren(self)


    class PathTypeContext(TypeContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.TypeContext
            super().__init__(parser)
            self.segments = list() # of Tokens
            self.args = list() # of TypeContexts
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitPathType" ):
                return visitor.visitPathType(self)
            else:
                return visitor.visitChildren(self)


    def type_(self):

        localctx = FragmentParser.TypeContext(self, self._ctx, self.state)
        self.enterRule(localctx, 6, self.RULE_type)
        try:
            la = self._la()
            if la == self.AMP:
                localctx = FragmentParser.RefTypeContext(self, localctx)
                self.enterOuterAlt(localctx, 1)
                self._match()
                # Время жизни на сравнение типов не влияет
                self._optional(self.LIFETIME)
                localctx.mut = self._optional(self.MUT)
                localctx.inner = self.type_()

            elif la == self.LPAREN:
                localctx = FragmentParser.TupleTypeContext(self, localctx)
                self.enterOuterAlt(localctx, 2)
                self._match()
                while self._la() not in (self.RPAREN, Token.EOF):
                    part = self.type_()
                    if part.exception is not None:
                        break
                    localctx.parts.append(part)
                    if not self._optional(self.COMMA):
                        break
                self._expect(self.RPAREN, "')'")

            elif la == self.IDENT:
                localctx = FragmentParser.PathTypeContext(self, localctx)
                self.enterOuterAlt(localctx, 3)
                localctx.segments.append(self._match())
                while self._optional(self.PATH_SEP):
                    segment = self._expect(self.IDENT, "type name")
                    if segment is None:
                        break
                    localctx.segments.append(segment)

                if self._optional(self.LT):
                    while self._la() not in (self.GT, Token.EOF):
                        arg = self.type_()
                        if arg.exception is not None:
                            break
                        localctx.args.append(arg)
                        if not self._optional(self.COMMA):
                            break
                    self._expect(self.GT, "'>'")

            else:
                self._expect(self.IDENT, "type")
                raise self._error(token_span(self.getCurrentToken()), "type")
        except FragmentRecognitionError as re:
            localctx.exception = re
        finally:
            self.exitRule()
        return localctx


    class BlockContext(ParserRuleContext):
        __slots__ = ('parser', 'tail')

        def __init__(self, parser, parent:ParserRuleContext=None, invokingState:int=-1):
            super().__init__(parent, invokingState)
            self.parser = parser
            self.tail = None # ExpressionContext

        def LBRACE(self):
            return self.getToken(FragmentParser.LBRACE, 0)

        def statement(self, i:int=None):
            if i is None:
                return self.getTypedRuleContexts(FragmentParser.StatementContext)
            else:
                return self.getTypedRuleContext(FragmentParser.StatementContext,i)

        def getRuleIndex(self):
            return FragmentParser.RULE_block

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitBlock" ):
                return visitor.visitBlock(self)
            else:
                return visitor.visitChildren(self)


    def block(self):

        localctx = FragmentParser.BlockContext(self, self._ctx, self.state)
        self.enterRule(localctx, 8, self.RULE_block)
        self._enter_nesting()
        try:
            if not self._expect(self.LBRACE, "'{'"):
                raise self._error(token_span(self.getCurrentToken()), "'{'")

            while self._la() not in (self.RBRACE, Token.EOF):
                start = self._input.index
                stmt = self.statement(in_block=True)
                if isinstance(stmt, FragmentParser.ExpressionStatementContext) and stmt.is_tail:
                    # Выражение перед '}' без ';' становится значением блока
                    localctx.removeLastChild()
                    localctx.tail = stmt.expr
                    localctx.tail.parentCtx = localctx
                    localctx.addChild(localctx.tail)
                self._ensure_progress(start)

            self._expect(self.RBRACE, "'}'")
        except FragmentRecognitionError as re:
            localctx.exception = re
        finally:
            self._depth -= 1
            self.exitRule()
        return localctx


    class StatementContext(ParserRuleContext):
        __slots__ = 'parser'

        def __init__(self, parser, parent:ParserRuleContext=None, invokingState:int=-1):
            super().__init__(parent, invokingState)
            self.parser = parser

        def getRuleIndex(self):
            return FragmentParser.RULE_statement

        def copyFrom(self, ctx:ParserRuleContext):
            super().copyFrom(ctx)


    class LetStatementContext(StatementContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.StatementContext
            super().__init__(parser)
            self.mut = None # Token
            self.name = None # Token
            self.declType = None # TypeContext
            self.init = None # ExpressionContext
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitLetStatement" ):
                return visitor.visitLetStatement(self)
            else:
                return visitor.visitChildren(self)


    class ReturnStatementContext(StatementContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.StatementContext
            super().__init__(parser)
            self.value = None # ExpressionContext
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitReturnStatement" ):
                return visitor.visitReturnStatement(self)
            else:
                return visitor.visitChildren(self)


    class ItemStatementContext(StatementContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.StatementContext
            super().__init__(parser)
            self.copyFrom(ctx)

        def functionDecl(self):
            return self.getTypedRuleContext(FragmentParser.FunctionDeclContext,0)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitItemStatement" ):
                return visitor.visitItemStatement(self)
            else:
                return visitor.visitChildren(self)


    class ExpressionStatementContext(StatementContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.StatementContext
            super().__init__(parser)
            self.expr = None # ExpressionContext
            self.semi = None # Token
            self.is_tail = False
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitExpressionStatement" ):
                return visitor.visitExpressionStatement(self)
            else:
                return visitor.visitChildren(self)


    class EmptyStatementContext(StatementContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.StatementContext
            super().__init__(parser)
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitEmptyStatement" ):
                return visitor.visitEmptyStatement(self)
            else:
                return visitor.visitChildren(self)


    def statement(self, in_block:bool=False):

        localctx = FragmentParser.StatementContext(self, self._ctx, self.state)
        self.enterRule(localctx, 10, self.RULE_statement)
        try:
            la = self._la()
            if la == self.FN:
                localctx = FragmentParser.ItemStatementContext(self, localctx)
                self.enterOuterAlt(localctx, 3)
                self.functionDecl()

            elif la == self.LET:
                localctx = FragmentParser.LetStatementContext(self, localctx)
                self.enterOuterAlt(localctx, 1)
                self._let_statement(localctx)

            elif la == self.RETURN:
                localctx = FragmentParser.ReturnStatementContext(self, localctx)
                self.enterOuterAlt(localctx, 2)
                self._match()
                if self._la() not in (self.SEMI, self.RBRACE, Token.EOF):
                    localctx.value = self.expression()
                if localctx.value is not None and localctx.value.exception is not None:
                    self._synchronize()
                else:
                    self._expect_terminator("return statement")

            elif la == self.SEMI:
                localctx = FragmentParser.EmptyStatementContext(self, localctx)
                self.enterOuterAlt(localctx, 5)
                self._match()

            else:
                localctx = FragmentParser.ExpressionStatementContext(self, localctx)
                self.enterOuterAlt(localctx, 4)
                self._expression_statement(localctx, in_block)
        finally:
            self.exitRule()
        return localctx

    def _let_statement(self, localctx:LetStatementContext):
        self._match()  # let
        localctx.mut = self._optional(self.MUT)
        localctx.name = self._expect(self.IDENT, "binding name")
        if localctx.name is None:
            localctx.exception = self._error(token_span(self.getCurrentToken()), "binding name")
            self._synchronize()
            return

        if self._optional(self.COLON):
            localctx.declType = self.type_()

        if self._optional(self.ASSIGN):
            localctx.init = self.expression()

        if localctx.init is not None and localctx.init.exception is not None:
            self._synchronize()
        else:
            self._expect_terminator("let statement")

    def _expression_statement(self, localctx:ExpressionStatementContext, in_block:bool):
        localctx.expr = self.expression()
        if localctx.expr.exception is not None:
            self._synchronize()
            return

        localctx.semi = self._optional(self.SEMI)
        if localctx.semi is not None:
            return
        if in_block and self._la() == self.RBRACE:
            localctx.is_tail = True
            return
        # Блок и if не требуют ';', в конце ввода его тоже можно не ставить
        if isinstance(localctx.expr, (FragmentParser.BlockExprContext, FragmentParser.IfExprContext)) \
                or self._la() == Token.EOF:
            return
        self._expect_terminator("expression")


    class ExpressionContext(ParserRuleContext):
        __slots__ = 'parser'

        def __init__(self, parser, parent:ParserRuleContext=None, invokingState:int=-1):
            super().__init__(parent, invokingState)
            self.parser = parser

        def getRuleIndex(self):
            return FragmentParser.RULE_expression

        def copyFrom(self, ctx:ParserRuleContext):
            super().copyFrom(ctx)


    class MethodCallExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.receiver = None # ExpressionContext
            self.method = None # Token
            self.args = list() # of ExpressionContexts
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitMethodCallExpr" ):
                return visitor.visitMethodCallExpr(self)
            else:
                return visitor.visitChildren(self)


    class FieldExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.receiver = None # ExpressionContext
            self.member = None # Token
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitFieldExpr" ):
                return visitor.visitFieldExpr(self)
            else:
                return visitor.visitChildren(self)


    class CallExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.callee = None # ExpressionContext
            self.args = list() # of ExpressionContexts
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitCallExpr" ):
                return visitor.visitCallExpr(self)
            else:
                return visitor.visitChildren(self)


    class UnaryExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.op = None # Token
            self.mut = None # Token
            self.operand = None # ExpressionContext
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitUnaryExpr" ):
                return visitor.visitUnaryExpr(self)
            else:
                return visitor.visitChildren(self)


    class BinaryExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.left = None # ExpressionContext
            self.op = None # Token
            self.right = None # ExpressionContext
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitBinaryExpr" ):
                return visitor.visitBinaryExpr(self)
            else:
                return visitor.visitChildren(self)


    class AssignExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.target = None # ExpressionContext
            self.op = None # Token
            self.value = None # ExpressionContext
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitAssignExpr" ):
                return visitor.visitAssignExpr(self)
            else:
                return visitor.visitChildren(self)


    class LiteralExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.value = None # Token
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitLiteralExpr" ):
                return visitor.visitLiteralExpr(self)
            else:
                return visitor.visitChildren(self)


    class MacroCallExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.segments = list() # of Tokens
            self.copyFrom(ctx)

        def macroArgs(self):
            return self.getTypedRuleContext(FragmentParser.MacroArgsContext,0)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitMacroCallExpr" ):
                return visitor.visitMacroCallExpr(self)
            else:
                return visitor.visitChildren(self)


    class PathExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.segments = list() # of Tokens
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitPathExpr" ):
                return visitor.visitPathExpr(self)
            else:
                return visitor.visitChildren(self)


    class UnitExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitUnitExpr" ):
                return visitor.visitUnitExpr(self)
            else:
                return visitor.visitChildren(self)


    class ParenExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.inner = None # ExpressionContext
            self.copyFrom(ctx)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitParenExpr" ):
                return visitor.visitParenExpr(self)
            else:
                return visitor.visitChildren(self)


    class BlockExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.copyFrom(ctx)

        def block(self):
            return self.getTypedRuleContext(FragmentParser.BlockContext,0)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitBlockExpr" ):
                return visitor.visitBlockExpr(self)
            else:
                return visitor.visitChildren(self)


    class IfExprContext(ExpressionContext):

        def __init__(self, parser, ctx:ParserRuleContext): # actually a FragmentParser.ExpressionContext
            super().__init__(parser)
            self.copyFrom(ctx)

        def ifExpression(self):
            return self.getTypedRuleContext(FragmentParser.IfExpressionContext,0)

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitIfExpr" ):
                return visitor.visitIfExpr(self)
            else:
                return visitor.visitChildren(self)


    def expression(self, _p:int=0):
        _parentctx = self._ctx
        _parentState = self.state
        localctx = FragmentParser.ExpressionContext(self, self._ctx, _parentState)
        _startState = 12
        self.enterRecursionRule(localctx, 12, self.RULE_expression, _p)
        self._enter_nesting()
        try:
            localctx = self._prefix_expression(localctx)
            _prevctx = localctx

            while True:
                la = self._la()
                if la == self.DOT and self.precpred(self._ctx, self.POSTFIX_PRECEDENCE):
                    member = self._input.LT(2)
                    if member.type == self.IDENT and self._input.LA(3) == self.LPAREN:
                        localctx = FragmentParser.MethodCallExprContext(self, FragmentParser.ExpressionContext(self, _parentctx, _parentState))
                        localctx.receiver = _prevctx
                        self.pushNewRecursionContext(localctx, _startState, self.RULE_expression)
                        self._match()  # .
                        localctx.method = self._match()
                        self._match()  # (
                        self._arguments(localctx.args, self.RPAREN)
                    else:
                        localctx = FragmentParser.FieldExprContext(self, FragmentParser.ExpressionContext(self, _parentctx, _parentState))
                        localctx.receiver = _prevctx
                        self.pushNewRecursionContext(localctx, _startState, self.RULE_expression)
                        self._match()  # .
                        if member.type not in (self.IDENT, self.INT):
                            span = token_span(member)
                            self._report(f"Expected field or method name, found '{self._display(member)}'",
                                         span, "identifier")
                            raise self._error(span, "identifier")
                        localctx.member = self._match()

                elif la == self.LPAREN and self.precpred(self._ctx, self.POSTFIX_PRECEDENCE):
                    localctx = FragmentParser.CallExprContext(self, FragmentParser.ExpressionContext(self, _parentctx, _parentState))
                    localctx.callee = _prevctx
                    self.pushNewRecursionContext(localctx, _startState, self.RULE_expression)
                    self._match()  # (
                    self._arguments(localctx.args, self.RPAREN)

                elif la in self.BINARY_PRECEDENCE and self.precpred(self._ctx, self.BINARY_PRECEDENCE[la]):
                    level = self.BINARY_PRECEDENCE[la]
                    localctx = FragmentParser.BinaryExprContext(self, FragmentParser.ExpressionContext(self, _parentctx, _parentState))
                    localctx.left = _prevctx
                    self.pushNewRecursionContext(localctx, _startState, self.RULE_expression)
                    localctx.op = self._match()
                    localctx.right = self.expression(level + 1)

                elif la in self.ASSIGN_OPS and self.precpred(self._ctx, self.ASSIGN_PRECEDENCE):
                    localctx = FragmentParser.AssignExprContext(self, FragmentParser.ExpressionContext(self, _parentctx, _parentState))
                    localctx.target = _prevctx
                    self.pushNewRecursionContext(localctx, _startState, self.RULE_expression)
                    localctx.op = self._match()
                    # Присваивание правоассоциативно
                    localctx.value = self.expression(self.ASSIGN_PRECEDENCE)

                else:
                    break
                _prevctx = localctx

        except FragmentRecognitionError as re:
            localctx.exception = re
        finally:
            self._depth -= 1
            self.unrollRecursionContexts(_parentctx)
        return localctx

    def _prefix_expression(self, localctx:ExpressionContext):
        la = self._la()

        if la in self.UNARY_OPS:
            localctx = FragmentParser.UnaryExprContext(self, localctx)
            self._ctx = localctx
            localctx.op = self._match()
            if localctx.op.type == self.AMP:
                localctx.mut = self._optional(self.MUT)
            localctx.operand = self.expression(self.UNARY_PRECEDENCE)

        elif la in self.LITERALS:
            localctx = FragmentParser.LiteralExprContext(self, localctx)
            self._ctx = localctx
            localctx.value = self._match()

        elif la == self.IDENT:
            # Путь a::b::c, за которым '!' и скобка означают вызов макроса
            k = 1
            while self._input.LA(k + 1) == self.PATH_SEP and self._input.LA(k + 2) == self.IDENT:
                k += 2
            is_macro = self._input.LA(k + 1) == self.BANG and self._input.LA(k + 2) in self.MACRO_DELIMITERS

            if is_macro:
                localctx = FragmentParser.MacroCallExprContext(self, localctx)
            else:
                localctx = FragmentParser.PathExprContext(self, localctx)
            self._ctx = localctx
            localctx.segments.append(self._match())
            while self._la() == self.PATH_SEP and self._input.LA(2) == self.IDENT:
                self._match()
                localctx.segments.append(self._match())

            if is_macro:
                self._match()  # !
                self.macroArgs()

        elif la == self.LPAREN:
            if self._input.LA(2) == self.RPAREN:
                localctx = FragmentParser.UnitExprContext(self, localctx)
                self._ctx = localctx
                self._match()
                self._match()
            else:
                localctx = FragmentParser.ParenExprContext(self, localctx)
                self._ctx = localctx
                self._match()
                localctx.inner = self.expression()
                self._expect(self.RPAREN, "')'")

        elif la == self.LBRACE:
            localctx = FragmentParser.BlockExprContext(self, localctx)
            self._ctx = localctx
            self.block()

        elif la == self.IF:
            localctx = FragmentParser.IfExprContext(self, localctx)
            self._ctx = localctx
            self.ifExpression()

        else:
            token = self.getCurrentToken()
            span = token_span(token)
            self._report(f"Expected expression, found '{self._display(token)}'", span, "expression")
            if la not in (self.RBRACE, self.SEMI, Token.EOF):
                self.consume()
            raise self._error(span, "expression")

        return localctx


    class MacroArgsContext(ParserRuleContext):
        __slots__ = ('parser', 'args')

        def __init__(self, parser, parent:ParserRuleContext=None, invokingState:int=-1):
            super().__init__(parent, invokingState)
            self.parser = parser
            self.args = list() # of ExpressionContexts

        def getRuleIndex(self):
            return FragmentParser.RULE_macroArgs

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitMacroArgs" ):
                return visitor.visitMacroArgs(self)
            else:
                return visitor.visitChildren(self)


    def macroArgs(self):

        localctx = FragmentParser.MacroArgsContext(self, self._ctx, self.state)
        self.enterRule(localctx, 14, self.RULE_macroArgs)
        try:
            close = self.MACRO_DELIMITERS[self._match().type]
            self._arguments(localctx.args, close)
        finally:
            self.exitRule()
        return localctx


    class IfExpressionContext(ParserRuleContext):
        __slots__ = ('parser', 'cond', 'then', 'elseIf', 'elseBlock')

        def __init__(self, parser, parent:ParserRuleContext=None, invokingState:int=-1):
            super().__init__(parent, invokingState)
            self.parser = parser
            self.cond = None # ExpressionContext
            self.then = None # BlockContext
            self.elseIf = None # IfExpressionContext
            self.elseBlock = None # BlockContext

        def getRuleIndex(self):
            return FragmentParser.RULE_ifExpression

        def accept(self, visitor:ParseTreeVisitor):
            if hasattr( visitor, "visitIfExpression" ):
                return visitor.visitIfExpression(self)
            else:
                return visitor.visitChildren(self)


    def ifExpression(self):

        localctx = FragmentParser.IfExpressionContext(self, self._ctx, self.state)
        self.enterRule(localctx, 16, self.RULE_ifExpression)
        self._enter_nesting()
        try:
            self._match()  # if
            localctx.cond = self.expression()
            localctx.then = self.block()
            if self._optional(self.ELSE):
                if self._la() == self.IF:
                    localctx.elseIf = self.ifExpression()
                else:
                    localctx.elseBlock = self.block()
        finally:
            self._depth -= 1
            self.exitRule()
        return localctx

    # --- Recovery ---

    def _arguments(self, args:list, close:int):
        """Список выражений через запятую до закрывающего токена включительно."""
        while self._la() not in (close, Token.EOF):
            arg = self.expression()
            args.append(arg)
            if arg.exception is not None or not self._optional(self.COMMA):
                break
        self._expect(close, f"'{self.CLOSING_TEXT[close]}'")

    def _expect_terminator(self, what:str):
        if self._optional(self.SEMI):
            return
        current = self.getCurrentToken()
        # Перед '}' и концом ввода следующего оператора нет
        if current.type in (self.RBRACE, Token.EOF):
            return

        end = token_span(self._input.LT(-1)).end_point()
        if current.type in self.STATEMENT_START:
            self._report(f"Expected ';' after {what}, found '{self._display(current)}'", end, "';'")
        else:
            self._report(f"Unexpected '{self._display(current)}' after {what}", token_span(current), "';'")
            self._synchronize()

    def _synchronize(self):
        """Пропуск токенов до границы оператора. Пропущенное уходит в дерево как ErrorNode."""
        self._errHandler.beginErrorCondition(self)
        while self._la() != Token.EOF:
            if self._la() == self.SEMI:
                self.consume()
                self._errHandler.endErrorCondition(self)
                return
            if self._la() in (self.RBRACE, self.LET, self.FN, self.RETURN):
                return
            self.consume()

    def _ensure_progress(self, start:int):
        if self._input.index == start:
            self._errHandler.beginErrorCondition(self)
            self.consume()

    def _enter_nesting(self):
        self._depth += 1
        if self._depth > MAX_NESTING:
            token = self.getCurrentToken()
            raise NestingLimitError(f"Nesting is deeper than {MAX_NESTING} levels",
                                    token.line, token.column + 1, token.start)

    # --- Token helpers ---

    def _la(self) -> int:
        return self._input.LA(1)

    def _match(self) -> Token:
        """Текущий токен подходит: выходим из режима восстановления и забираем его."""
        self._errHandler.reportMatch(self)
        return self.consume()

    def _optional(self, ttype:int):
        if self._la() == ttype:
            return self._match()
        return None

    def _expect(self, ttype:int, expected:str):
        if self._la() == ttype:
            return self._match()
        current = self.getCurrentToken()
        self._report(f"Expected {expected}, found '{self._display(current)}'", token_span(current), expected)
        return None

    def _display(self, token:Token) -> str:
        return "end of input" if token.type == Token.EOF else token.text

    def _error(self, span:SourceSpan, expected:str) -> FragmentRecognitionError:
        return FragmentRecognitionError(self, span, expected)

    def _report(self, message:str, span:SourceSpan, expected:str):
        # Пока не было успешного совпадения, новые ошибки считаются наведёнными
        if self._errHandler.inErrorRecoveryMode(self):
            return
        self._errHandler.beginErrorCondition(self)
        logger.debug(f"Parse issue at {span.start_line}:{span.start_col}: {message}")
        self.notifyErrorListeners(message, self.getCurrentToken(), self._error(span, expected))
