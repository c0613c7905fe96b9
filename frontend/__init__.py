from .ast_nodes import *
from .ast_builder import AstBuilder, parse
from .errors import FatalSyntaxError, LexError, NestingLimitError, ParseIssue
from .fragment_visitor import FragmentVisitor
from .lexer import FragmentLexer, tokenize
from .parser import FragmentParser
from .span import SourceSpan

__all__ = [
    # AST Nodes
    'ASTVisitor', 'ASTNode', 'TypeRef', 'Param',
    'Program', 'FunctionDecl', 'Block', 'LetStmt', 'ReturnStmt', 'ExprStmt',
    'IntLiteral', 'FloatLiteral', 'StringLiteral', 'CharLiteral', 'BoolLiteral', 'UnitLiteral',
    'Identifier', 'CallExpr', 'MethodCallExpr', 'FieldExpr', 'MacroCall',
    'UnaryExpr', 'BinaryExpr', 'AssignExpr', 'IfExpr', 'ErrorExpr',
    # Front end
    'FragmentLexer', 'FragmentParser', 'FragmentVisitor', 'AstBuilder',
    'FatalSyntaxError', 'LexError', 'NestingLimitError', 'ParseIssue',
    'tokenize', 'parse', 'SourceSpan'
]
