from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .ast_nodes import (
        Program, FunctionDecl, Block, LetStmt, ReturnStmt, ExprStmt,
        IntLiteral, FloatLiteral, StringLiteral, CharLiteral, BoolLiteral, UnitLiteral,
        Identifier, CallExpr, MethodCallExpr, FieldExpr, MacroCall,
        UnaryExpr, BinaryExpr, AssignExpr, IfExpr, ErrorExpr
    )


class ASTVisitor(ABC):
    @abstractmethod
    def visit_program(self, node: 'Program') -> Any: pass

    @abstractmethod
    def visit_function(self, node: 'FunctionDecl') -> Any: pass

    @abstractmethod
    def visit_block(self, node: 'Block') -> Any: pass

    @abstractmethod
    def visit_let(self, node: 'LetStmt') -> Any: pass

    @abstractmethod
    def visit_return(self, node: 'ReturnStmt') -> Any: pass

    @abstractmethod
    def visit_expr_stmt(self, node: 'ExprStmt') -> Any: pass

    @abstractmethod
    def visit_int(self, node: 'IntLiteral') -> Any: pass

    @abstractmethod
    def visit_float(self, node: 'FloatLiteral') -> Any: pass

    @abstractmethod
    def visit_string(self, node: 'StringLiteral') -> Any: pass

    @abstractmethod
    def visit_char(self, node: 'CharLiteral') -> Any: pass

    @abstractmethod
    def visit_bool(self, node: 'BoolLiteral') -> Any: pass

    @abstractmethod
    def visit_unit(self, node: 'UnitLiteral') -> Any: pass

    @abstractmethod
    def visit_identifier(self, node: 'Identifier') -> Any: pass

    @abstractmethod
    def visit_call(self, node: 'CallExpr') -> Any: pass

    @abstractmethod
    def visit_method_call(self, node: 'MethodCallExpr') -> Any: pass

    @abstractmethod
    def visit_field(self, node: 'FieldExpr') -> Any: pass

    @abstractmethod
    def visit_macro_call(self, node: 'MacroCall') -> Any: pass

    @abstractmethod
    def visit_unary(self, node: 'UnaryExpr') -> Any: pass

    @abstractmethod
    def visit_binary(self, node: 'BinaryExpr') -> Any: pass

    @abstractmethod
    def visit_assign(self, node: 'AssignExpr') -> Any: pass

    @abstractmethod
    def visit_if(self, node: 'IfExpr') -> Any: pass

    @abstractmethod
    def visit_error(self, node: 'ErrorExpr') -> Any: pass


class ASTNode(ABC):
    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        pass
