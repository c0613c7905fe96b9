from dataclasses import dataclass
from typing import List, Any, Optional

from .span import SourceSpan
from .visitor import ASTNode, ASTVisitor


@dataclass(frozen=True)
class TypeRef:
    """Записанный в коде тип: 'i32', '&str', '()', 'Vec<i32>'"""
    name: str
    span: SourceSpan

    @property
    def is_unit(self) -> bool:
        return self.name == '()'


@dataclass
class Param:
    name: str
    type_ref: Optional[TypeRef]
    span: SourceSpan


# --- Items & statements ---

@dataclass
class Program(ASTNode):
    items: List[ASTNode]
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_program(self)


@dataclass
class FunctionDecl(ASTNode):
    name: str
    params: List[Param]
    return_type: Optional[TypeRef]
    body: 'Block'
    span: SourceSpan
    name_span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function(self)


@dataclass
class Block(ASTNode):
    statements: List[ASTNode]
    tail: Optional[ASTNode]
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_block(self)


@dataclass
class LetStmt(ASTNode):
    name: str
    mutable: bool
    type_ref: Optional[TypeRef]
    init: Optional[ASTNode]
    span: SourceSpan
    name_span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_let(self)


@dataclass
class ReturnStmt(ASTNode):
    value: Optional[ASTNode]
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_return(self)


@dataclass
class ExprStmt(ASTNode):
    expr: ASTNode
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_expr_stmt(self)


# --- Literals ---

@dataclass
class IntLiteral(ASTNode):
    value: int
    suffix: Optional[str]
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_int(self)


@dataclass
class FloatLiteral(ASTNode):
    value: float
    suffix: Optional[str]
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_float(self)


@dataclass
class StringLiteral(ASTNode):
    value: str
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_string(self)


@dataclass
class CharLiteral(ASTNode):
    value: str
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_char(self)


@dataclass
class BoolLiteral(ASTNode):
    value: bool
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_bool(self)


@dataclass
class UnitLiteral(ASTNode):
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unit(self)


# --- Expressions ---

@dataclass
class Identifier(ASTNode):
    # Путь вида String::from хранится целиком
    name: str
    span: SourceSpan

    @property
    def is_path(self) -> bool:
        return '::' in self.name

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_identifier(self)


@dataclass
class CallExpr(ASTNode):
    callee: ASTNode
    args: List[ASTNode]
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_call(self)


@dataclass
class MethodCallExpr(ASTNode):
    receiver: ASTNode
    method: str
    args: List[ASTNode]
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_method_call(self)


@dataclass
class FieldExpr(ASTNode):
    receiver: ASTNode
    field_name: str
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_field(self)


@dataclass
class MacroCall(ASTNode):
    name: str
    args: List[ASTNode]
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_macro_call(self)


@dataclass
class UnaryExpr(ASTNode):
    op: str
    operand: ASTNode
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unary(self)


@dataclass
class BinaryExpr(ASTNode):
    op: str
    left: ASTNode
    right: ASTNode
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_binary(self)


@dataclass
class AssignExpr(ASTNode):
    op: str
    target: ASTNode
    value: ASTNode
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_assign(self)


@dataclass
class IfExpr(ASTNode):
    condition: ASTNode
    then_branch: Block
    else_branch: Optional[ASTNode]
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_if(self)


@dataclass
class ErrorExpr(ASTNode):
    """Заглушка на месте выражения, которое не удалось разобрать."""
    span: SourceSpan

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_error(self)
