from antlr4 import *
if "." in __name__:
    from .parser import FragmentParser
else:
    from parser import FragmentParser

# This class defines a complete generic visitor for a parse tree produced by FragmentParser.

class FragmentVisitor(ParseTreeVisitor):

    # Visit a parse tree produced by FragmentParser#program.
    def visitProgram(self, ctx:FragmentParser.ProgramContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#functionDecl.
    def visitFunctionDecl(self, ctx:FragmentParser.FunctionDeclContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#param.
    def visitParam(self, ctx:FragmentParser.ParamContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#refType.
    def visitRefType(self, ctx:FragmentParser.RefTypeContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#tupleType.
    def visitTupleType(self, ctx:FragmentParser.TupleTypeContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#pathType.
    def visitPathType(self, ctx:FragmentParser.PathTypeContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#block.
    def visitBlock(self, ctx:FragmentParser.BlockContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#letStatement.
    def visitLetStatement(self, ctx:FragmentParser.LetStatementContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#returnStatement.
    def visitReturnStatement(self, ctx:FragmentParser.ReturnStatementContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#itemStatement.
    def visitItemStatement(self, ctx:FragmentParser.ItemStatementContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#expressionStatement.
    def visitExpressionStatement(self, ctx:FragmentParser.ExpressionStatementContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#emptyStatement.
    def visitEmptyStatement(self, ctx:FragmentParser.EmptyStatementContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#methodCallExpr.
    def visitMethodCallExpr(self, ctx:FragmentParser.MethodCallExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#fieldExpr.
    def visitFieldExpr(self, ctx:FragmentParser.FieldExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#callExpr.
    def visitCallExpr(self, ctx:FragmentParser.CallExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#unaryExpr.
    def visitUnaryExpr(self, ctx:FragmentParser.UnaryExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#binaryExpr.
    def visitBinaryExpr(self, ctx:FragmentParser.BinaryExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#assignExpr.
    def visitAssignExpr(self, ctx:FragmentParser.AssignExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#literalExpr.
    def visitLiteralExpr(self, ctx:FragmentParser.LiteralExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#macroCallExpr.
    def visitMacroCallExpr(self, ctx:FragmentParser.MacroCallExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#pathExpr.
    def visitPathExpr(self, ctx:FragmentParser.PathExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#unitExpr.
    def visitUnitExpr(self, ctx:FragmentParser.UnitExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#parenExpr.
    def visitParenExpr(self, ctx:FragmentParser.ParenExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#blockExpr.
    def visitBlockExpr(self, ctx:FragmentParser.BlockExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#ifExpr.
    def visitIfExpr(self, ctx:FragmentParser.IfExprContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#macroArgs.
    def visitMacroArgs(self, ctx:FragmentParser.MacroArgsContext):
        return self.visitChildren(ctx)


    # Visit a parse tree produced by FragmentParser#ifExpression.
    def visitIfExpression(self, ctx:FragmentParser.IfExpressionContext):
        return self.visitChildren(ctx)



del FragmentParser
