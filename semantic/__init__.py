from .diagnostics import (
    Severity, Category, DiagnosticFinding,
    TypeMismatchFinding, UndefinedReferenceFinding, SyntaxErrorFinding,
    UnusedBindingFinding, MissingReturnValueFinding
)
from .classifier import Classifier, Fragment, FragmentAnalyzer, classify
from .error_collector import ErrorCollector
from .symbol_table import Environment, SymbolInfo, SymbolKind

__all__ = [
    # Findings
    'Severity', 'Category', 'DiagnosticFinding',
    'TypeMismatchFinding', 'UndefinedReferenceFinding', 'SyntaxErrorFinding',
    'UnusedBindingFinding', 'MissingReturnValueFinding',
    # Classifier
    'Classifier', 'Fragment', 'FragmentAnalyzer', 'classify',
    # Semantic
    'ErrorCollector', 'Environment', 'SymbolInfo', 'SymbolKind'
]
