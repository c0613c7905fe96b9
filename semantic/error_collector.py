from typing import List
from contextlib import contextmanager
from .diagnostics import DiagnosticFinding, Severity

class ErrorCollector:
    def __init__(self):
        self._findings: List[DiagnosticFinding] = []
        self._context_stack: List[str] = []

    def add(self, finding: DiagnosticFinding):
        # Копируем текущий стек контекста в находку
        finding.context_stack = list(self._context_stack)
        self._findings.append(finding)

    @property
    def findings(self) -> List[DiagnosticFinding]:
        """Находки в порядке позиции в исходнике (сверху вниз)."""
        return sorted(self._findings, key=lambda f: f.location.start_index)

    @property
    def errors(self) -> List[DiagnosticFinding]:
        return [f for f in self.findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[DiagnosticFinding]:
        return [f for f in self.findings if f.severity == Severity.WARNING]

    @contextmanager
    def context(self, description: str):
        """
        Менеджер контекста для уточнения места находки.
        Пример: with collector.context("Function 'foo'"):
        """
        self._context_stack.append(description)
        try:
            yield
        finally:
            self._context_stack.pop()
