"""
Текстовый и JSON вывод находок.
Текстовый блок на каждую находку:
    ERROR: message [code]
      at file:line:column
"""
import json
from typing import List

from .diagnostics import DiagnosticFinding, Severity


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def summarize(findings: List[DiagnosticFinding], name: str) -> str:
    errors = sum(1 for f in findings if f.severity == Severity.ERROR)
    warnings = sum(1 for f in findings if f.severity == Severity.WARNING)
    return f"Found {_plural(errors, 'error')} and {_plural(warnings, 'warning')} in {name}"


def format_finding(finding: DiagnosticFinding, name: str) -> str:
    loc = finding.location
    return (
        f"{finding.severity.name}: {finding.message} [{finding.error_code}] ({finding.category.value})\n"
        f"  at {name}:{loc.start_line}:{loc.start_col}"
    )


def format_text(findings: List[DiagnosticFinding], name: str) -> str:
    blocks = [summarize(findings, name)]
    blocks.extend(format_finding(f, name) for f in findings)
    return "\n\n".join(blocks)


def format_json(findings: List[DiagnosticFinding], name: str) -> str:
    payload = {
        "file": name,
        "summary": summarize(findings, name),
        "diagnostics": [f.to_dict() for f in findings],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)
