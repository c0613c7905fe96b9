import json

from semantic.report import summarize, format_finding, format_text, format_json
from tests.semantic_tests.base_semantic_test import BaseSemanticTest


class TestReport(BaseSemanticTest):
    def test_summary_counts_errors_and_warnings(self):
        findings = self.classify_source('let number: i32 = "not a number";')
        assert summarize(findings, "snippet.rs") == "Found 1 error and 1 warning in snippet.rs"

    def test_summary_for_clean_fragment(self):
        assert summarize([], "ok.rs") == "Found 0 errors and 0 warnings in ok.rs"

    def test_finding_layout(self):
        findings = self.classify_source("let unused = 42;")
        text = format_finding(findings[0], "main.rs")
        assert text == (
            "WARNING: Unused variable 'unused' [SEM005] (UnusedBinding)\n"
            "  at main.rs:1:5"
        )

    def test_text_report_starts_with_summary(self):
        findings = self.classify_source("fn f() -> i32 {}")
        lines = format_text(findings, "f.rs").splitlines()
        assert lines[0] == "Found 1 error and 0 warnings in f.rs"
        assert lines[2].startswith("ERROR: ")

    def test_json_report(self):
        findings = self.classify_source("fn f() { missing(); }")
        payload = json.loads(format_json(findings, "f.rs"))
        assert payload["file"] == "f.rs"
        assert len(payload["diagnostics"]) == 1
        diag = payload["diagnostics"][0]
        assert diag["category"] == "UndefinedReference"
        assert diag["code"] == "SEM004"
        assert diag["severity"] == "error"
        assert diag["line"] == 1
        assert diag["column"] == 10
        assert diag["context"] == ["Function 'f'"]
