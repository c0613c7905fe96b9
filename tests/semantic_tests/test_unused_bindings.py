from semantic.diagnostics import Category, Severity, UnusedBindingFinding
from tests.semantic_tests.base_semantic_test import BaseSemanticTest


class TestUnusedBindings(BaseSemanticTest):
    def test_unused_let(self):
        findings = self.classify_source("let unused = 42;")
        assert self.categories(findings) == [Category.UNUSED_BINDING]

        finding = findings[0]
        assert isinstance(finding, UnusedBindingFinding)
        assert finding.binding_name == "unused"
        assert finding.severity == Severity.WARNING
        assert finding.location.start_col == 5

    def test_unused_inside_function_carries_context(self):
        findings = self.classify_source("""
            fn unused_variable() {
                let unused = 42;
            }
        """)
        assert self.categories(findings) == [Category.UNUSED_BINDING]
        assert findings[0].context_stack == ["Function 'unused_variable'"]

    def test_underscore_prefix_is_exempt(self):
        findings = self.classify_source("""
            fn f(_ignored: i32) {
                let _scratch = 1;
                let _ = 2;
            }
        """)
        assert findings == []

    def test_unused_parameter(self):
        findings = self.classify_source("fn f(value: i32) {}")
        assert self.categories(findings) == [Category.UNUSED_BINDING]
        assert "parameter" in findings[0].message

    def test_shadowed_binding_tracked_separately(self):
        findings = self.classify_source("""
            fn f() {
                let x = 1;
                let x = 2;
                println!("{}", x);
            }
        """)
        unused = self.of_category(findings, Category.UNUSED_BINDING)
        assert len(unused) == 1
        assert unused[0].location.start_line == 2

    def test_shadowing_initializer_uses_previous_binding(self):
        findings = self.classify_source("""
            fn f() {
                let x = 1;
                let x = x + 1;
                println!("{}", x);
            }
        """)
        assert findings == []

    def test_nested_scopes_are_checked_independently(self):
        findings = self.classify_source("""
            fn f() {
                let outer = 1;
                {
                    let inner = outer;
                }
            }
        """)
        unused = self.of_category(findings, Category.UNUSED_BINDING)
        assert [f.binding_name for f in unused] == ["inner"]

    def test_assignment_counts_as_use(self):
        findings = self.classify_source("""
            fn f() {
                let mut total = 0;
                total += 5;
            }
        """)
        assert findings == []
