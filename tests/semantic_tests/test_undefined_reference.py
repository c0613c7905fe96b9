from semantic.diagnostics import Category, UndefinedReferenceFinding
from tests.semantic_tests.base_semantic_test import BaseSemanticTest


class TestUndefinedReference(BaseSemanticTest):
    def test_undefined_variable_in_macro(self):
        findings = self.classify_source("""
            fn undefined_variable() {
                println!("{}", undefined_var);
            }
        """)
        assert self.categories(findings) == [Category.UNDEFINED_REFERENCE]
        finding = findings[0]
        assert isinstance(finding, UndefinedReferenceFinding)
        assert finding.symbol_name == "undefined_var"
        assert finding.location.start_line == 2
        assert "Function 'undefined_variable'" in finding.context_stack

    def test_reference_before_binding(self):
        findings = self.classify_source("""
            fn f() {
                let a = b;
                let b = 1;
                println!("{} {}", a, b);
            }
        """)
        undefined = self.of_category(findings, Category.UNDEFINED_REFERENCE)
        assert len(undefined) == 1
        assert undefined[0].symbol_name == "b"
        assert undefined[0].location.start_line == 2

    def test_undefined_function_call(self):
        findings = self.classify_source("fn main() { missing(); }")
        assert self.categories(findings) == [Category.UNDEFINED_REFERENCE]
        assert "function" in findings[0].message

    def test_functions_visible_regardless_of_order(self):
        findings = self.classify_source("""
            fn main() {
                helper();
            }
            fn helper() {}
        """)
        assert findings == []

    def test_binding_not_visible_outside_block(self):
        findings = self.classify_source("""
            fn f() {
                {
                    let inner = 1;
                    println!("{}", inner);
                }
                println!("{}", inner);
            }
        """)
        undefined = self.of_category(findings, Category.UNDEFINED_REFERENCE)
        assert len(undefined) == 1
        assert undefined[0].location.start_line == 6

    def test_inline_format_arguments_are_resolved(self):
        findings = self.classify_source("""
            fn f() {
                let known = 1;
                println!("{known} {unknown:?} {{literal}}");
            }
        """)
        undefined = self.of_category(findings, Category.UNDEFINED_REFERENCE)
        assert [f.symbol_name for f in undefined] == ["unknown"]

    def test_prelude_and_paths_are_not_reported(self):
        findings = self.classify_source("""
            fn f() -> Option<String> {
                let s = String::from("x");
                Some(s)
            }
        """)
        assert findings == []

    def test_parameters_are_in_scope(self):
        findings = self.classify_source("""
            fn double(value: i32) -> i32 {
                value * 2
            }
        """)
        assert findings == []

    def test_nested_function_does_not_capture_outer_locals(self):
        findings = self.classify_source("""
            fn outer() {
                let x = 1;
                fn inner() -> i32 { x }
                inner();
            }
        """)
        undefined = self.of_category(findings, Category.UNDEFINED_REFERENCE)
        assert [f.symbol_name for f in undefined] == ["x"]
        assert undefined[0].location.start_line == 3

    def test_nested_function_sees_other_functions(self):
        findings = self.classify_source("""
            fn outer() {
                fn inner() -> i32 { helper() + sibling() }
                fn sibling() -> i32 { 2 }
                println!("{}", inner());
            }
            fn helper() -> i32 { 1 }
        """)
        assert findings == []
