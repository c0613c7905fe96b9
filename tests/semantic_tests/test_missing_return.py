from semantic.diagnostics import Category, MissingReturnValueFinding
from tests.semantic_tests.base_semantic_test import BaseSemanticTest


class TestMissingReturnValue(BaseSemanticTest):
    def test_empty_body(self):
        findings = self.classify_source("""
            fn missing_return() -> i32 {
                // Function should return i32 but doesn't
            }
        """)
        assert self.categories(findings) == [Category.MISSING_RETURN_VALUE]

        finding = findings[0]
        assert isinstance(finding, MissingReturnValueFinding)
        assert finding.func_name == "missing_return"
        assert finding.return_type == "i32"
        assert finding.actual_type is None
        # Указывает на объявленный тип
        assert finding.location.start_line == 1
        assert finding.location.start_col == 24
        assert finding.context_stack == ["Function 'missing_return'"]

    def test_statement_instead_of_tail(self):
        findings = self.classify_source("""
            fn f() -> i32 {
                5;
            }
        """)
        assert self.categories(findings) == [Category.MISSING_RETURN_VALUE]

    def test_tail_of_wrong_type(self):
        findings = self.classify_source("""
            fn f() -> i32 {
                println!("nothing")
            }
        """)
        assert self.categories(findings) == [Category.MISSING_RETURN_VALUE]
        assert findings[0].actual_type == "()"

    def test_explicit_return(self):
        findings = self.classify_source("""
            fn sign(x: i32) -> i32 {
                if x < 0 {
                    return -1;
                }
                return 1;
            }
        """)
        assert findings == []

    def test_bare_return_produces_no_value(self):
        findings = self.classify_source("""
            fn f() -> i32 {
                return;
            }
        """)
        assert self.categories(findings) == [Category.MISSING_RETURN_VALUE]

    def test_return_after_return_is_unreachable(self):
        findings = self.classify_source("""
            fn f() -> i32 {
                return;
                return 5;
            }
        """)
        assert self.categories(findings) == [Category.MISSING_RETURN_VALUE]

    def test_diverging_macro_satisfies_return_type(self):
        findings = self.classify_source("""
            fn later() -> i32 {
                todo!()
            }
            fn never() -> String {
                panic!("boom");
            }
        """)
        assert findings == []

    def test_if_else_tail(self):
        findings = self.classify_source("""
            fn pick(flag: bool) -> f64 {
                if flag { 1.0 } else { 2.5 }
            }
        """)
        assert findings == []

    def test_unit_functions_are_not_checked(self):
        findings = self.classify_source("""
            fn a() {}
            fn b() -> () {}
        """)
        assert findings == []
