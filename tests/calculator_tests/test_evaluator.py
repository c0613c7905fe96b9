import unittest

from calculator import Accumulator, Add, Subtract, Evaluator, evaluate, parse_operations, OperationSyntaxError
from main import run_examples


class TestEvaluator(unittest.TestCase):

    def test_evaluate_sequence(self):
        self.assertEqual(evaluate([Add(10.0), Subtract(3.0)]), 7.0)
        self.assertEqual(evaluate([]), 0.0)

    def test_evaluate_from_start(self):
        self.assertEqual(evaluate([Subtract(1.5)], Accumulator(4.0)), 2.5)

    def test_evaluator_keeps_start_untouched(self):
        start = Accumulator(1.0)
        result = Evaluator(start).run([Add(1.0), Add(1.0)])
        self.assertEqual(result.get_value(), 3.0)
        self.assertEqual(start.get_value(), 1.0)

    def test_operation_str(self):
        self.assertEqual(str(Add(5.0)), "+5")
        self.assertEqual(str(Subtract(2.5)), "-2.5")


class TestParseOperations(unittest.TestCase):

    def test_signed_tokens(self):
        self.assertEqual(parse_operations("+10 -3"), [Add(10.0), Subtract(3.0)])

    def test_operator_words(self):
        cases = [
            ("add 5 sub 2", [Add(5.0), Subtract(2.0)]),
            ("plus 1.5 minus 0.5", [Add(1.5), Subtract(0.5)]),
            ("ADD 1 subtract 1", [Add(1.0), Subtract(1.0)]),
            ("+ 4 - 1", [Add(4.0), Subtract(1.0)]),
        ]
        for text, expected in cases:
            with self.subTest(text=text):
                self.assertEqual(parse_operations(text), expected)

    def test_bare_number_is_addition(self):
        self.assertEqual(parse_operations("7 -2"), [Add(7.0), Subtract(2.0)])

    def test_empty_input(self):
        self.assertEqual(parse_operations("   "), [])

    def test_invalid_amount(self):
        with self.assertRaises(OperationSyntaxError) as ctx:
            parse_operations("+1 +ten")
        self.assertEqual(ctx.exception.token, "ten")
        self.assertEqual(ctx.exception.position, 1)

    def test_missing_operand(self):
        with self.assertRaises(OperationSyntaxError) as ctx:
            parse_operations("add 1 sub")
        self.assertEqual(ctx.exception.token, "sub")
        self.assertEqual(ctx.exception.position, 2)

    def test_doubled_sign_is_rejected(self):
        for text, position in [("--5", 0), ("+1 +-2", 1), ("-+3", 0), ("++4", 0)]:
            with self.subTest(text=text):
                with self.assertRaises(OperationSyntaxError) as ctx:
                    parse_operations(text)
                self.assertEqual(ctx.exception.position, position)
                self.assertIn("Doubled sign", str(ctx.exception))

    def test_signed_operand_after_operator_word(self):
        self.assertEqual(parse_operations("sub -2 add +1"), [Subtract(-2.0), Add(1.0)])

    def test_is_value_error(self):
        with self.assertRaises(ValueError):
            parse_operations("times 3")


class TestExamples(unittest.TestCase):

    def test_run_examples(self):
        self.assertEqual(run_examples(), 7.0)


if __name__ == '__main__':
    unittest.main()
