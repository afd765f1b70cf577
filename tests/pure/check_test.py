import unittest

from stlc.lang.error import UnknownTerm
from stlc.lang.lexical import parse
from stlc.pure.check import check
from stlc.pure.environment import Environment
from stlc.pure.terms import Abstraction, Application, Condition, Literal
from stlc.pure.types import Arrow, BOOLEAN, NATURAL, arrow


class CheckTestCase(unittest.TestCase):

    def test_literal(self):
        should_fail = [Literal(-1), Literal(0.5), Literal("zero"), Literal(None)]
        for case in should_fail:
            result = check(case)
            self.assertIsNone(result.type, case)
            self.assertEqual(1, len(result.diagnostics), case)
            self.assertIn("unknown literal type", result.diagnostics[0], case)

        should_pass = {Literal(0): NATURAL, Literal(3): NATURAL, Literal(True): BOOLEAN, Literal(False): BOOLEAN}
        for case, expected in should_pass.items():
            result = check(case)
            self.assertEqual(expected, result.type, case)
            self.assertEqual([], result.diagnostics, case)

    def test_well_typed(self):
        cases = {
            "0": NATURAL,
            "iszero 0": BOOLEAN,
            "succ (pred 0)": NATURAL,
            "if true then 0 else succ 0": NATURAL,
            "if iszero 0 then 1 else 0": NATURAL,
            "λx: Nat. x": Arrow(NATURAL, NATURAL),
            "λx: Nat. λy: Bool. x": arrow(NATURAL, BOOLEAN, NATURAL),
            "λx: Nat. λx: Bool. x": arrow(NATURAL, BOOLEAN, BOOLEAN),
            "(λx: Nat. iszero x) 0": BOOLEAN,
            "λf: Nat -> Nat. f 0": arrow(Arrow(NATURAL, NATURAL), NATURAL),
            "(λx: Nat. λy: Nat. succ x) 5 9": NATURAL,
            "(λx: Nat. iszero x) ()": BOOLEAN,
        }
        for case, expected in cases.items():
            result = check(parse(case))
            self.assertEqual([], result.diagnostics, case)
            self.assertTrue(result.ok, case)
            self.assertEqual(expected, result.type, case)

    def test_ill_typed(self):
        should_fail = [
            "if 0 then true else false",
            "if true then 0 else false",
            "succ true",
            "pred (λx: Nat. x)",
            "iszero false",
            "x",
            "0 0",
            "(λx: Nat. x) true",
            "(λx: Nat. x) y",
            "λx: Nat. succ iszero x",
            "(λf: Nat -> Nat. f 0) (λx: Bool. 0)",
        ]
        for case in should_fail:
            result = check(parse(case))
            self.assertIsNone(result.type, case)
            self.assertTrue(result.diagnostics, case)
            self.assertFalse(result.ok, case)

    def test_condition_type_mismatch(self):
        result = check(Condition(Literal(0), Literal(True), Literal(False)))
        self.assertIsNone(result.type)
        self.assertEqual(["condition must be Boolean, got Natural"], result.diagnostics)

    def test_diagnostics_order(self):
        cases = {
            "if 0 then succ true else iszero false": [
                "condition must be Boolean, got Natural",
                "incorrect type of succ: expected Natural, got Boolean",
                "incorrect type of iszero: expected Natural, got Boolean",
            ],
            "if true then 0 else false": ["branches diverge in type: then is Natural, else is Boolean"],
            "if a then b else c": [
                "unbound identifier 'a'",
                "unbound identifier 'b'",
                "unbound identifier 'c'",
            ],
            # right side is not checked once the left side failed
            "x (succ true)": ["unbound identifier 'x'"],
            "0 0": ["incorrect application type: '0' is Natural, not a function"],
            "(λx: Nat. x) true": ["incorrect application type: expected Natural, got Boolean"],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, check(parse(case)).diagnostics, case)

    def test_scope_does_not_leak(self):
        env = Environment()
        cases = ["λx: Nat. x", "λx: Nat. succ true", "(λx: Nat. λy: Bool. x) 0 true", "λx: Nat. y"]
        for case in cases:
            check(parse(case), env)
            self.assertEqual(0, len(env), case)

        # x is only bound inside the abstraction, not in its argument
        result = check(parse("(λx: Nat. x) x"))
        self.assertEqual(["unbound identifier 'x'"], result.diagnostics)

    def test_missing_subterms(self):
        should_fail = [
            Abstraction("x", NATURAL, None),
            Condition(Literal(True), None, Literal(0)),
            Application(None, Literal(0)),
        ]
        for case in should_fail:
            result = check(case)
            self.assertIsNone(result.type, case)
            self.assertEqual(1, len(result.diagnostics), case)

        result = check(None)
        self.assertIsNone(result.type)
        self.assertEqual([], result.diagnostics)

    def test_unknown_term(self):
        should_raise = [object(), "0", 0]
        for case in should_raise:
            self.assertRaises(UnknownTerm, check, case)


if __name__ == '__main__':
    unittest.main()
