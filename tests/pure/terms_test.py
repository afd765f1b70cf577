import unittest

from stlc.lang.lexical import parse
from stlc.pure.check import check
from stlc.pure.codegen import generate
from stlc.pure.environment import Environment, Scope
from stlc.pure.evaluate import evaluate
from stlc.pure.terms import (Abstraction, Application, Arithmetic, Condition, Identifier, IsZero, Literal, Operator,
                             Term)
from stlc.pure.types import BOOLEAN, NATURAL, Arrow


class TermTestCase(unittest.TestCase):

    samples = {
        Literal: Literal(0),
        Identifier: Identifier("x"),
        Condition: Condition(Literal(True), Literal(0), Identifier("x")),
        Abstraction: Abstraction("y", BOOLEAN, Identifier("y")),
        Application: Application(Abstraction("y", NATURAL, Identifier("y")), Identifier("x")),
        IsZero: IsZero(Identifier("x")),
        Arithmetic: Arithmetic(Operator.PRED, Identifier("x")),
    }

    def test_every_engine_handles_every_term(self):
        self.assertEqual(set(Term.__subclasses__()), set(self.samples))

        for cls, case in self.samples.items():
            result = check(case, Environment([Scope({"x": NATURAL})]))
            self.assertTrue(result.ok, cls)
            self.assertIsNotNone(result.type, cls)

            evaluate(case, Environment([Scope({"x": 1})]))
            self.assertTrue(generate(case), cls)

    def test_str(self):
        cases = {
            Literal(True): "true",
            Literal(4): "4",
            Abstraction("x", Arrow(NATURAL, NATURAL), Identifier("x")): "λx: Natural -> Natural. x",
            Application(Application(Identifier("f"), Identifier("x")), Identifier("y")): "f x y",
            Application(Identifier("f"), Application(Identifier("g"), Identifier("x"))): "f (g x)",
            Application(Abstraction("x", NATURAL, Identifier("x")), Literal(0)): "(λx: Natural. x) 0",
            Application(Identifier("f"), None): "f ()",
            Arithmetic(Operator.SUCC, Arithmetic(Operator.SUCC, Literal(0))): "succ succ 0",
            IsZero(Application(Identifier("f"), Literal(0))): "iszero (f 0)",
            Condition(Literal(True), Literal(0), Literal(1)): "if true then 0 else 1",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(case), case)
            self.assertEqual(case, parse(str(case)), case)

    def test_missing_subterms(self):
        cases = {
            Abstraction("x", NATURAL, None): "λx: Natural. ",
            Condition(Literal(True), None, Literal(1)): "if true then  else 1",
            Application(Identifier("f"), None): "f ()",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(case), case)
            self.assertNotIn("None", case.display(), case)

    def test_literal_eq(self):
        self.assertNotEqual(Literal(0), Literal(False))
        self.assertNotEqual(Literal(1), Literal(True))
        self.assertEqual(Literal(True), Literal(True))

    def test_display(self):
        expected = ("Application(expr='(λx: Natural. x) 0', nodes=[\n"
                    "    Abstraction(expr='λx: Natural. x', nodes=[\n"
                    "        Identifier(expr='x')\n"
                    "    ]),\n"
                    "    Literal(expr='0')\n"
                    "])")
        self.assertEqual(expected, parse("(λx: Nat. x) 0").display())


if __name__ == '__main__':
    unittest.main()
