import unittest

from stlc.lang.error import UnknownTerm
from stlc.lang.lexical import parse
from stlc.pure.codegen import generate
from stlc.pure.terms import Application, Identifier


class GenerateTestCase(unittest.TestCase):

    def test_generate(self):
        cases = {
            "0": "0",
            "true": "true",
            "false": "false",
            "x": "x",
            "succ 0": "0 + 1",
            "succ succ 0": "0 + 1 + 1",
            "pred 0": "Math.max(0 - 1, 0)",
            "iszero 0": "0 === 0",
            "iszero (succ x)": "x + 1 === 0",
            "if iszero 0 then 1 else 0": "0 === 0 ? 1 : 0",
            "λx: Nat. succ x": "(x => { return x + 1; })",
            "(λx: Nat. x) 0": "(x => { return x; })(0)",
            "f x y": "f(x)(y)",
            "f (g x)": "f(g(x))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, generate(parse(case)), case)

    def test_parentheses(self):
        cases = {
            "succ (if true then 0 else 1)": "(true ? 0 : 1) + 1",
            "pred (if true then 0 else 1)": "Math.max((true ? 0 : 1) - 1, 0)",
            "iszero (if true then 0 else 1)": "(true ? 0 : 1) === 0",
            "if (if true then false else true) then 0 else 1": "(true ? false : true) ? 0 : 1",
            "(if true then f else g) 0": "(true ? f : g)(0)",
            "f (if true then 0 else 1)": "f(true ? 0 : 1)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, generate(parse(case)), case)

    def test_empty(self):
        self.assertEqual("", generate(None))
        self.assertEqual("f()", generate(Application(Identifier("f"), None)))

    def test_unknown_term(self):
        should_raise = [object(), "x", Application(Identifier("f"), object())]
        for case in should_raise:
            self.assertRaises(UnknownTerm, generate, case)


if __name__ == '__main__':
    unittest.main()
