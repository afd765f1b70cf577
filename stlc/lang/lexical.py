"""Lexical analysis and parsing of stlc source text into terms (see pure/terms.py).

All grammar can be loosely defined as follows:

```
<term>  ::= ("λ" | "\\") <name> ":" <type> "." <term>   ; body extends as far right as possible
          | "if" <term> "then" <term> "else" <term>     ; so does the else branch
          | <app>
<app>   ::= <unary> <arg>*                             ; associating by left: f x y = ((f x) y)
<arg>   ::= <unary> | "()"                             ; "()" is a call without argument
          | ("λ" | "if") ...                           ; a trailing abstraction/condition needs no parentheses
<unary> ::= ("succ" | "pred" | "iszero") <unary> | <atom>
<atom>  ::= <natural> | "true" | "false" | <name> | "(" <term> ")"

<type>  ::= <prim> [("->" | "→") <type>]               ; associating by right: A -> B -> C = A -> (B -> C)
<prim>  ::= "Nat" | "Natural" | "Bool" | "Boolean" | "(" <type> ")"

<comment> ::= ";;" <char>*                             ; until end of line
```
"""

import re
from dataclasses import dataclass

from stlc.lang.error import StlcSyntaxError
from stlc.pure.terms import Abstraction, Application, Arithmetic, Condition, Identifier, IsZero, Literal, Operator
from stlc.pure.types import Arrow, BOOLEAN, NATURAL


TOKEN_RE = re.compile(r"""
    (?P<comment>;;[^\n]*)
  | (?P<space>\s+)
  | (?P<arrow>->|→)
  | (?P<lambda>λ|\\)
  | (?P<natural>[0-9]+)
  | (?P<name>[A-Za-z_][A-Za-z0-9_']*)
  | (?P<punct>[.:()])
""", re.VERBOSE)

KEYWORDS = {"if", "then", "else", "true", "false", "succ", "pred", "iszero"}
TYPES = {"Nat": NATURAL, "Natural": NATURAL, "Bool": BOOLEAN, "Boolean": BOOLEAN}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int

    def __repr__(self):
        return f"Token({self.kind}, '{self.text}')"


def tokenize(source):
    """Splits source into Tokens, dropping whitespace and comments. The last token is always an 'eof' token."""
    tokens = []
    pos = 0
    while pos < len(source):
        match = TOKEN_RE.match(source, pos)
        if match is None:
            raise _error(source, pos, 1, "unexpected character '{1}'", source[pos])

        kind = match.lastgroup
        if kind == "name" and match.group() in KEYWORDS:
            kind = "keyword"
        if kind not in ("comment", "space"):
            tokens.append(Token(kind, match.group(), pos))
        pos = match.end()

    tokens.append(Token("eof", "", len(source)))
    return tokens


def _error(source, pos, length, msg, *exprs):
    """Builds StlcSyntaxError pointing at source[pos:pos + length]. msg's first field is the offending line."""
    line_start = source.rfind("\n", 0, pos) + 1
    line_end = source.find("\n", pos)
    if line_end == -1:
        line_end = len(source)

    line = source[line_start:line_end]
    start = pos - line_start
    line_num = source.count("\n", 0, pos) + 1
    return StlcSyntaxError(msg, (line, *exprs), start=start, end=start + max(length, 1), line_num=line_num)


class Parser:
    """Recursive descent parser over the token list of a single program."""

    def __init__(self, source):
        self.source = source
        self.tokens = tokenize(source)
        self.idx = 0

    def parse(self):
        """Parses the whole source as a single term. An empty program parses to None."""
        if self.peek().kind == "eof":
            return None

        term = self.term()
        self.expect("eof", what="end of program")
        return term

    def parse_type(self):
        """Parses the whole source as a single type."""
        parsed = self.type()
        self.expect("eof", what="end of type")
        return parsed

    def peek(self, offset=0):
        return self.tokens[min(self.idx + offset, len(self.tokens) - 1)]

    def advance(self):
        token = self.peek()
        self.idx += 1
        return token

    def at(self, text, offset=0):
        token = self.peek(offset)
        return token.kind != "eof" and token.text == text

    def error(self, token, msg="unexpected '{1}'"):
        text = token.text if token.kind != "eof" else "end of program"
        return _error(self.source, token.pos, len(token.text), msg, text)

    def expect(self, kind=None, text=None, what=None):
        """Consumes and returns next token if it matches kind/text, else raises StlcSyntaxError."""
        token = self.peek()
        if (kind is None or token.kind == kind) and (text is None or token.text == text):
            return self.advance()

        found = token.text if token.kind != "eof" else "end of program"
        raise _error(self.source, token.pos, len(token.text), "expected {1}, found '{2}'", what or repr(text), found)

    def term(self):
        if self.peek().kind == "lambda":
            return self.abstraction()
        elif self.at("if"):
            return self.condition()
        return self.application()

    def abstraction(self):
        self.expect("lambda", what="'λ'")
        name = self.expect("name", what="argument name").text
        self.expect("punct", ":", what="':' before argument type")
        arg_type = self.type()
        self.expect("punct", ".", what="'.' before function body")
        return Abstraction(name, arg_type, self.term())

    def condition(self):
        self.expect("keyword", "if")
        condition = self.term()
        self.expect("keyword", "then")
        then = self.term()
        self.expect("keyword", "else")
        return Condition(condition, then, self.term())

    def application(self):
        term = self.unary()
        while True:
            if self.at("(") and self.at(")", 1):
                self.idx += 2
                term = Application(term, None)
            elif self.peek().kind == "lambda" or self.at("if"):
                return Application(term, self.term())
            elif self.starts_unary():
                term = Application(term, self.unary())
            else:
                return term

    def starts_unary(self):
        token = self.peek()
        if token.kind in ("natural", "name"):
            return True
        elif token.kind == "keyword":
            return token.text in ("true", "false", "succ", "pred", "iszero")
        return token.text == "("

    def unary(self):
        token = self.peek()
        if token.text == "iszero" and token.kind == "keyword":
            self.advance()
            return IsZero(self.unary())
        elif token.text in ("succ", "pred") and token.kind == "keyword":
            self.advance()
            return Arithmetic(Operator(token.text), self.unary())
        return self.atom()

    def atom(self):
        token = self.advance()
        if token.kind == "natural":
            return Literal(int(token.text))
        elif token.kind == "keyword" and token.text in ("true", "false"):
            return Literal(token.text == "true")
        elif token.kind == "name":
            return Identifier(token.text)
        elif token.text == "(" and token.kind == "punct":
            term = self.term()
            self.expect("punct", ")", what="')'")
            return term
        raise self.error(token)

    def type(self):
        left = self.prim()
        if self.peek().kind == "arrow":
            self.advance()
            return Arrow(left, self.type())
        return left

    def prim(self):
        token = self.advance()
        if token.kind == "name" and token.text in TYPES:
            return TYPES[token.text]
        elif token.text == "(" and token.kind == "punct":
            parsed = self.type()
            self.expect("punct", ")", what="')'")
            return parsed
        raise self.error(token, "'{1}' is not a type")


def parse(source):
    """Returns term of source, None for an empty program."""
    return Parser(source).parse()


def parse_type(source):
    return Parser(source).parse_type()
