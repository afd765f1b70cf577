"""Session control for stlc. Reads a single program from a file, parses it, type checks it and then either evaluates
or compiles it. Nothing is ever evaluated or compiled before type checking succeeded.
"""

from stlc.lang.error import StlcException, TypeErrors
from stlc.lang.lexical import parse
from stlc.pure.check import check
from stlc.pure.codegen import generate
from stlc.pure.evaluate import evaluate, render


class Session:
    """Governs a stlc session over a single source file."""

    def __init__(self, error_handler, path, source=None):
        """Reads path unless source is given. path is then only used for error messages."""
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path

        if source is None:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    source = file.read()
            except OSError:
                raise StlcException("'{}' could not be opened", path, diagnosis=False)

        self.source = source
        self.term = parse(source)
        self._type = None
        self._checked = False

    def check(self):
        """Type checks this session's term. Raises TypeErrors if there are any diagnostics, else returns the type."""
        if not self._checked:
            result = check(self.term)
            if result.diagnostics:
                raise TypeErrors(result.diagnostics)

            self._type = result.type
            self._checked = True
        return self._type

    def evaluate(self):
        """Evaluates this session's term and returns its value as stlc source. Type checks first."""
        self.check()
        return render(evaluate(self.term))

    def compile(self):
        """Returns JavaScript for this session's term. Type checks first."""
        self.check()
        return generate(self.term)

    def display(self):
        """Returns this session's term as a tree."""
        if self.term is None:
            return ""
        return self.term.display()
