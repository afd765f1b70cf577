"""Error handling for the stlc language. Only StlcExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Type errors are not exceptions while checking: the checker accumulates them as plain diagnostic strings. Only once
checking is finished does the session wrap a non-empty diagnostics list in a TypeErrors exception, so that nothing is
ever evaluated or compiled past an ill-typed program.
"""

import sys

from termcolor import colored


class StlcException(Exception):
    """Templates an error message so that it can be used to throw a stlc error. msg is a format string whose fields are
    filled in with exprs; exprs[0] should be the offending expr that caused the error.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, line_num=None, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if not isinstance(exprs, (list, tuple)):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.template = msg
        self.exprs = exprs
        self.msg = msg.format(*exprs)
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.line_num = line_num
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    def colored_msg(self):
        """Returns self.msg with expr snippets bolded."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))


class StlcSyntaxError(StlcException):
    """Raised by the parser. expr is the offending source line and start/end the offending span within it."""


class TypeErrors(StlcException):
    """Raised by a session when type checking produced diagnostics. Holds every diagnostic, in order."""

    def __init__(self, diagnostics):
        self.diagnostics = list(diagnostics)
        super().__init__("{}", "\n".join(self.diagnostics), diagnosis=False)


class UnboundIdentifier(StlcException):
    """Raised by an Environment lookup that found no binding."""

    def __init__(self, name):
        self.name = name
        super().__init__("unbound identifier '{}'", name, diagnosis=False)


class EvaluationError(StlcException):
    """Fatal runtime failure in the evaluator. Checked programs should never raise this."""

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, diagnosis=False, internal=True)


class UnknownTerm(StlcException):
    """An engine was handed something that is not one of the AST variants."""

    def __init__(self, term, engine):
        super().__init__("{} cannot handle unknown AST node '{}'", (engine, type(term).__name__),
                         diagnosis=False, internal=True)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom stlc errors."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.path = None

    def register_file(self, path):
        """Registers path of the file being run, used as header of positioned errors."""
        self.path = path

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def format(self, error):
        """Returns the full, colored error message for error (without the diagnosis)."""
        header = ""
        if error.line_num is not None and self.path is not None:
            header = colored(f"{self.path}:{error.line_num}:{error.start + 1}: ", attrs=["bold"])

        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        if isinstance(error, TypeErrors):
            label = colored("error: ", ErrorHandler.ERROR, attrs=["bold"])
            return error_msg + "\n".join(header + label + diagnostic for diagnostic in error.diagnostics)

        return error_msg + header + colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.colored_msg()

    def throw(self, error):
        """Prints error, a StlcException, and its diagnosis. Exits if self.fatal."""
        print(self.format(error))

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(StlcException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(StlcException("term is nested too deeply: maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, StlcException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(StlcException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
