"""Lexical environments: a stack of scopes, each mapping names to values. The checker binds names to types, the
evaluator binds names to runtime values. Each checker/evaluator run builds its own Environment and passes it down
explicitly; an Environment is never shared between the two.
"""

from contextlib import contextmanager

from stlc.lang.error import StlcException, UnboundIdentifier


class Scope:
    """A single frame of bindings. Last write wins."""

    def __init__(self, bindings=None):
        self.map = dict(bindings) if bindings else {}

    def add(self, key, val):
        self.map[key] = val

    def get(self, key):
        """Raises KeyError if key is not bound in this scope."""
        return self.map[key]

    def __contains__(self, key):
        return key in self.map

    def __repr__(self):
        return f"Scope({self.map!r})"


class Environment:
    """Stack of Scopes. Lookup goes from the innermost (most recently pushed) scope outwards."""

    def __init__(self, scopes=None):
        self.scopes = list(scopes) if scopes else []

    def push_scope(self, scope):
        self.scopes.append(scope)

    def pop_scope(self):
        if not self.scopes:
            raise StlcException("cannot pop scope of an empty environment", internal=True)
        return self.scopes.pop()

    @staticmethod
    def bind(scope, name, value):
        scope.add(name, value)

    def lookup(self, name):
        for scope in reversed(self.scopes):
            if name in scope:
                return scope.get(name)
        raise UnboundIdentifier(name)

    @contextmanager
    def scope(self, bindings=None):
        """Pushes a new Scope holding bindings for the duration of the with block. The scope is popped however the
        block is left, so bindings never leak past the binder that introduced them.
        """
        new_scope = Scope()
        for name, value in (bindings or {}).items():
            Environment.bind(new_scope, name, value)

        self.push_scope(new_scope)
        try:
            yield new_scope
        finally:
            self.pop_scope()

    def snapshot(self):
        """Returns a new Environment over the current scopes. Pushing to/popping from the snapshot does not affect
        self, which is what closures need to keep the scopes active at their creation.
        """
        return Environment(self.scopes)

    def __len__(self):
        return len(self.scopes)

    def __repr__(self):
        return f"Environment({self.scopes!r})"
