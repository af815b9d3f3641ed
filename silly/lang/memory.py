"""Memory space for the SILLY interpreter: a stack of scope frames plus a flat function registry.

Lookups start at the top of the stack and follow each frame's parent link, not the physical stack. Nested frames
link to the frame below them, so blocks see every enclosing block up to the nearest function-root frame. Function-root
frames have no parent, so a function body sees only its own parameters and locals: neither the caller's variables
nor the global frame are reachable from it.
"""

import logging
from contextlib import contextmanager

from silly.lang.error import SillyRuntimeError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class ScopeFrame:
    """Mapping from variable name to value (None if only declared) plus one parent frame for fallback lookup."""

    def __init__(self, parent=None):
        self.bindings = {}
        self.parent = parent

    def declared_in_scope(self, name):
        """Whether or not name is declared in this frame, ignoring parents."""
        return name in self.bindings

    def __repr__(self):
        return f"ScopeFrame({self.bindings}, root={self.parent is None})"


class MemorySpace:
    """Scope stack with a global function-root frame always at the bottom, and the function registry. Names may be
    given as strings or Tokens.
    """

    def __init__(self):
        self.stack = [ScopeFrame()]
        self.functions = {}  # dict of name: FunctionDecl, never scoped

    @property
    def depth(self):
        return len(self.stack)

    def begin_nested_scope(self):
        self.stack.append(ScopeFrame(self.stack[-1]))
        logger.debug("pushed nested scope (depth %d)", self.depth)

    def begin_function_scope(self):
        self.stack.append(ScopeFrame())
        logger.debug("pushed function scope (depth %d)", self.depth)

    def end_current_scope(self):
        if len(self.stack) == 1:
            raise SillyRuntimeError("cannot end the global scope", internal=True)
        self.stack.pop()
        logger.debug("popped scope (depth %d)", self.depth)

    @contextmanager
    def scope(self, function=False):
        """Begins a nested (or function-root) scope and ends it however the body exits."""
        if function:
            self.begin_function_scope()
        else:
            self.begin_nested_scope()
        try:
            yield self.stack[-1]
        finally:
            self.end_current_scope()

    def declare(self, name):
        """Binds name with no value in the top frame."""
        self.stack[-1].bindings[str(name)] = None

    def is_declared(self, name):
        return self._find_frame(name) is not None

    def store(self, name, value):
        """Overwrites the binding of name in the nearest frame that declares it."""
        self._require_frame(name).bindings[str(name)] = value

    def lookup(self, name):
        """Returns the value bound to name in the nearest frame that declares it (None if declared only)."""
        return self._require_frame(name).bindings[str(name)]

    def register_function(self, decl):
        self.functions[str(decl.name)] = decl
        logger.debug("registered function %s/%d", decl.name, len(decl.params))

    def lookup_function(self, name):
        """Returns the FunctionDecl registered under name, or None."""
        return self.functions.get(str(name))

    def is_function_declared(self, name):
        return str(name) in self.functions

    def _find_frame(self, name):
        frame = self.stack[-1]
        while frame is not None and not frame.declared_in_scope(str(name)):
            frame = frame.parent
        return frame

    def _require_frame(self, name):
        frame = self._find_frame(name)
        if frame is None:
            raise SillyRuntimeError("variable {} is undeclared", name)
        return frame
