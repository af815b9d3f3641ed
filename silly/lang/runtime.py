"""Execution of SILLY syntax trees. An Interpreter is the whole runtime context: the memory space (scope stack and
function registry) and the writer used by print statements. It is passed explicitly instead of living in globals,
so several programs can run side by side in one process.

Statements execute for effect. execute returns None once a statement has completed, or a Returning record while a
return statement is unwinding towards the function call that will consume its value. Every construct that owns a
scope releases it on the way out, whether it completed, returned, or raised.
"""

import logging
import math
import operator

from silly.lang.error import SillyRuntimeError
from silly.lang.lexical import (Assignment, CallExpr, Compound, FunctionDecl, If, ListExpr, Print, Repeat, Return,
                                SimpleExpr, While)
from silly.lang.memory import MemorySpace
from silly.lang.tokens import Category
from silly.lang.values import (SEQUENCE_KINDS, BooleanValue, CharValue, Kind, ListValue, NumberValue,
                               StringValue)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class Returning:
    """Result of a statement that executed return: carries the value back to the call site."""

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"Returning({self.value!r})"


def divide(dividend, divisor):
    """IEEE division: dividing by zero gives an infinity or NaN instead of raising."""
    if divisor == 0:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        return math.copysign(math.inf, dividend) * math.copysign(1, divisor)
    return dividend / divisor


class Interpreter:
    MATH_OPS = {"+": operator.add, "*": operator.mul, "/": divide}
    COMPARISONS = {
        "==": operator.eq,
        "!=": operator.ne,
        "<": operator.lt,
        ">": operator.gt,
        "<=": operator.le,
        ">=": operator.ge,
    }

    def __init__(self, write=print):
        self.memory = MemorySpace()
        self.write = write  # called with one rendered line per print statement

    # --------------------------------------------- statements ---------------------------------------------

    def execute(self, stmt):
        """Executes stmt. Returns a Returning if a return statement is unwinding through it, otherwise None."""
        if isinstance(stmt, Assignment):
            return self._assign(stmt)
        elif isinstance(stmt, Compound):
            return self._execute_compound(stmt)
        elif isinstance(stmt, If):
            if self._condition(stmt.condition, "if statement"):
                return self.execute(stmt.then_block)
            return self.execute(stmt.else_block)
        elif isinstance(stmt, While):
            return self._execute_while(stmt)
        elif isinstance(stmt, Repeat):
            return self._execute_repeat(stmt)
        elif isinstance(stmt, FunctionDecl):
            return self._declare_function(stmt)
        elif isinstance(stmt, Return):
            return Returning(self.evaluate(stmt.value))
        elif isinstance(stmt, Print):
            self.write(str(self.evaluate(stmt.value)))
            return None
        raise SillyRuntimeError("unknown statement '{}'", repr(stmt), internal=True)

    def _assign(self, stmt):
        if self.memory.is_function_declared(stmt.target):
            raise SillyRuntimeError("cannot assign to {}: name exists as function", stmt.target)
        if not self.memory.is_declared(stmt.target):
            self.memory.declare(stmt.target)
        self.memory.store(stmt.target, self.evaluate(stmt.value))

    def _execute_compound(self, stmt):
        with self.memory.scope():
            for member in stmt.statements:
                result = self.execute(member)
                if result is not None:
                    return result
        return None

    def _execute_while(self, stmt):
        while self._condition(stmt.condition, "while loop"):
            result = self.execute(stmt.body)
            if result is not None:
                return result
        return None

    def _execute_repeat(self, stmt):
        count = self.evaluate(stmt.count)
        if count.kind is not Kind.NUMBER:
            raise SillyRuntimeError("repeat statement requires a number, got {}", count)
        elif not count.is_integer:
            raise SillyRuntimeError("repeat statement requires an integer, got {}", count)
        elif count.number < 0:
            raise SillyRuntimeError("repeat statement requires a non-negative number, got {}", count)

        for __ in range(int(count.number)):
            result = self.execute(stmt.body)
            if result is not None:
                return result
        return None

    def _declare_function(self, stmt):
        if self.memory.is_declared(stmt.name):
            raise SillyRuntimeError("cannot declare function {}: name exists as variable", stmt.name)
        elif self.memory.is_function_declared(stmt.name):
            raise SillyRuntimeError("function {} already declared", stmt.name)

        self.memory.register_function(stmt)
        self.memory.declare(stmt.name)
        self.memory.store(stmt.name, BooleanValue(True))  # lets a variable lookup on the name succeed

    def _condition(self, expr, construct):
        value = self.evaluate(expr)
        if value.kind is not Kind.BOOLEAN:
            raise SillyRuntimeError("{} requires a Boolean condition, got {}", (construct, value))
        return value.flag

    # --------------------------------------------- expressions --------------------------------------------

    def evaluate(self, expr):
        """Evaluates expr to a DataValue."""
        if isinstance(expr, SimpleExpr):
            return self._evaluate_simple(expr.token)
        elif isinstance(expr, ListExpr):
            return ListValue(tuple(self.evaluate(item) for item in expr.items))
        elif isinstance(expr, CallExpr):
            category = expr.head.category
            if category is Category.MATH_FUNC:
                return self._evaluate_math(expr)
            elif category is Category.BOOL_FUNC:
                return self._evaluate_boolean(expr)
            elif category is Category.SEQ_FUNC:
                return self._evaluate_sequence(expr)
            elif category is Category.IDENTIFIER:
                return self._evaluate_call(expr)
        raise SillyRuntimeError("unknown expression format '{}'", repr(expr), internal=True)

    def _evaluate_simple(self, token):
        category = token.category
        if category is Category.IDENTIFIER:
            if not self.memory.is_declared(token):
                raise SillyRuntimeError("variable {} is undeclared", token)
            value = self.memory.lookup(token)
            if value is None:
                raise SillyRuntimeError("variable {} has no value", token)
            return value
        elif category is Category.NUM_LITERAL:
            return NumberValue(float(token.spelling))
        elif category is Category.BOOL_LITERAL:
            return BooleanValue(token.spelling == "true")
        elif category is Category.CHAR_LITERAL:
            return CharValue(token.spelling[1])
        elif category is Category.STR_LITERAL:
            return StringValue.of(token.spelling[1:-1])
        raise SillyRuntimeError("unknown expression format '{}'", token, internal=True)

    def _evaluate_math(self, expr):
        if len(expr.args) < 2:
            raise SillyRuntimeError("incorrect arity in math expression '{}'", expr)

        apply = Interpreter.MATH_OPS[expr.head.spelling]
        result = self._number(expr.args[0], expr)
        for arg in expr.args[1:]:
            result = apply(result, self._number(arg, expr))
        return NumberValue(result)

    def _number(self, arg, expr):
        value = self.evaluate(arg)
        if value.kind is not Kind.NUMBER:
            raise SillyRuntimeError("Number value expected in '{}', got {}", (expr, value))
        return value.number

    def _boolean(self, arg, expr):
        value = self.evaluate(arg)
        if value.kind is not Kind.BOOLEAN:
            raise SillyRuntimeError("Boolean value expected in '{}', got {}", (expr, value))
        return value.flag

    def _evaluate_boolean(self, expr):
        op = expr.head.spelling
        if op == "not":
            if len(expr.args) != 1:
                raise SillyRuntimeError("the not operator requires one expression: '{}'", expr)
            return BooleanValue(not self._boolean(expr.args[0], expr))

        elif op in ("and", "or"):
            if len(expr.args) < 2:
                raise SillyRuntimeError("{} requires at least two expressions: '{}'", (op, expr))
            stop_on = op == "or"  # and stops at the first false, or at the first true
            for arg in expr.args:
                if self._boolean(arg, expr) == stop_on:
                    return BooleanValue(stop_on)
            return BooleanValue(not stop_on)

        if not expr.args:
            raise SillyRuntimeError("incorrect arity in comparison expression '{}'", expr)
        relation = Interpreter.COMPARISONS[op]
        previous = self.evaluate(expr.args[0])
        for arg in expr.args[1:]:
            current = self.evaluate(arg)
            if not relation(previous.compare_to(current), 0):
                return BooleanValue(False)
            previous = current
        return BooleanValue(True)

    def _evaluate_sequence(self, expr):
        op = expr.head.spelling
        arity = {"len": 1, "get": 2, "str": 1}
        if op in arity and len(expr.args) != arity[op]:
            raise SillyRuntimeError("incorrect arity in {} expression '{}'", (op, expr))
        elif op == "cat" and len(expr.args) < 2:
            raise SillyRuntimeError("incorrect arity in cat expression '{}'", expr)

        if op == "str":
            return StringValue.of(str(self.evaluate(expr.args[0])))

        first = self._sequence(expr.args[0], expr)
        if op == "len":
            return NumberValue(len(first.elements))

        elif op == "get":
            index = self.evaluate(expr.args[1])
            if index.kind is not Kind.NUMBER:
                raise SillyRuntimeError("Number expected as index in '{}', got {}", (expr, index))
            elif not index.is_integer:
                raise SillyRuntimeError("index must be an integer, got {}", index)
            elif not 0 <= index.number < len(first.elements):
                raise SillyRuntimeError("index {} out of bounds for {}", (index, first))
            return first.elements[int(index.number)]

        elements = list(first.elements)
        for arg in expr.args[1:]:
            value = self._sequence(arg, expr)
            if value.kind is not first.kind:
                raise SillyRuntimeError("type mismatch in cat expression: expected {}, got {}",
                                        (first.kind.value, value))
            elements.extend(value.elements)
        return type(first)(tuple(elements))

    def _sequence(self, arg, expr):
        value = self.evaluate(arg)
        if value.kind not in SEQUENCE_KINDS:
            raise SillyRuntimeError("List or String value expected in '{}', got {}", (expr, value))
        return value

    def _evaluate_call(self, expr):
        name = expr.head
        decl = self.memory.lookup_function(name)
        if decl is None:
            raise SillyRuntimeError("function {} is not declared", name)
        elif len(decl.params) != len(expr.args):
            raise SillyRuntimeError("function {} expects {} parameters, got {}",
                                    (name, len(decl.params), len(expr.args)))

        # arguments see the caller's scope, the body will not
        return self.call(decl, [self.evaluate(arg) for arg in expr.args])

    def call(self, decl, args):
        """Runs the body of decl in a fresh function-root scope holding only its parameters, bound to args. Returns
        the returned value, or true if the body finished without a return statement.
        """
        logger.debug("calling %s with %d arguments", decl.name, len(args))
        with self.memory.scope(function=True):
            for param, value in zip(decl.params, args):
                self.memory.declare(param)
                self.memory.store(param, value)
            result = self.execute(decl.body)
        logger.debug("returned from %s", decl.name)

        if result is None:
            return BooleanValue(True)
        return result.value
