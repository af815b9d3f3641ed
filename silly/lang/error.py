"""Error handling for the SILLY language. Only SillyExceptions should be encountered while running a program: if
another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Two categories exist. Syntax errors are raised while parsing, runtime errors while executing. A return signal that
escapes every function call is not an exception at all (see runtime.Returning); the session converts it into a
ReturnOutsideFunction error once it reaches the top level.
"""

import sys

from termcolor import colored


class SillyException(Exception):
    """Templates an error message so that it can be used to throw a SILLY error. Each "{}" slot in msg is filled with
    the matching snippet in exprs, highlighted in bold.
    """
    label = "error"
    fatal = True

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0] if exprs else ""  # exprs[0] should be the offending expr that caused the error
        self.internal = internal
        super().__init__(self.msg)


class SillySyntaxError(SillyException):
    """Malformed keyword/delimiter sequence or a token of the wrong category."""
    label = "syntax error"


class UnexpectedEndOfInput(SillySyntaxError):
    """Token stream ran out in the middle of a construct."""

    def __init__(self):
        super().__init__("unexpected end of input")


class SillyRuntimeError(SillyException):
    """Raised while executing statements or evaluating expressions. Never fatal: the session reports it and moves on
    to the next top-level statement.
    """
    label = "runtime error"
    fatal = False


class ReturnOutsideFunction(SillyRuntimeError):

    def __init__(self, stmt):
        super().__init__("return statement outside of function: '{}'", stmt)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report custom SILLY errors."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = None

    def register_line(self, path, line_num):
        """Registers line number in traceback given path. Should be called before a statement is parsed."""
        self.traceback[path] = line_num

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a statement ran without error."""
        self.traceback[path] = None

    def throw(self, error):
        """Prints error using self.traceback, which maps file: line_num of the statement that raised it. Exits the
        process if both this handler and the error are fatal.
        """
        error_msg = ""
        for file, line_num in self.traceback.items():  # assumes dict is insertion-ordered
            if line_num is not None:
                error_msg += f"  File '{file}', line {line_num}:\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.label}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if self.fatal and error.fatal:
            sys.exit(1)
        for file in self.traceback:
            self.remove_line(file)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(SillyException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(SillyRuntimeError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, SillyException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(SillyException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
