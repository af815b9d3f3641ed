"""Session control for the SILLY language. Feeds statements to an Interpreter either from a file (parse one, run
one) or from the command line (parse a whole entry, then run it), and reports errors through an ErrorHandler.
"""

from silly.lang.error import ReturnOutsideFunction, SillyException
from silly.lang.lexical import parse_statement
from silly.lang.runtime import Interpreter
from silly.lang.tokens import TokenStream


class Session:
    """Governs a SILLY session: one Interpreter whose variables and functions persist across statements."""
    SH_FILE = "<in>"  # command-line interpreter filename
    PROMPT = ">>> "

    def __init__(self, error_handler, path=SH_FILE, echo=True, write=print):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path    # used for error messages
        self.echo = echo    # whether or not to print each statement read from a file before running it
        self.write = write
        self.interpreter = Interpreter(write)

        self.to_exec = []   # statements parsed by add, waiting for run

        if path == Session.SH_FILE:
            self.error_handler.fatal = False

    def execute(self, stmt):
        """Executes one top-level statement. A return signal that reaches this level has no call to return to."""
        if self.interpreter.execute(stmt) is not None:
            raise ReturnOutsideFunction(stmt)

    def run_stream(self, tokens):
        """Runs every statement in tokens, one at a time. A runtime error is reported and the next statement runs; a
        syntax error propagates, since the stream position after it is meaningless.
        """
        while tokens.has_next():
            tokens.lookahead()
            self.error_handler.register_line(self.path, tokens.line_num)
            stmt = parse_statement(tokens)
            if self.echo:
                self.write(Session.PROMPT + str(stmt))

            with self.error_handler:
                self.execute(stmt)
                self.error_handler.remove_line(self.path)  # error was not raised

    def run_file(self, path=None):
        """Opens path (self.path by default) and runs it."""
        path = path if path is not None else self.path
        try:
            with open(path, "r", encoding="utf-8") as file:
                self.run_stream(TokenStream(file))
        except OSError:
            raise SillyException("'{}' could not be opened", path)
        except UnicodeDecodeError:  # lines are decoded lazily, so this can surface mid-run
            raise SillyException("'{}' is not valid UTF-8 text", path)

    def add(self, text):
        """Parses every statement in text and queues them for run. Nothing is queued if text does not parse; an
        UnexpectedEndOfInput means text stops in the middle of a statement.
        """
        tokens = TokenStream(text)
        parsed = []
        while tokens.has_next():
            parsed.append(parse_statement(tokens))
        self.to_exec.extend(parsed)

    def run(self):
        """Runs and clears the queued statements, reporting each runtime error and moving on to the next one."""
        to_exec, self.to_exec = self.to_exec, []
        for stmt in to_exec:
            with self.error_handler:
                self.execute(stmt)
