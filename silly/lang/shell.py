"""Handles interactive/command-line mode for the SILLY interpreter. Uses cmd as backend."""

import cmd

from silly.lang.error import UnexpectedEndOfInput


class Shell(cmd.Cmd):
    """SILLY interpreter shell."""
    intro = "SILLY interpreter :: Python backend\nType 'help' for more information, 'exit' to leave."
    prompt = ">>> "
    secondary_prompt = "... "  # used for line continuations
    _tmp_prompt = ">>> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary SILLY statements. Lines are collected until they form complete statements."""
        text = self._tmp_line + line + "\n"
        self._tmp_line = ""
        self.prompt = self._tmp_prompt

        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            try:
                self.sess.add(text)
            except UnexpectedEndOfInput:
                self._tmp_line = text
                self.prompt = self.secondary_prompt
                return

            self.sess.run()

    def onecmd(self, line):
        """Shell commands only apply to a fresh line; inside a continuation everything is SILLY source."""
        if self._tmp_line:
            return self.default(line)
        return super().onecmd(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            return self.default("help " + arg)
        print("Welcome to the SILLY interpreter!\n\n"
              "Statements are executed as soon as they are complete. Blocks may span several \n"
              "lines: the '... ' prompt means the interpreter is waiting for the rest. \n\n"
              "Try 'x = (+ 1 2)' followed by 'print x', or declare a function with \n"
              "'func add(a b) { return (+ a b) }' and call it as '(add 2 3)'.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return True

    def do_exit(self, arg):
        """Exits interpreter. With an argument (as in 'exit = 3') the line is SILLY source instead."""
        if arg:
            return self.default("exit " + arg)
        return True
