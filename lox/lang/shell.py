"""Handles interactive/command-line mode for the lox interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Lox interpreter shell."""
    intro = "Lox interpreter :: Python backend\nType 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations (unclosed blocks, strings and comments)
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations
    COMMANDS = ("exit", "help", "EOF")  # only recognized as a whole line

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def parseline(self, line):
        """Routes everything but a bare command to default, so that lox code such as 'exit = 2;' is never taken for
        a command.
        """
        command, arg, stripped = super().parseline(line)
        if command in Shell.COMMANDS and not arg:
            return command, arg, stripped
        return None, None, line

    def default(self, line):
        """Executes arbitrary lox code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.run(line)

                while self.sess.results:
                    print(self.sess.pop(), file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lox interpreter!\n\n"
              "Statements end with ';'. Declare variables with 'var', show values with 'print'\n"
              "and open a new scope with '{ ... }'. Declarations are kept from one line to the\n"
              "next. Try 'var greeting = \"hi\";' followed by 'print greeting + \" mom!\";'.\n"
              "Entering a bare expression such as '1 + 2;' shows its value.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
