"""Interactive prompt for the Lox interpreter. Uses cmd as backend."""

import cmd
from typing import Callable, Optional


class Shell(cmd.Cmd):
    """Lox prompt. Every input line is handed to ``run_line`` as Lox source."""
    prompt = "> "

    def __init__(self, run_line: Callable[[str], None], *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.run_line = run_line

    def read_line(self) -> Optional[str]:
        """Next input line, or None once input is exhausted."""
        if self.cmdqueue:
            return self.cmdqueue.pop(0)
        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return None
        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        return line.rstrip('\r\n') if line else None

    def cmdloop(self, intro=None):
        # cmd reports end of input as the line "EOF", which is also valid Lox
        # source, so the loop tells the two apart itself.
        self.preloop()
        if intro is not None:
            self.stdout.write(f"{intro}\n")
        stop = False
        while not stop:
            line = self.read_line()
            stop = self.do_EOF('') if line is None else self.onecmd(line)
        self.postloop()

    def onecmd(self, line):
        # Lox source is not a shell command: skip cmd's "do_<word>" dispatch,
        # so a line such as "print x;" is never mistaken for a command.
        if not line.strip():
            return self.emptyline()
        return self.default(line)

    def default(self, line):
        """Runs one line of Lox source."""
        self.run_line(line)

    def emptyline(self):
        """Do not repeat previous line on empty input."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return True
