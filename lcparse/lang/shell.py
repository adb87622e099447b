"""Handles interactive/command-line mode for lcparse. Uses cmd as backend.

Every line is a λ-term unless it is exactly one of the shell keywords: "exit x" and "help f" are applications, while
"exit" on its own ends the session.
"""

import cmd


class Shell(cmd.Cmd):
    """Lambda calculus parser shell."""
    intro = "Welcome to the lambda calculus REPL!\nType `exit` or `quit` to exit, '?' or 'help' for more information."
    prompt = "> "
    continuation_prompt = ". "  # shown while "(" is still open
    KEYWORDS = {"exit", "quit", "help", "?", "EOF"}  # EOF is sent by cmdloop at end of input

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.pending = ""  # text of an unfinished multi-line term
        self.line_num = 0

    def onecmd(self, line):
        """Dispatches whole-line keywords to do_* methods and everything else to default."""
        stripped = line.strip()
        if stripped in Shell.KEYWORDS:
            return super().onecmd(stripped)
        elif not stripped:
            return self.emptyline()
        return self.default(line)

    def default(self, line):
        """Parses a line (joined to any unfinished term) and prints the result."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            expr, is_open = self.sess.preprocess_line(f"{self.pending} {line}", self.line_num, bool(self.pending))

            if is_open:
                self.pending = expr
                self.prompt = self.continuation_prompt
                return

            self.pending = ""
            self.prompt = Shell.prompt
            if not expr:
                return  # only a comment

            self.sess.add(expr, self.line_num)
            print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to lcparse!\n\n"
              "Type a lambda calculus expression to see its syntax tree. Abstractions are written \n"
              "'λx.M', with a body that extends as far right as possible, and applications \n"
              "associate to the left, so 'f x y' is '(f x) y'. Variable names start with a letter \n"
              "and may continue with letters, digits, or '_'.\n\n"
              "Try it out by typing 'λx.x y'. This will print a lambda whose body is the \n"
              "application of 'x' to 'y'.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits parser."""
        print()
        return True

    def do_exit(self, arg):
        """Exits parser."""
        return True

    do_quit = do_exit
