"""Session control for lcparse. Parses λ-terms line by line, either from a file or from the command line, and renders
the results.

Within a file:
- ";;" starts a comment that runs to the end of the line
- blank lines are ignored
- a line with more "(" than ")" continues onto the next line
"""

import json

from lcparse.lang.error import GenericException
from lcparse.pure.parser import parse


class Session:
    """Governs a lcparse session: the terms parsed so far and how to print them."""
    SH_FILE = "<in>"  # command-line interpreter filename
    FORMATS = ("json", "expr")
    COMMENT = ";;"

    def __init__(self, error_handler, path, cmd_line, fmt="json", indent=2):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        if fmt not in Session.FORMATS:
            raise GenericException("unknown output format '{}'", fmt, diagnosis=False)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.fmt = fmt
        self.indent = indent if indent else None  # indent=0 means compact json

        self.results = []  # parsed Terms, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r", encoding="utf-8") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for expr in exprs:
                self.add(*expr)

            if not exprs:
                self.error_handler.warn("'{}' contains no λ-terms", path, diagnosis=False)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but add_to_prev will indicate whether a line continuation is necessary. Returns
        updated value of line and add_to_prev.
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]

        line = line.strip()
        if exprs is not None:
            if line and not add_to_prev:
                exprs.append((line, line_num))
            elif add_to_prev:
                prev_line, prev_num = exprs.pop()
                line = f"{prev_line} {line}".rstrip()
                exprs.append((line, prev_num))

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Parses expr and adds the resulting Term to this session. A ParseError is raised for the error handler."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        if not expr or expr.isspace():
            raise ValueError("expr cannot be empty")

        self.results.append(parse(expr))

        self.error_handler.remove_line(self.path)  # error was not raised

    def render(self, term):
        """Renders term in this session's output format."""
        if self.fmt == "expr":
            return term.expr
        return json.dumps(term.serialize(), indent=self.indent, ensure_ascii=False)

    def run(self):
        """Prints every Term parsed so far, in order."""
        for term in self.results:
            print(self.render(term))

    def pop(self):
        """Removes the most recent Term and returns it rendered."""
        return self.render(self.results.pop())
