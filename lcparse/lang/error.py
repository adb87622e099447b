"""Error handling for lcparse. Only GenericExceptions should be encountered while parsing: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Parse failures form a closed set, one class per grammar violation:

```
UnexpectedCharacter(char)  ; a character that cannot start a λ-term
UnmatchedParenthesis       ; "(" never closed by ")"
InvalidLambda              ; bad bound variable or missing "."
InvalidApplication         ; empty application or trailing input
InvalidVariable            ; identifier that does not start with a letter
```

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a lcparse error/warning. exprs[0] should be
    the offending expr, and start/end delimit the part of it that caused the error.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(msg.format(*exprs))


class ParseError(GenericException):
    """Base class for grammar violations found by lcparse.pure.parser. str(error) is the fixed plain message for the
    violation; position is the index into expr at which the parser stopped.
    """
    template = "Parse error"

    def __init__(self, expr="", position=0):
        self.position = position
        super().__init__(self.template, [expr, *self.snippets()], start=position, end=position + 1)

    def snippets(self):
        """Extra values interpolated into template after expr (which is always {0})."""
        return []

    def __eq__(self, other):
        return type(self) is type(other) and str(self) == str(other)

    def __hash__(self):
        return hash((type(self), str(self)))

    def __repr__(self):
        return f"{type(self).__name__}({str(self)!r}, position={self.position})"


class UnexpectedCharacter(ParseError):
    template = "Unexpected character: {1}"

    def __init__(self, char, expr="", position=0):
        self.char = char
        super().__init__(expr, position)

    def snippets(self):
        return [self.char]


class UnmatchedParenthesis(ParseError):
    template = "Unmatched parenthesis"


class InvalidLambda(ParseError):
    template = "Invalid lambda expression"


class InvalidApplication(ParseError):
    template = "Invalid application expression"


class InvalidVariable(ParseError):
    template = "Invalid variable expression"


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom lcparse errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a successful Session add."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded, with a caret underneath."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints warning message based on args, prefixed by the first registered file."""
        error = GenericException(*args, **kwargs)

        file, (__, line_num) = next(iter(self.traceback.items()), ("<unknown>", (None, None)))
        location = f"{file}:{line_num}: " if line_num is not None else f"{file}: "

        error_msg = colored(location, attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum nesting depth exceeded", diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
