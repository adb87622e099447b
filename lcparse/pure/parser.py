"""Single-pass parser for pure lambda calculus.

```
<term>        ::= <application>
<application> ::= <atom> <atom>*          ; associating by left: a b c = ((a b) c)
<atom>        ::= "λ" <var> "." <term>    ; only as the first atom: abstraction bodies are greedy
                | <var>
                | "(" <term> ")"
<var>         ::= <alpha> (<alnum> | "_")*
```

Input is consumed in a single left-to-right pass with one character of lookahead. Whitespace is skipped before every
decision but is never required, so "f(x)" and "f (x)" are the same application. An application keeps taking atoms
while the next character can start one (a letter or "("); anything else ends it. A bare λ therefore can't be a later
operand: "(λx.x) λy.y" stops before the second λ and fails on trailing input, while "(λx.x) (λy.y)" is fine.

A parenthesized single atom is the atom itself: "(x)" parses as "x".

Abstractions and parenthesized groups nest by pushing a Frame rather than by recursion, so nesting depth is bounded
by memory, not by the interpreter's recursion limit.
"""

from collections import namedtuple

from lcparse.lang.error import (InvalidApplication, InvalidLambda, InvalidVariable, UnexpectedCharacter,
                                UnmatchedParenthesis)
from lcparse.pure.term import LAMBDA, Application, Lambda, Variable, continues_name, starts_name

# An abstraction or "(" still waiting for its term. outer is the application built so far around it, or None if the
# construct is the first atom; data is the bound name for an abstraction and the index of "(" for a group.
Frame = namedtuple("Frame", ["kind", "data", "outer"])


class Parser:
    """Single-use parser over one line of text. The cursor only ever moves forward."""
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    PERIOD = "."

    def __init__(self, text):
        self.text = text
        self.pos = 0

    def peek(self):
        """Returns the current character, or None at end of input."""
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def advance(self):
        char = self.peek()
        if char is not None:
            self.pos += 1
        return char

    def skip_whitespace(self):
        while self.peek() is not None and self.peek().isspace():
            self.pos += 1

    def error(self, cls, *args):
        """Builds a ParseError of type cls located at the cursor."""
        return cls(*args, expr=self.text, position=self.pos)

    def parse(self):
        """Parses all of self.text. Trailing characters after a complete term are an InvalidApplication."""
        term = self.parse_term()

        self.skip_whitespace()
        if self.peek() is not None:
            raise self.error(InvalidApplication)
        return term

    def parse_term(self):
        """Parses one application, folding atoms to the left. Opening an abstraction or "(" pushes a Frame and starts a
        fresh application inside it; when that application ends, the frame is closed into an atom of the one around it.
        """
        frames = []
        term = None  # application built so far at the innermost level

        while True:
            self.skip_whitespace()
            char = self.peek()

            if char == Parser.OPEN_PAREN:
                frames.append(Frame(Parser.OPEN_PAREN, self.pos, term))
                self.advance()
                term = None
                continue
            elif term is None and char == LAMBDA:
                frames.append(Frame(LAMBDA, self.parse_binder(), term))
                continue
            elif starts_name(char):
                atom = Variable(self.parse_var())
            else:
                raise self.empty_application_error(char)

            term = atom if term is None else Application(term, atom)

            self.skip_whitespace()
            while not (starts_name(self.peek()) or self.peek() == Parser.OPEN_PAREN):
                if not frames:
                    return term

                frame = frames.pop()
                atom = self.close(frame, term)
                term = atom if frame.outer is None else Application(frame.outer, atom)
                self.skip_whitespace()

    def close(self, frame, body):
        if frame.kind == LAMBDA:
            return Lambda(frame.data, body)
        if self.advance() != Parser.CLOSE_PAREN:
            raise UnmatchedParenthesis(expr=self.text, position=frame.data)
        return body

    def empty_application_error(self, char):
        """Classifies char where an application's first atom was expected."""
        if char is None or char == Parser.CLOSE_PAREN:
            return self.error(InvalidApplication)
        elif continues_name(char):
            return self.error(InvalidVariable)  # names can't start with a digit or "_"
        return self.error(UnexpectedCharacter, char)

    def parse_binder(self):
        """Consumes "λ" <var> "." and returns the bound name."""
        self.advance()  # consume "λ"

        self.skip_whitespace()
        if not starts_name(self.peek()):
            raise self.error(InvalidLambda)
        bind = self.parse_var()

        self.skip_whitespace()
        if self.peek() != Parser.PERIOD:
            raise self.error(InvalidLambda)
        self.advance()

        return bind

    def parse_var(self):
        """Consumes an identifier: a letter followed by letters, digits, or underscores."""
        start = self.pos
        if not starts_name(self.peek()):
            raise self.error(InvalidVariable)

        while continues_name(self.peek()):
            self.pos += 1
        return self.text[start:self.pos]


def parse(text):
    """Parses text into a Term. Raises a ParseError subclass for the first grammar violation found."""
    return Parser(text).parse()
