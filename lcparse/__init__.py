"""Parser for untyped lambda calculus expressions.

    >>> from lcparse import parse
    >>> parse("λx.x y").serialize()
    {'tag': 'lambda', 'bind': 'x', 'body': {'tag': 'application', 'func': {'tag': 'var', 'name': 'x'}, 'arg': {'tag': 'var', 'name': 'y'}}}

Basic program flow:
    1. Parser (pure/parser.py): single pass over a line of text, produces a Term or raises a ParseError
    2. Term model (pure/term.py): immutable AST, serialized to tagged dicts/JSON
    3. Session/Shell (lang/): reads lines from a file or the command line and prints results, with ErrorHandler
       reporting ParseErrors

"""

from lcparse.lang.error import (InvalidApplication, InvalidLambda, InvalidVariable, ParseError, UnexpectedCharacter,
                                UnmatchedParenthesis)
from lcparse.pure.parser import Parser, parse
from lcparse.pure.term import Application, Lambda, Term, Variable, serialize

__version__ = "0.1.0"

__all__ = [
    "Application", "InvalidApplication", "InvalidLambda", "InvalidVariable", "Lambda", "ParseError", "Parser",
    "Term", "UnexpectedCharacter", "UnmatchedParenthesis", "Variable", "parse", "serialize",
]
