"""Pure lambda calculus abstract syntax tree.

```
<λ-term> ::= <var>                     ; "variable"
           | "λ" <var> "." <λ-term>    ; "abstraction", body is greedy: λx.x y = λx.(x y)
           | <λ-term> <λ-term>         ; "application", associating by left: a b c = ((a b) c)
```

Terms are immutable trees built bottom-up by lcparse.pure.parser. No binding resolution is done: a Variable is just
a name. Each Term serializes to a tagged dict, which is also the JSON format printed by the lcparse executable:

```
{"tag": "lambda", "bind": <name>, "body": <term>}
{"tag": "application", "func": <term>, "arg": <term>}
{"tag": "var", "name": <name>}
```

The parser builds trees of any depth, so nothing here recurses: walks over a tree keep their own stack (see fold).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

LAMBDA = "λ"


def starts_name(char):
    """Whether char can begin a name. λ is excluded even though str.isalpha accepts it."""
    return char is not None and char != LAMBDA and char.isalpha()


def continues_name(char):
    return char is not None and char != LAMBDA and (char.isalnum() or char == "_")


def is_name(name):
    return isinstance(name, str) and starts_name(name[:1] or None) and all(continues_name(char) for char in name)


class Term(ABC):
    """Represents a parsed λ-term: Variable, Lambda, or Application."""

    def serialize(self):
        """Returns the tagged dict representation of this term."""
        return serialize(self)

    @property
    def expr(self):
        """Canonical lambda calculus text of this term. Parsing it gives back an equal term."""
        def application(node, func, arg):
            if isinstance(node.func, Lambda):
                func = f"({func})"
            if not isinstance(node.arg, Variable):
                arg = f"({arg})"
            return f"{func} {arg}"

        return fold(self, lambda node: node.name, lambda node, body: f"{LAMBDA}{node.bind}.{body}", application)

    @staticmethod
    def from_json(value):
        """Rebuilds a Term from a tagged dict produced by serialize. Raises ValueError on a malformed record."""
        results = []
        pending = [(value, False)]

        while pending:
            record, visited = pending.pop()
            if not isinstance(record, dict):
                raise ValueError(f"expected a tagged record, got {type(record).__name__}")

            tag = record.get("tag")
            try:
                if tag == "var":
                    results.append(Variable(_name(record["name"])))
                elif tag == "lambda" and visited:
                    results.append(Lambda(_name(record["bind"]), results.pop()))
                elif tag == "lambda":
                    pending += [(record, True), (record["body"], False)]
                elif tag == "application" and visited:
                    arg = results.pop()
                    results.append(Application(results.pop(), arg))
                elif tag == "application":
                    pending += [(record, True), (record["arg"], False), (record["func"], False)]
                else:
                    raise ValueError(f"unknown tag {tag!r}")
            except KeyError as missing:
                raise ValueError(f"'{tag}' record is missing field {missing}") from None

        return results.pop()

    def __eq__(self, other):
        if not isinstance(other, Term):
            return NotImplemented

        pairs = [(self, other)]
        while pairs:
            left, right = pairs.pop()
            if type(left) is not type(right):
                return False
            elif isinstance(left, Variable):
                if left.name != right.name:
                    return False
            elif isinstance(left, Lambda):
                if left.bind != right.bind:
                    return False
                pairs.append((left.body, right.body))
            else:
                pairs += [(left.arg, right.arg), (left.func, right.func)]
        return True

    def __hash__(self):
        return hash(self.expr)

    def __repr__(self):
        return f"{type(self).__name__}('{self.expr}')"

    def __str__(self):
        return self.expr


@dataclass(frozen=True, eq=False, repr=False)
class Variable(Term):
    """Leaf referencing a name."""
    name: str


@dataclass(frozen=True, eq=False, repr=False)
class Lambda(Term):
    """Abstraction binding bind in body."""
    bind: str
    body: Term


@dataclass(frozen=True, eq=False, repr=False)
class Application(Term):
    """Application of func to arg."""
    func: Term
    arg: Term


def fold(term, variable, abstraction, application):
    """Combines term bottom-up without recursion: variable(node), abstraction(node, body), application(node, func, arg)
    get each node along with the already combined results of its children.
    """
    results = []
    pending = [(term, False)]

    while pending:
        node, visited = pending.pop()
        if isinstance(node, Variable):
            results.append(variable(node))
        elif isinstance(node, Lambda) and visited:
            results.append(abstraction(node, results.pop()))
        elif isinstance(node, Lambda):
            pending += [(node, True), (node.body, False)]
        elif isinstance(node, Application) and visited:
            arg = results.pop()
            results.append(application(node, results.pop(), arg))
        elif isinstance(node, Application):
            pending += [(node, True), (node.arg, False), (node.func, False)]
        else:
            raise TypeError(f"cannot fold {type(node).__name__}")

    return results.pop()


def serialize(term):
    """Maps term to its tagged dict."""
    if not isinstance(term, Term):
        raise TypeError(f"cannot serialize {type(term).__name__}")

    return fold(
        term,
        lambda node: {"tag": "var", "name": node.name},
        lambda node, body: {"tag": "lambda", "bind": node.bind, "body": body},
        lambda node, func, arg: {"tag": "application", "func": func, "arg": arg},
    )


def _name(name):
    if not is_name(name):
        raise ValueError(f"{name!r} is not a valid name")
    return name
