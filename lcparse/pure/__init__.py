"""Pure lambda calculus: term model and parser."""
