"""A small library of parser combinators.

Build recursive-descent parsers by gluing small parsers together into big ones.
The [parser] module has the machinery, the [primitives] module has the parsers
that actually look at characters, and the [statemachine] module has a worked
example grammar.
"""

from .output import ParseError, ParserOutput, Success, Failure
from .parser import (
    Parser,
    FunctionParser,
    RuleParser,
    primitive,
    rule,
    alt,
    seq,
    get_all,
    at_least_one,
)
from .primitives import (
    item,
    is_numeric,
    is_alphabetic,
    white_space,
    clear_white_space,
    word,
    keyword,
    special_char,
)
