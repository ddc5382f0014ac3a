"""The parser abstraction and the combinators that glue parsers together.

A `Parser` is a thing that, given a string, produces a `ParserOutput`: either a
`Success` holding a value and the rest of the string, or a `Failure` holding a
message. Parsers never hang on to any state between calls, so you can run the
same parser as many times as you like, on as many threads as you like.

## Building parsers

The leaves are plain functions from a string to a `ParserOutput`, made into
parsers with the `primitive` decorator:

    @primitive
    def digit(input: str) -> ParserOutput[str]:
        if input and input[0].isdigit():
            return Success(input[0], input[1:])
        return Failure("expecting a digit")

Everything else is built by combining parsers, which always makes a *new*
parser and leaves the old ones alone:

    digits = digit.at_least_one().map("".join)
    sign = special_char("-") | special_char("+")

## Recursion

Grammars like to refer to themselves, and Python likes things to be defined
before they are used. The `rule` decorator gets us out of this jam: it turns a
function that returns a parser into a parser whose definition is only computed
the first time it is needed, by which time everything it mentions exists.

    @rule
    def expression():
        return alt(seq(term, special_char("+"), expression), term)
"""

import abc
import logging
import typing

from .output import DEFAULT_CONDITION_MESSAGE, Failure, ParserOutput, Success

AT_LEAST_ONE_MESSAGE = "expecting at least one match"


trace_log = logging.getLogger("combparse.trace")


def _preview(input: str, width: int = 24) -> str:
    if len(input) <= width:
        return repr(input)
    return repr(input[:width]) + "..."


def _describe(result: ParserOutput) -> str:
    match result:
        case Success(value=value, remainder=remainder):
            value_repr = repr(value)
            if len(value_repr) > 48:
                value_repr = value_repr[:48] + "..."
            return f"Success({value_repr}, {_preview(remainder)})"
        case Failure(message=message):
            return f"Failure({message!r})"
        case _:
            return repr(result)


class Parser[A](abc.ABC):
    """Something that turns a string into a `ParserOutput`.

    Subclasses implement `apply`; callers should use `parse`.
    """

    name: str | None = None

    @abc.abstractmethod
    def apply(self, input: str) -> ParserOutput[A]:
        raise NotImplementedError()

    def parse(self, input: str) -> ParserOutput[A]:
        """Run this parser over `input`.

        This never raises for bad input, only for bad arguments: if the input
        doesn't match you get a `Failure` back.
        """
        if not isinstance(input, str):
            raise TypeError(f"Parsers consume str, not {type(input).__name__}")

        result = self.apply(input)

        tl = trace_log
        if tl.isEnabledFor(logging.DEBUG):
            tl.debug(f"{self!r} {_preview(input)} -> {_describe(result)}")
        return result

    def map[B](self, f: typing.Callable[[A], B]) -> "Parser[B]":
        """A parser that transforms the value produced by this one with `f`."""
        return MapParser(self, f)

    def and_then[B](self, next: "Parser[B]") -> "Parser[B]":
        """A parser that runs this one and then `next` on whatever is left.

        Only the value of `next` survives. Use `seq` if you want to keep
        everything.
        """
        return AndThenParser(self, next)

    def or_(self, alternative: "Parser[A]") -> "Parser[A]":
        """A parser that tries this one, and if that fails, tries `alternative`
        on the same input.
        """
        return AlternativeParser(self, alternative)

    def only_if(
        self,
        predicate: typing.Callable[[A], bool],
        message: str = DEFAULT_CONDITION_MESSAGE,
    ) -> "Parser[A]":
        """A parser that fails with `message` if the value produced by this one
        does not satisfy `predicate`.
        """
        return FilterParser(self, predicate, message)

    def set_error(self, message: str) -> "Parser[A]":
        """A parser that reports `message` whenever this one fails."""
        return LabelParser(self, message)

    def all(self) -> "Parser[list[A]]":
        """A parser that matches this one zero or more times. Never fails."""
        return RepeatParser(self)

    def at_least_one(self) -> "Parser[list[A]]":
        """A parser that matches this one one or more times."""
        return self.all().only_if(lambda values: len(values) > 0, AT_LEAST_ONE_MESSAGE)

    def __or__(self, alternative: "Parser[A]") -> "Parser[A]":
        return self.or_(alternative)

    def __rshift__[B](self, next: "Parser[B]") -> "Parser[B]":
        return self.and_then(next)

    def __repr__(self) -> str:
        return self.name or f"<{type(self).__name__}>"


class FunctionParser[A](Parser[A]):
    """A parser that just calls a function. This is where all the actual work
    of looking at characters happens.
    """

    fn: typing.Callable[[str], ParserOutput[A]]

    def __init__(self, fn: typing.Callable[[str], ParserOutput[A]], name: str | None = None):
        self.fn = fn
        self.name = name or getattr(fn, "__name__", None)

    def apply(self, input: str) -> ParserOutput[A]:
        result = self.fn(input)
        if isinstance(result, Success):
            assert input.endswith(result.remainder), f"{self!r} invented some input"
        return result


class MapParser[A, B](Parser[B]):
    def __init__(self, parser: Parser[A], f: typing.Callable[[A], B]):
        self.parser = parser
        self.f = f

    def apply(self, input: str) -> ParserOutput[B]:
        return self.parser.parse(input).map(self.f)

    def __repr__(self) -> str:
        return self.name or f"{self.parser!r}.map"


class AndThenParser[A, B](Parser[B]):
    """Two parsers, one after the other, keeping the second value."""

    def __init__(self, first: Parser[A], second: Parser[B]):
        self.first = first
        self.second = second

    def apply(self, input: str) -> ParserOutput[B]:
        return self.first.parse(input).and_then(self.second)

    def __repr__(self) -> str:
        return self.name or f"({self.first!r} >> {self.second!r})"


class AlternativeParser[A](Parser[A]):
    """A parser that matches if one or another parser matches."""

    def __init__(self, left: Parser[A], right: Parser[A]):
        self.left = left
        self.right = right

    def apply(self, input: str) -> ParserOutput[A]:
        result = self.left.parse(input)
        if result.is_valid():
            return result

        # Strings don't change, so the right side sees exactly what the left
        # side saw. If both fail the right side gets the last word.
        return self.right.parse(input)

    def __repr__(self) -> str:
        return self.name or f"({self.left!r} | {self.right!r})"


class FilterParser[A](Parser[A]):
    def __init__(self, parser: Parser[A], predicate: typing.Callable[[A], bool], message: str):
        self.parser = parser
        self.predicate = predicate
        self.message = message

    def apply(self, input: str) -> ParserOutput[A]:
        return self.parser.parse(input).only_if(self.predicate, self.message)

    def __repr__(self) -> str:
        return self.name or f"{self.parser!r}.only_if"


class LabelParser[A](Parser[A]):
    """Give the failures of a parser a better name."""

    def __init__(self, parser: Parser[A], message: str):
        self.parser = parser
        self.message = message

    def apply(self, input: str) -> ParserOutput[A]:
        return self.parser.parse(input).set_error(self.message)

    def __repr__(self) -> str:
        return self.name or repr(self.parser)


class RepeatParser[A](Parser[list[A]]):
    """Zero or more of a parser, as a list."""

    def __init__(self, parser: Parser[A]):
        self.parser = parser

    def apply(self, input: str) -> ParserOutput[list[A]]:
        values: list[A] = []
        rest = input
        while True:
            match self.parser.parse(rest):
                case Success(value=value, remainder=remainder) if len(remainder) < len(rest):
                    values.append(value)
                    rest = remainder

                case Success(value=value):
                    # Didn't eat anything, and would keep on not eating
                    # anything forever. Count it once and stop.
                    values.append(value)
                    break

                case _:
                    break

        return Success(values, rest)

    def __repr__(self) -> str:
        return self.name or f"{self.parser!r}*"


class SequenceParser(Parser[tuple]):
    """A bunch of parsers, one after the other, keeping every value."""

    def __init__(self, parsers: typing.Sequence[Parser]):
        self.parsers = tuple(parsers)

    def apply(self, input: str) -> ParserOutput[tuple]:
        values = []
        rest = input
        for parser in self.parsers:
            result = parser.parse(rest)
            if isinstance(result, Success):
                values.append(result.value)
                rest = result.remainder
            else:
                assert isinstance(result, Failure)
                return Failure(result.message)

        return Success(tuple(values), rest)

    def __repr__(self) -> str:
        return self.name or f"seq({', '.join(repr(p) for p in self.parsers)})"


class RuleParser[A](Parser[A]):
    """A named parser whose definition is computed when it is first needed.

    You probably don't want to create this directly; instead you probably want
    to use the `@rule` decorator on a function that returns the definition.
    """

    fn: typing.Callable[[], Parser[A]]
    name: str
    error: str | None
    definition_location: str
    _definition: Parser[A] | None

    def __init__(
        self,
        fn: typing.Callable[[], Parser[A]],
        name: str | None = None,
        error: str | None = None,
    ):
        """Create a new RuleParser.

        `fn` is called (once) to get the parser that does the actual work.
        `name` is used when logging; it defaults to the `__name__` of `fn`.
        If `error` is given then every failure of this rule is reported with
        that message instead of whatever the definition had to say.
        """
        self.fn = fn
        self.name = name or fn.__name__
        self.error = error
        self._definition = None

        code = getattr(fn, "__code__", None)
        if code is not None:
            self.definition_location = f"{code.co_filename}:{code.co_firstlineno}"
        else:
            self.definition_location = "<unknown>"

    @property
    def definition(self) -> Parser[A]:
        if self._definition is None:
            definition = self.fn()
            if not isinstance(definition, Parser):
                raise TypeError(
                    f"{self.definition_location}: rule {self.name} returned "
                    f"{definition!r}, which is not a Parser"
                )
            self._definition = definition
        return self._definition

    def apply(self, input: str) -> ParserOutput[A]:
        result = self.definition.parse(input)
        if self.error is not None:
            result = result.set_error(self.error)
        return result


def primitive[A](fn: typing.Callable[[str], ParserOutput[A]], /) -> Parser[A]:
    """The decorator that makes a parser out of a function on strings."""
    return FunctionParser(fn)


@typing.overload
def rule(f: typing.Callable, /) -> RuleParser: ...


@typing.overload
def rule(
    name: str | None = None,
    error: str | None = None,
) -> typing.Callable[[typing.Callable[[], Parser]], RuleParser]: ...


def rule(
    name: str | None | typing.Callable = None,
    error: str | None = None,
) -> RuleParser | typing.Callable[[typing.Callable[[], Parser]], RuleParser]:
    """The decorator that marks a function as a lazily defined rule.

    As with all the best decorators, it can be called with or without arguments.
    """
    if callable(name):
        return rule()(name)

    def wrapper(f: typing.Callable[[], Parser]) -> RuleParser:
        assert name is None or isinstance(name, str)
        return RuleParser(f, name, error)

    return wrapper


def alt[A](*parsers: Parser[A]) -> Parser[A]:
    """A parser that matches the first of a series of alternatives that does.

    (A helper function that combines its arguments into nested alternatives.)
    """
    if len(parsers) == 0:
        raise ValueError("alt() needs at least one parser")

    result = parsers[0]
    for parser in parsers[1:]:
        result = AlternativeParser(result, parser)
    return result


def seq(*parsers: Parser) -> Parser[tuple]:
    """A parser that matches a sequence of parsers. The value is a tuple with
    one entry per parser.
    """
    if len(parsers) == 0:
        raise ValueError("seq() needs at least one parser")
    return SequenceParser(parsers)


def get_all[A](parser: Parser[A]) -> Parser[list[A]]:
    """Zero or more of `parser`."""
    return parser.all()


def at_least_one[A](parser: Parser[A]) -> Parser[list[A]]:
    """One or more of `parser`."""
    return parser.at_least_one()
