"""The result of running a parser over some input.

A parse either succeeds, producing a value and whatever input was left over, or
it fails with a message. Both are ordinary values: nothing in here raises unless
you explicitly ask for it with `unwrap`.
"""

import abc
import typing
from dataclasses import dataclass

if typing.TYPE_CHECKING:
    from .parser import Parser


DEFAULT_CONDITION_MESSAGE = "condition not matched"


class ParseError(Exception):
    """Raised when somebody insists on the value of a failed parse."""

    message: str

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParserOutput[A](abc.ABC):
    """The outcome of applying a parser to an input: a `Success` or a `Failure`."""

    @abc.abstractmethod
    def map[B](self, f: typing.Callable[[A], B]) -> "ParserOutput[B]":
        """Transform the value of a success. Failures come through untouched and
        `f` is never called for them.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def only_if(
        self,
        predicate: typing.Callable[[A], bool],
        message: str = DEFAULT_CONDITION_MESSAGE,
    ) -> "ParserOutput[A]":
        """Turn a success into a failure with `message` if the value does not
        satisfy `predicate`.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def and_then[B](self, parser: "Parser[B]") -> "ParserOutput[B]":
        """Run `parser` on the remainder of a success.

        The value of this output is dropped on the floor. If you need it, hang
        on to this output before you call `and_then`.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def set_error(self, message: str) -> "ParserOutput[A]":
        """Replace the message of a failure. Successes are left alone."""
        raise NotImplementedError()

    @abc.abstractmethod
    def is_valid(self) -> bool:
        raise NotImplementedError()

    @abc.abstractmethod
    def unwrap(self) -> tuple[A, str]:
        """The (value, remainder) pair of a success. Raises `ParseError` for a
        failure.
        """
        raise NotImplementedError()


@dataclass(frozen=True)
class Success[A](ParserOutput[A]):
    value: A
    remainder: str

    def map[B](self, f: typing.Callable[[A], B]) -> ParserOutput[B]:
        return Success(f(self.value), self.remainder)

    def only_if(
        self,
        predicate: typing.Callable[[A], bool],
        message: str = DEFAULT_CONDITION_MESSAGE,
    ) -> ParserOutput[A]:
        if predicate(self.value):
            return self
        return Failure(message)

    def and_then[B](self, parser: "Parser[B]") -> ParserOutput[B]:
        return parser.parse(self.remainder)

    def set_error(self, message: str) -> ParserOutput[A]:
        del message
        return self

    def is_valid(self) -> bool:
        return True

    def unwrap(self) -> tuple[A, str]:
        return (self.value, self.remainder)


@dataclass(frozen=True)
class Failure[A](ParserOutput[A]):
    message: str

    def map[B](self, f: typing.Callable[[A], B]) -> ParserOutput[B]:
        del f
        return Failure(self.message)

    def only_if(
        self,
        predicate: typing.Callable[[A], bool],
        message: str = DEFAULT_CONDITION_MESSAGE,
    ) -> ParserOutput[A]:
        # The original complaint is more interesting than ours.
        del predicate, message
        return self

    def and_then[B](self, parser: "Parser[B]") -> ParserOutput[B]:
        del parser
        return Failure(self.message)

    def set_error(self, message: str) -> ParserOutput[A]:
        return Failure(message)

    def is_valid(self) -> bool:
        return False

    def unwrap(self) -> tuple[A, str]:
        raise ParseError(self.message)
