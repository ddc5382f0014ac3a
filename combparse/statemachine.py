"""A grammar for a tiny state machine description language.

    state door {
        entry unlock
        do open
        exit lock
    }

Each state has a name and a list of actions; each action is one of the
keywords `do`, `entry` or `exit` followed by the name of the thing to do.
"""

from dataclasses import dataclass

from .output import ParseError, ParserOutput
from .parser import Parser, alt, primitive, rule
from .primitives import clear_white_space, keyword, special_char, word


@dataclass(frozen=True)
class Action:
    name: str


@dataclass(frozen=True)
class DoAction(Action):
    pass


@dataclass(frozen=True)
class Entry(Action):
    pass


@dataclass(frozen=True)
class Exit(Action):
    pass


@dataclass(frozen=True)
class State:
    name: str
    actions: tuple[Action, ...]


def _action(keyword_text: str) -> Parser[str]:
    """The keyword, and then the word after it."""
    return clear_white_space >> keyword(keyword_text) >> clear_white_space >> word


@rule
def action() -> Parser[Action]:
    return alt(
        _action("do").map(DoAction),
        _action("entry").map(Entry),
        _action("exit").map(Exit),
    )


_state_name = keyword("state") >> clear_white_space >> word
_open_brace = clear_white_space >> special_char("{")
_close_brace = clear_white_space >> special_char("}")


@primitive
def state(input: str) -> ParserOutput[State]:
    # `and_then` forgets values as it goes, so hold on to the outputs that
    # have the bits we want to keep.
    name = _state_name.parse(input)
    actions = name.and_then(_open_brace).and_then(action.all())
    result = actions.and_then(_close_brace)

    return result.map(
        lambda _: State(
            name=name.unwrap()[0],
            actions=tuple(actions.unwrap()[0]),
        )
    )


def parse_state(text: str) -> State:
    """Parse a complete state block, allowing white space around it.

    Raises `ParseError` if `text` isn't a state block, or if there is anything
    other than white space after the closing brace.
    """
    value, rest = (clear_white_space >> state).parse(text).unwrap()
    _, tail = clear_white_space.parse(rest).unwrap()
    if len(tail) > 0:
        raise ParseError(f"unexpected input after state {value.name}: {tail!r}")
    return value
