from hypothesis import assume, example, given
from hypothesis.strategies import characters, sampled_from, text

from combparse import (
    Parser,
    Success,
    at_least_one,
    clear_white_space,
    is_alphabetic,
    is_numeric,
    item,
    keyword,
    special_char,
    white_space,
    word,
)
from combparse.statemachine import action, state

PARSERS: list[Parser] = [
    item,
    is_numeric,
    is_alphabetic,
    white_space,
    clear_white_space,
    word,
    keyword("state"),
    special_char("{"),
    is_numeric.all(),
    word | is_numeric.at_least_one().map("".join),
    action,
    action.all(),
    state,
]

# Mostly the alphabet of the state machine language, with some noise.
state_ish = text(
    alphabet=sampled_from(list("state do entry exit {} \n\t") + ["1", "x", "é", "٣"]),
    max_size=40,
)


@given(sampled_from(PARSERS), text())
def test_parse_is_total_and_remainder_is_suffix(parser: Parser, input: str):
    result = parser.parse(input)
    if isinstance(result, Success):
        assert len(result.remainder) <= len(input)
        assert input.endswith(result.remainder)


@given(sampled_from(PARSERS), state_ish)
@example(parser=state, input="state abc {entry bar}")
def test_state_ish_remainder_is_suffix(parser: Parser, input: str):
    result = parser.parse(input)
    if isinstance(result, Success):
        assert input.endswith(result.remainder)


@given(sampled_from(PARSERS), sampled_from(PARSERS), state_ish)
def test_or_does_not_leak(left: Parser, right: Parser, input: str):
    assume(not left.parse(input).is_valid())
    assert (left | right).parse(input) == right.parse(input)


@given(sampled_from(PARSERS), state_ish)
def test_map_is_failure_transparent(parser: Parser, input: str):
    original = parser.parse(input)
    assume(not original.is_valid())
    assert parser.map(lambda _: "anything").parse(input) == original


@given(
    sampled_from(
        [
            item,
            is_numeric,
            is_alphabetic,
            white_space,
            clear_white_space,
            word,
            action,
            is_numeric.all(),
            action.all(),
        ]
    ),
    state_ish,
)
@example(parser=clear_white_space, input="abc")
def test_at_least_one_fails_iff_first_attempt_fails(parser: Parser, input: str):
    assert at_least_one(parser).parse(input).is_valid() == parser.parse(input).is_valid()


@given(sampled_from(PARSERS), state_ish)
def test_all_never_fails(parser: Parser, input: str):
    assert parser.all().parse(input).is_valid()


@given(sampled_from(PARSERS), state_ish)
def test_parse_is_repeatable(parser: Parser, input: str):
    assert parser.parse(input) == parser.parse(input)


@given(text(alphabet=characters(categories=["Ll", "Lu"]), min_size=1))
def test_word_eats_whole_words(letters: str):
    assert word.parse(letters + " tail") == Success(letters, " tail")
