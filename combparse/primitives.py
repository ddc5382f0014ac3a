"""The parsers that actually look at characters, and a few handy combinations
of them.
"""

import unicodedata

import regex

from .output import Failure, ParserOutput, Success
from .parser import Parser, primitive

# Character classes by Unicode property, not by what str.isalpha() and friends
# happen to think. Combining vowel signs are letters; CJK numerals are not
# numbers.
_ALPHABETIC = regex.compile(r"\p{Alphabetic}")
_WHITE_SPACE = regex.compile(r"\p{White_Space}")


def _is_numeric(c: str) -> bool:
    return unicodedata.category(c).startswith("N")


def _is_alphabetic(c: str) -> bool:
    return _ALPHABETIC.fullmatch(c) is not None


def _is_white_space(c: str) -> bool:
    return _WHITE_SPACE.fullmatch(c) is not None


@primitive
def item(input: str) -> ParserOutput[str]:
    """One character, any character.

    "Foo" -> Success("F", "oo")
    """
    if len(input) == 0:
        return Failure("nothing left to parse")
    return Success(input[0], input[1:])


is_numeric: Parser[str] = item.only_if(_is_numeric, "expecting a numeric character")
is_numeric.name = "is_numeric"

is_alphabetic: Parser[str] = item.only_if(_is_alphabetic, "expecting an alphabetic character")
is_alphabetic.name = "is_alphabetic"

white_space: Parser[str] = item.only_if(_is_white_space, "expecting white space")
white_space.name = "white_space"

clear_white_space: Parser[None] = white_space.all().map(lambda _: None)
clear_white_space.name = "clear_white_space"

word: Parser[str] = is_alphabetic.at_least_one().map("".join).set_error("expecting a word")
word.name = "word"


def keyword(expected: str) -> Parser[None]:
    """A word that is exactly `expected`. A longer word that merely starts with
    `expected` does not count.
    """
    if len(expected) == 0:
        raise ValueError("keyword() needs a non-empty keyword")

    result = (
        word.only_if(lambda w: w == expected)
        .map(lambda _: None)
        .set_error(f"expecting `{expected}`")
    )
    result.name = f"keyword({expected!r})"
    return result


def special_char(c: str) -> Parser[str]:
    """Exactly the character `c`."""
    if len(c) != 1:
        raise ValueError(f"special_char() needs exactly one character, not {c!r}")

    result = item.only_if(lambda i: i == c).set_error(f"expecting `{c}`")
    result.name = f"special_char({c!r})"
    return result
