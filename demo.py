import argparse
import logging
import sys
import typing

import combparse
from combparse.statemachine import state

SAMPLE = "state abc {entry bar}"


def main(args: list[str]) -> int:
    parser = argparse.ArgumentParser(description="Parse a state block and print the result")
    parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help=f"The text to parse. The default is {SAMPLE!r}.",
    )
    parser.add_argument(
        "--file",
        type=str,
        default=None,
        help="Path to a file containing the text to parse. Overrides the text argument.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every parser that runs, and what it made of its input.",
    )

    parsed = parser.parse_args(args[1:])
    if parsed.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if parsed.file is not None:
        with open(parsed.file, "r", encoding="utf-8") as f:
            text = f.read()
    elif parsed.text is not None:
        text = parsed.text
    else:
        text = SAMPLE

    match state.parse(text):
        case combparse.Success(value=value, remainder=remainder):
            print(f"{value}")
            if len(remainder) > 0:
                print(f"(left over: {remainder!r})")
            return 0

        case combparse.Failure(message=message):
            print(f"ERROR: {message}")
            return 1

        case result:
            typing.assert_never(result)


if __name__ == "__main__":
    sys.exit(main(sys.argv))
