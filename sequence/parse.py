"""
parse.py — Input Decoding
==========================
Turns the user's text field ("5, 3, 8, 1") into a list of ints.

Rules:
  • tokens are separated by commas
  • whitespace around each token is trimmed
  • each token must be a base-10 integer (optional leading sign)
  • empty input and empty tokens ("1,,2") are rejected

Nothing here is lenient on purpose: a run is never started from
partially decoded input.
"""

import re
from typing import List, Sequence, Union

_INT_TOKEN = re.compile(r"[+-]?[0-9]+")


class InputParseError(ValueError):
    """Raw input cannot be decoded into a non-empty sequence of integers."""


def parse_sequence(raw: Union[str, Sequence[int], None]) -> List[int]:
    """
    Decode `raw` into a list of ints.

    Accepts the comma-separated text form, or an already decoded list
    (the JSON API may send either).  Raises InputParseError otherwise.
    """
    if raw is None:
        raise InputParseError("No input given. Please enter comma-separated integers.")

    if not isinstance(raw, str):
        return _from_list(raw)

    if not raw.strip():
        raise InputParseError("Input is empty. Please enter comma-separated integers.")

    values: List[int] = []
    for pos, token in enumerate(raw.split(","), start=1):
        token = token.strip()
        if not token:
            raise InputParseError(f"Empty value at position {pos}. Please enter comma-separated integers.")
        # ASCII digits only; int() alone would take "1_000" and other scripts' digits
        if not _INT_TOKEN.fullmatch(token):
            raise InputParseError(
                f"'{token}' at position {pos} is not an integer. Please enter comma-separated integers."
            )
        values.append(int(token))
    return values


def _from_list(raw: Sequence[int]) -> List[int]:
    try:
        items = list(raw)
    except TypeError:
        raise InputParseError(f"Expected text or a list of integers, got {type(raw).__name__}.") from None

    if not items:
        raise InputParseError("Input is empty. Please enter comma-separated integers.")

    for pos, item in enumerate(items, start=1):
        # bool is an int subclass; reject it explicitly
        if isinstance(item, bool) or not isinstance(item, int):
            raise InputParseError(f"{item!r} at position {pos} is not an integer.")
    return items
