"""Reversible short identifiers for UUIDs used in public URLs.

The encoding is plain base58 over the 128-bit integer value using the Flickr
alphabet, left-padded with the zero digit to a fixed width so that every UUID
maps to exactly one 22 character string.
"""
from __future__ import annotations

import math
import uuid

ALPHABET = "123456789abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ"
BASE = len(ALPHABET)
SHORT_LENGTH = math.ceil(128 / math.log2(BASE))

_INDEX = {char: position for position, char in enumerate(ALPHABET)}


def to_short_uuid(value: uuid.UUID | str) -> str:
    """Encode a UUID into its short form."""

    number = uuid.UUID(str(value)).int
    digits: list[str] = []
    while number:
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])
    encoded = "".join(reversed(digits))
    return encoded.rjust(SHORT_LENGTH, ALPHABET[0])


def from_short_uuid(short_id: str) -> uuid.UUID:
    """Decode a short identifier back into the UUID it was produced from."""

    if not short_id or len(short_id) > SHORT_LENGTH:
        raise ValueError(f"Invalid short id: {short_id!r}")
    number = 0
    for char in short_id:
        try:
            number = number * BASE + _INDEX[char]
        except KeyError as exc:
            raise ValueError(f"Invalid character {char!r} in short id") from exc
    if number >= 1 << 128:
        raise ValueError(f"Short id out of range: {short_id!r}")
    return uuid.UUID(int=number)


def parse_identifier(value: str) -> uuid.UUID:
    """Accept either a canonical UUID string or its short form."""

    try:
        return uuid.UUID(value)
    except ValueError:
        return from_short_uuid(value)
