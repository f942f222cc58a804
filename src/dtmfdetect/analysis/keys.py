"""Phone keys and the fixed DTMF frequency tables."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

LOW_TONES: Tuple[int, ...] = (697, 770, 852, 941)
HIGH_TONES: Tuple[int, ...] = (1209, 1336, 1477, 1633)


class PhoneKey(str, Enum):
    """Keys of a DTMF keypad; ``NONE`` means no key is sounding."""

    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    ZERO = "0"
    STAR = "*"
    HASH = "#"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    NONE = ""

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def tones(self) -> Tuple[int, int]:
        """Return the ``(high, low)`` frequency pair of this key."""
        try:
            return _TONES_BY_KEY[self]
        except KeyError:
            raise ValueError("PhoneKey.NONE has no DTMF tones") from None

    @classmethod
    def from_symbol(cls, symbol: str) -> "PhoneKey":
        """Look up a key by its keypad symbol (letters are case-insensitive)."""
        normalized = str(symbol).strip().upper()
        if not normalized:
            raise ValueError("symbol must not be empty")
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"unknown DTMF symbol: {symbol!r}") from None

    def __str__(self) -> str:
        return self.value or "none"


_KEYPAD = (
    (PhoneKey.ONE, PhoneKey.TWO, PhoneKey.THREE, PhoneKey.A),
    (PhoneKey.FOUR, PhoneKey.FIVE, PhoneKey.SIX, PhoneKey.B),
    (PhoneKey.SEVEN, PhoneKey.EIGHT, PhoneKey.NINE, PhoneKey.C),
    (PhoneKey.STAR, PhoneKey.ZERO, PhoneKey.HASH, PhoneKey.D),
)

# Rows follow LOW_TONES, columns follow HIGH_TONES.
KEYS_BY_TONES: Mapping[Tuple[int, int], PhoneKey] = MappingProxyType(
    {
        (high, low): key
        for low, row in zip(LOW_TONES, _KEYPAD)
        for high, key in zip(HIGH_TONES, row)
    }
)

_TONES_BY_KEY: Mapping[PhoneKey, Tuple[int, int]] = MappingProxyType(
    {key: tones for tones, key in KEYS_BY_TONES.items()}
)

PHONE_KEYS: Tuple[PhoneKey, ...] = tuple(key for row in _KEYPAD for key in row)


def to_phone_key(high: int, low: int) -> PhoneKey:
    """Map a (high, low) frequency pair to its key, ``NONE`` when unknown."""
    return KEYS_BY_TONES.get((high, low), PhoneKey.NONE)


__all__ = [
    "HIGH_TONES",
    "KEYS_BY_TONES",
    "LOW_TONES",
    "PHONE_KEYS",
    "PhoneKey",
    "to_phone_key",
]
