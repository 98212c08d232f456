"""Content-addressed identifiers for catalogue prompts.

Catalogue prompts carry no stored id; their identity is derived from the full
taxonomy path plus the prompt text so favourites survive reloads without a
database. Ids are 32-bit rolling hashes rendered in base 36 and prefixed with
``p``. Distinct prompts may collide; collisions are neither detected nor resolved.

Updates:
  v0.1.1 - 2026-09-28 - Hash UTF-16 code units so ids match browser-generated favourites.
  v0.1.0 - 2026-09-21 - Introduce deterministic prompt id helper.
"""

from __future__ import annotations

from typing import Final

PROMPT_ID_PREFIX: Final[str] = "p"
KEY_SEPARATOR: Final[str] = "::"

_BASE36_ALPHABET: Final[str] = "0123456789abcdefghijklmnopqrstuvwxyz"
_HASH_MULTIPLIER: Final[int] = 31

__all__ = [
    "KEY_SEPARATOR",
    "PROMPT_ID_PREFIX",
    "compute_prompt_id",
    "hash_key",
    "to_base36",
    "to_int32",
]


def to_int32(value: int) -> int:
    """Wrap *value* to a signed 32-bit integer using two's-complement rules."""
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def _utf16_units(text: str) -> list[int]:
    encoded = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(encoded[i : i + 2], "little") for i in range(0, len(encoded), 2)]


def hash_key(key: str) -> int:
    """Return the signed 32-bit ``h * 31 + unit`` rolling hash of *key*."""
    accumulator = 0
    for unit in _utf16_units(key):
        accumulator = to_int32(accumulator * _HASH_MULTIPLIER + unit)
    return accumulator


def compute_prompt_id(tab: str, section: str, category: str, text: str) -> str:
    """Return the stable id for a prompt at ``tab/section/category``."""
    key = KEY_SEPARATOR.join((tab, section, category, text))
    return PROMPT_ID_PREFIX + to_base36(abs(hash_key(key)))
