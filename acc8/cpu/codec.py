"""
ACC8 Emulator — Bit/Decimal Codec

Words travel through the machine as bit strings ("01000101"), MSB first.
Every numeric view of a word goes through this module:

  decimal_to_binary     int -> fixed-width bit string (truncating)
  unsigned_to_decimal   bit string -> 0 .. 2^n - 1
  signed_to_decimal     bit string -> int, per SignMode

Overflow policy: decimal_to_binary keeps only the low `bits` bits of the
value, exactly like a shift-and-mask encoder. Nothing is reported.
  decimal_to_binary(300, 8)  -> '00101100'   (300 & 0xFF = 44)
  decimal_to_binary(-3, 8)   -> '11111101'

Sign interpretation:
  TWOS_COMPLEMENT:  value = -MSB * 2^(n-1) + rest
  LEGACY:           value = +MSB * 2^(n-1) + rest   (same as unsigned)
"""

from typing import Optional

from ..config import SignMode


def is_bit_string(text, width: Optional[int] = None) -> bool:
    """True if text is a non-empty str of '0'/'1' (of exactly `width` chars if given)."""
    if not isinstance(text, str) or not text:
        return False
    if width is not None and len(text) != width:
        return False
    return all(ch in "01" for ch in text)


# ══════════════════════════════════════════════
# Encoding
# ══════════════════════════════════════════════

def decimal_to_binary(value: int, bits: int = 8) -> str:
    """Encode value as a `bits`-wide two's complement bit string.

    High-order bits that do not fit are dropped. Python's >> on negative
    ints is arithmetic, so negative values fill with 1s as expected.
    """
    out = []
    for _ in range(bits):
        out.append("1" if value & 1 else "0")
        value >>= 1
    return "".join(reversed(out))


# ══════════════════════════════════════════════
# Decoding
# ══════════════════════════════════════════════

def unsigned_to_decimal(bits: str) -> int:
    """Positional binary: bit i from the right weighs 2^i."""
    value = 0
    for ch in bits:
        value = (value << 1) | (ch == "1")
    return value


def twos_complement_to_decimal(bits: str) -> int:
    n = len(bits)
    value = unsigned_to_decimal(bits)
    if n and bits[0] == "1":
        value -= 1 << n
    return value


def legacy_signed_to_decimal(bits: str) -> int:
    """Sign decode of the original machine.

    The MSB starts the sum at +2^(n-1) instead of -2^(n-1), so the result
    is numerically the unsigned value. Kept for running old programs.
    """
    n = len(bits)
    value = 0
    if n and bits[0] == "1":
        value = 1 << (n - 1)
    return value + unsigned_to_decimal(bits[1:])


def signed_to_decimal(bits: str, mode: SignMode = SignMode.TWOS_COMPLEMENT) -> int:
    if mode is SignMode.LEGACY:
        return legacy_signed_to_decimal(bits)
    return twos_complement_to_decimal(bits)
