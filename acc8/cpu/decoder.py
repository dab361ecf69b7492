"""
ACC8 Emulator — Instruction Decoder

Word layout (MSB first):

    bit  7 6 5 | 4 3 2 1 0
         opcode| operand

The 3-bit opcode fully enumerates the instruction set, so a well-formed
word always decodes. IllegalOpcode is only raised for words that are not
8-character bit strings (corrupt memory images, bad loaders).

Operand kinds:
  NONE   HLT carries no operand (a nonzero field marks a data word)
  ADDR   unsigned 0..31 memory address
  IMM    signed 5-bit immediate (LDC only)
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from ..config import OPCODE_BITS, OPERAND_BITS, WORD_LEN, SignMode
from .codec import (
    decimal_to_binary, is_bit_string, signed_to_decimal, unsigned_to_decimal,
)

# ──────────────────────────────────────────────
# Operand kind constants
# ──────────────────────────────────────────────

NONE = 'NONE'
ADDR = 'ADDR'
IMM  = 'IMM'


class Opcode(IntEnum):
    HLT = 0
    LOD = 1
    LDC = 2
    STO = 3
    ADD = 4
    SUB = 5
    JMP = 6
    JMZ = 7


# Format: opcode -> (mnemonic, operand_kind, description)
OPCODES = {
    Opcode.HLT: ('HLT', NONE, 'Halt execution'),
    Opcode.LOD: ('LOD', ADDR, 'AC <- M[addr]'),
    Opcode.LDC: ('LDC', IMM,  'AC <- constant'),
    Opcode.STO: ('STO', ADDR, 'M[addr] <- AC'),
    Opcode.ADD: ('ADD', ADDR, 'AC <- AC + M[addr]'),
    Opcode.SUB: ('SUB', ADDR, 'AC <- AC - M[addr]'),
    Opcode.JMP: ('JMP', ADDR, 'PC <- addr if AC >= 0'),
    Opcode.JMZ: ('JMZ', ADDR, 'PC <- addr if AC == 0'),
}

MNEMONICS = {mnem: op for op, (mnem, _, _) in OPCODES.items()}


class IllegalOpcode(Exception):
    """Raised when a word cannot be split into opcode and operand."""
    pass


@dataclass(frozen=True)
class Instruction:
    """One decoded word. The raw word is kept for data rendering."""
    opcode: Opcode
    operand_bits: str
    word: str

    @property
    def mnemonic(self) -> str:
        return OPCODES[self.opcode][0]

    @property
    def kind(self) -> str:
        return OPCODES[self.opcode][1]

    @property
    def address(self) -> int:
        """Operand as an unsigned memory address."""
        return unsigned_to_decimal(self.operand_bits)

    def immediate(self, mode: SignMode = SignMode.TWOS_COMPLEMENT) -> int:
        """Operand as a signed 5-bit constant."""
        return signed_to_decimal(self.operand_bits, mode)

    @property
    def is_halt(self) -> bool:
        return self.opcode == Opcode.HLT

    @property
    def is_data(self) -> bool:
        """HLT opcode with a nonzero operand field: a literal, not an instruction."""
        return self.is_halt and '1' in self.operand_bits


def decode_word(word: str) -> Instruction:
    """Split a word into opcode and operand fields.

    Raises IllegalOpcode if the word is not an 8-bit string.
    """
    if not is_bit_string(word, WORD_LEN):
        raise IllegalOpcode(f"Undecodable word {word!r}")
    value = unsigned_to_decimal(word[:OPCODE_BITS])
    try:
        opcode = Opcode(value)
    except ValueError:
        raise IllegalOpcode(f"Unknown opcode {value} in word {word}") from None
    return Instruction(opcode, word[OPCODE_BITS:], word)


def encode_instruction(op: Union[str, int], operand: int = 0) -> str:
    """Build a word from a mnemonic (or opcode number) and operand value.

    Negative operands are encoded two's complement in the 5-bit field,
    e.g. encode_instruction('LDC', -3) -> '01011101'.
    """
    if isinstance(op, str):
        try:
            opcode = MNEMONICS[op.upper()]
        except KeyError:
            raise IllegalOpcode(f"Unknown mnemonic {op!r}") from None
    else:
        opcode = Opcode(op)
    return (decimal_to_binary(int(opcode), OPCODE_BITS)
            + decimal_to_binary(operand, OPERAND_BITS))
