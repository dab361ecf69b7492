"""
ACC8 Disassembler — memory image to mnemonic listing
====================================================

Read-only pass over a memory snapshot. Uses the same decoder as the
emulator, so operands are interpreted the way execution would see them:

    LDC   signed immediate        "02: LDC -3"
    HLT   zero operand             "05: HLT"
    HLT   nonzero operand          "30: 5"       (data word, shown unsigned)
    other unsigned address         "01: STO 30"

API Usage:
    from acc8.disasm import Acc8Disassembler

    dis = Acc8Disassembler()
    for line in dis.disassemble(emu.mem.words()):
        print(line.format())
"""

import logging
from dataclasses import dataclass
from typing import List

from .config import SignMode
from .cpu.codec import unsigned_to_decimal
from .cpu.decoder import IMM, IllegalOpcode, decode_word

log = logging.getLogger(__name__)

GARBAGE = "garbage value"


@dataclass
class DisassembledWord:
    """One memory cell rendered as assembly."""
    address: int
    word: str
    text: str               # "LDC 5", "HLT", "17" or GARBAGE
    mnemonic: str = ""      # empty for data words and garbage

    @property
    def is_data(self) -> bool:
        return not self.mnemonic

    def format(self) -> str:
        return f"{self.address:02d}: {self.text}"


class Acc8Disassembler:
    """Renders memory words as ACC8 assembly."""

    def __init__(self, sign_mode: SignMode = SignMode.TWOS_COMPLEMENT):
        self.sign_mode = sign_mode

    def decode_one(self, word: str, address: int = 0) -> DisassembledWord:
        try:
            inst = decode_word(word)
        except IllegalOpcode as e:
            log.warning("Cannot disassemble cell %02d: %s", address, e)
            return DisassembledWord(address, word, GARBAGE)

        if inst.is_halt:
            if inst.is_data:
                return DisassembledWord(address, word, str(unsigned_to_decimal(word)))
            return DisassembledWord(address, word, inst.mnemonic, inst.mnemonic)

        if inst.kind == IMM:
            operand = inst.immediate(self.sign_mode)
        else:
            operand = inst.address
        return DisassembledWord(address, word, f"{inst.mnemonic} {operand}", inst.mnemonic)

    def disassemble(self, words: List[str]) -> List[DisassembledWord]:
        return [self.decode_one(word, addr) for addr, word in enumerate(words)]

    def format_listing(self, words: List[str]) -> str:
        return '\n'.join(d.format() for d in self.disassemble(words))


def disassemble_memory(memory, sign_mode: SignMode = SignMode.TWOS_COMPLEMENT) -> List[DisassembledWord]:
    """Disassemble every cell of a Memory bank."""
    return Acc8Disassembler(sign_mode).disassemble(memory.words())



def format_memory_dump(words: List[str]) -> str:
    """Raw image as 'NN: bits' lines, the same layout as Memory.dump()."""
    return '\n'.join(f'{addr:02d}: {word}' for addr, word in enumerate(words))
