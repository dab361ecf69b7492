"""
ACC8 Emulator — CPU Register Set

Register model:
  AC    — 8-bit accumulator, stored as a raw bit string
  IR    — instruction register, copy of the word being executed; it keeps
          the last fetched word between steps for trace output
  PC    — program counter, 0..31
  steps — instructions executed since reset (not architectural)
"""

from ..config import NUM_CELLS, ZERO_WORD, SignMode
from .codec import signed_to_decimal


class Registers:
    """ACC8 CPU register set."""

    __slots__ = ('AC', 'IR', 'PC', 'steps')

    def __init__(self):
        self.AC: str = ZERO_WORD
        self.IR: str = ZERO_WORD
        self.PC: int = 0
        self.steps: int = 0

    def advance_pc(self):
        """PC <- (PC + 1) mod 32. Running off the end wraps to 0."""
        self.PC = (self.PC + 1) % NUM_CELLS

    def ac_value(self, mode: SignMode = SignMode.TWOS_COMPLEMENT) -> int:
        return signed_to_decimal(self.AC, mode)

    def display(self, mode: SignMode = SignMode.TWOS_COMPLEMENT) -> str:
        """Format register state for trace output."""
        return (f"PC={self.PC:02d} IR={self.IR} AC={self.AC} "
                f"({self.ac_value(mode):+d}) steps={self.steps}")

    def reset(self):
        self.AC = ZERO_WORD
        self.IR = ZERO_WORD
        self.PC = 0
        self.steps = 0
