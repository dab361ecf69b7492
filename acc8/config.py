"""
ACC8 Machine — Constants and Run Configuration
==============================================

Machine geometry (from the instruction set card):
  32 memory cells, 8-bit words
  word = [ opcode (3 bits) | operand (5 bits) ]

  000 HLT   001 LOD   010 LDC   011 STO
  100 ADD   101 SUB   110 JMP   111 JMZ

Sign interpretation is selectable. TWOS_COMPLEMENT gives the most
significant bit a weight of -2^(n-1). LEGACY gives it +2^(n-1), which is
what the original machine did; its programs can be run bit-exact with
--sign-mode legacy.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
#  MACHINE GEOMETRY
# =============================================================================
NUM_CELLS = 32            # memory words, addressed 0-31
WORD_LEN = 8              # bits per word
OPCODE_BITS = 3
OPERAND_BITS = WORD_LEN - OPCODE_BITS

ZERO_WORD = "0" * WORD_LEN


# =============================================================================
#  PROGRAM SOURCES
# =============================================================================
DEFAULT_PROGRAM_FILE = "data"

# LDC 5 / STO 30 / LDC 13 / ADD 30 / STO 31 / HLT
DEFAULT_PROGRAM = (
    "01000101",
    "01111110",
    "01001101",
    "10011110",
    "01111111",
    "00000000",
)


class SignMode(Enum):
    TWOS_COMPLEMENT = "twos"
    LEGACY = "legacy"


@dataclass
class EmulatorConfig:
    """Per-run settings. max_steps=None runs until HLT."""
    sign_mode: SignMode = SignMode.TWOS_COMPLEMENT
    max_steps: Optional[int] = None
    trace: bool = False
