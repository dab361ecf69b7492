"""
ACC8 — emulator and disassembler for an 8-bit, 8-instruction accumulator machine
===============================================================================

    ┌──────────┐    ┌──────────┐    ┌──────────────┐    ┌─────────────┐
    │  Loader  │───>│  Memory  │<──>│   Emulator   │───>│ Disassembler│
    │ (words)  │    │ 32 words │    │ fetch/decode │    │  (listing)  │
    └──────────┘    └──────────┘    │   /execute   │    └─────────────┘
                                    └──────────────┘
    - cpu/codec.py:    bit string <-> signed/unsigned int
    - cpu/decoder.py:  word -> opcode + operand
    - cpu/regs.py:     AC, IR, PC
    - mem/memory.py:   32-word bank, wraparound addressing
    - emu.py:          run loop, instruction handlers
    - disasm.py:       memory -> mnemonic lines
    - loader.py:       default / file / console program sources
"""

__version__ = "0.1.0"

from .config import EmulatorConfig, SignMode
from .emu import Acc8Emulator, MachineState, RunReport, StopReason
from .disasm import Acc8Disassembler, DisassembledWord
from .errors import Acc8Error, InvalidWordError, ProgramLoadError
