"""
ACC8 Emulator — Main Emulator Class

Integrates:
  - CPU registers (cpu/regs.py)
  - Memory bank (mem/memory.py)
  - Instruction decoder (cpu/decoder.py)
  - Bit/decimal codec (cpu/codec.py)

Execution model (one step):
  1. Fetch   IR <- M[PC]
  2. Decode  opcode / operand
  3. Execute handler -> AC, memory, maybe PC (jump taken)
  4. PC      if no jump: PC <- (PC + 1) mod 32
             HLT leaves PC on the HLT word

Termination reasons:
  - HALT:     HLT executed
  - TIMEOUT:  step budget exhausted (only when max_steps is set)
  - BREAK:    breakpoint address reached
  - ILLEGAL:  word at PC could not be decoded

Without a step budget a program with no reachable HLT runs forever,
which is how the machine is defined.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Set

from .config import NUM_CELLS, WORD_LEN, EmulatorConfig
from .cpu.codec import decimal_to_binary, signed_to_decimal
from .cpu.decoder import IllegalOpcode, Instruction, Opcode, decode_word
from .cpu.regs import Registers
from .mem.memory import Memory

log = logging.getLogger(__name__)


class MachineState(Enum):
    RUNNING = 'RUNNING'
    HALTED = 'HALTED'


class StopReason(Enum):
    HALT = 'HALT'
    TIMEOUT = 'TIMEOUT'
    BREAK = 'BREAK'
    ILLEGAL = 'ILLEGAL'


@dataclass
class RunReport:
    """Final machine state handed to whoever prints it."""
    stop_reason: Optional[StopReason]
    pc: int
    ac: str
    ac_value: int
    steps: int
    memory: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "stop_reason": self.stop_reason.value if self.stop_reason else None,
            "pc": self.pc,
            "ac": self.ac,
            "ac_value": self.ac_value,
            "steps": self.steps,
            "memory": list(self.memory),
        }


class Acc8Emulator:
    """ACC8 accumulator machine.

    Usage:
        emu = Acc8Emulator()
        emu.load_program(["01000101", "00000000"])   # LDC 5 / HLT
        reason = emu.run()
        print(emu.ac_value)  # 5
    """

    def __init__(self, config: Optional[EmulatorConfig] = None):
        self.config = config or EmulatorConfig()
        self.regs = Registers()
        self.mem = Memory()
        self.state = MachineState.RUNNING
        self.last_stop: Optional[StopReason] = None

        self._breakpoints: Set[int] = set()
        self._resume_at: Optional[int] = None

        self._trace = self.config.trace
        self._trace_output: List[str] = []

        self._dispatch: Dict[Opcode, Callable[[Instruction], bool]] = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════

    def load_program(self, words: Iterable[str], base_addr: int = 0) -> int:
        """Write words into memory starting at base_addr. Returns count."""
        count = self.mem.load_words(words, base_addr)
        log.debug("Loaded %d words at %02d", count, base_addr)
        return count

    # ══════════════════════════════════════════════
    # Numeric views
    # ══════════════════════════════════════════════

    def _signed(self, word: str) -> int:
        return signed_to_decimal(word, self.config.sign_mode)

    @property
    def ac_value(self) -> int:
        return self._signed(self.regs.AC)

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Optional[StopReason]:
        """Execute one instruction. Returns StopReason if stopped, else None."""
        if self.state is MachineState.HALTED:
            return self.last_stop or StopReason.HALT

        pc = self.regs.PC

        if pc in self._breakpoints and self._resume_at != pc:
            self._resume_at = pc
            return StopReason.BREAK
        self._resume_at = None

        # Fetch + decode
        self.regs.IR = self.mem.read(pc)
        try:
            inst = decode_word(self.regs.IR)
        except IllegalOpcode as e:
            log.error("Illegal instruction at %02d: %s", pc, e)
            return self._stop(StopReason.ILLEGAL)

        if self._trace:
            self._trace_output.append(
                f"{pc:02d}: {inst.mnemonic} {inst.operand_bits}  {self.regs.display(self.config.sign_mode)}"
            )

        jumped = self._dispatch[inst.opcode](inst)
        self.regs.steps += 1

        if inst.is_halt:
            log.debug("HLT at %02d after %d steps", pc, self.regs.steps)
            return self._stop(StopReason.HALT)

        if not jumped:
            self.regs.advance_pc()

        return None

    def run(self, max_steps: Optional[int] = None) -> StopReason:
        """Run until HLT or another termination condition.

        Args:
            max_steps: Step budget for this call. Falls back to
                config.max_steps; None means no limit.

        Returns:
            StopReason indicating why execution stopped
        """
        if max_steps is None:
            max_steps = self.config.max_steps

        log.info("Run start: PC=%02d budget=%s", self.regs.PC,
                 max_steps if max_steps is not None else "unbounded")
        executed = 0
        while True:
            if max_steps is not None and executed >= max_steps:
                log.warning("Step budget of %d exhausted at PC=%02d", max_steps, self.regs.PC)
                self.last_stop = StopReason.TIMEOUT
                return StopReason.TIMEOUT
            reason = self.step()
            if reason is not None:
                self.last_stop = reason
                log.info("Run stopped: %s at PC=%02d after %d steps",
                         reason.value, self.regs.PC, self.regs.steps)
                return reason
            executed += 1

    def _stop(self, reason: StopReason) -> StopReason:
        self.state = MachineState.HALTED
        self.last_stop = reason
        return reason

    # ══════════════════════════════════════════════
    # Dispatch
    # ══════════════════════════════════════════════

    def _build_dispatch(self) -> dict:
        """Build the opcode -> handler table.

        Each handler returns True when it has already set PC (jump taken).
        """
        return {
            Opcode.HLT: self._op_hlt,
            Opcode.LOD: self._op_lod,
            Opcode.LDC: self._op_ldc,
            Opcode.STO: self._op_sto,
            Opcode.ADD: self._op_add,
            Opcode.SUB: self._op_sub,
            Opcode.JMP: self._op_jmp,
            Opcode.JMZ: self._op_jmz,
        }

    # ── Load/store handlers ──

    def _op_hlt(self, inst):
        return False

    def _op_lod(self, inst):
        self.regs.AC = self.mem.read(inst.address)
        return False

    def _op_ldc(self, inst):
        value = inst.immediate(self.config.sign_mode)
        self.regs.AC = decimal_to_binary(value, WORD_LEN)
        return False

    def _op_sto(self, inst):
        self.mem.write(inst.address, self.regs.AC)
        return False

    # ── Arithmetic handlers ──

    def _op_add(self, inst):
        result = self._signed(self.mem.read(inst.address)) + self._signed(self.regs.AC)
        self.regs.AC = decimal_to_binary(result, WORD_LEN)
        return False

    def _op_sub(self, inst):
        """AC - M[addr], in that order."""
        result = self._signed(self.regs.AC) - self._signed(self.mem.read(inst.address))
        self.regs.AC = decimal_to_binary(result, WORD_LEN)
        return False

    # ── Branch handlers ──

    def _op_jmp(self, inst):
        if self.ac_value >= 0:
            self.regs.PC = inst.address % NUM_CELLS
            return True
        return False

    def _op_jmz(self, inst):
        if self.ac_value == 0:
            self.regs.PC = inst.address % NUM_CELLS
            return True
        return False

    # ══════════════════════════════════════════════
    # Breakpoint API
    # ══════════════════════════════════════════════

    def add_breakpoint(self, addr: int):
        """Stop before executing the word at addr. run() again to continue."""
        self._breakpoints.add(addr % NUM_CELLS)

    def remove_breakpoint(self, addr: int):
        self._breakpoints.discard(addr % NUM_CELLS)

    def clear_breakpoints(self):
        self._breakpoints.clear()

    # ══════════════════════════════════════════════
    # Trace / Report
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def report(self) -> RunReport:
        return RunReport(
            stop_reason=self.last_stop,
            pc=self.regs.PC,
            ac=self.regs.AC,
            ac_value=self.ac_value,
            steps=self.regs.steps,
            memory=self.mem.words(),
        )

    def reset(self):
        """Full machine reset: registers, memory, run state, trace."""
        self.regs.reset()
        self.mem.clear()
        self.state = MachineState.RUNNING
        self.last_stop = None
        self._resume_at = None
        self._trace_output.clear()
