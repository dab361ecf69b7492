"""
ACC8 Emulator — 32-Word Memory Bank

Code and data share one flat array of 32 words. There are no regions,
no protection and no I/O mapping: every cell is readable and writable,
and addresses wrap modulo 32 so an access can never fall off the end.

Cells hold bit strings ("00101100"). Power-on state is all zeros.
"""

from typing import Dict, Iterable, List, Tuple

from ..config import NUM_CELLS, WORD_LEN, ZERO_WORD
from ..cpu.codec import is_bit_string
from ..errors import InvalidWordError


class Memory:
    """Fixed 32-word memory bank with wraparound addressing."""

    def __init__(self):
        self._cells: List[str] = [ZERO_WORD] * NUM_CELLS

    def __len__(self) -> int:
        return NUM_CELLS

    # --- Core read/write ---

    def read(self, addr: int) -> str:
        return self._cells[addr % NUM_CELLS]

    def write(self, addr: int, word: str):
        """Store a word. Raises InvalidWordError for anything but 8 bits."""
        if not is_bit_string(word, WORD_LEN):
            raise InvalidWordError(word, WORD_LEN)
        self._cells[addr % NUM_CELLS] = word

    # --- Bulk load ---

    def load_words(self, words: Iterable[str], base_addr: int = 0) -> int:
        """Write consecutive words starting at base_addr.

        Stops after one pass over the bank; returns the number written.
        """
        count = 0
        for word in words:
            if count >= NUM_CELLS:
                break
            self.write(base_addr + count, word)
            count += 1
        return count

    def clear(self):
        self._cells = [ZERO_WORD] * NUM_CELLS

    # --- Snapshots ---

    def words(self) -> List[str]:
        """Copy of all 32 cells in address order."""
        return list(self._cells)

    snapshot = words

    @staticmethod
    def diff_snapshots(snap_a: List[str], snap_b: List[str]) -> Dict[int, Tuple[str, str]]:
        """Compare two snapshots, return {addr: (old, new)} for changed cells."""
        changes = {}
        for addr, (old, new) in enumerate(zip(snap_a, snap_b)):
            if old != new:
                changes[addr] = (old, new)
        return changes

    # --- Dump ---

    def dump(self) -> str:
        """One 'NN: bits' line per cell."""
        return '\n'.join(f'{addr:02d}: {word}' for addr, word in enumerate(self._cells))
