"""
ACC8 Program Loaders
====================

Three ways to fill the memory bank before a run:

  load_default       the built-in demo program (config.DEFAULT_PROGRAM)
  load_from_file     one word per line, default file name "data"
  read_from_console  interactive, one prompt per memory address

File format:
  - a line starting with whitespace (blank lines included) is skipped
  - otherwise the first field of the line must be an 8-bit word
  - accepted words fill addresses 0, 1, 2, ... up to 31
  - a malformed line is logged and skipped; it does not use an address

Cells that no source fills keep their power-on value 00000000.
A file that cannot be opened is fatal (ProgramLoadError). Bytes that are
not UTF-8 only spoil their own line, which is then skipped.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from .config import DEFAULT_PROGRAM, DEFAULT_PROGRAM_FILE, NUM_CELLS, WORD_LEN
from .cpu.codec import is_bit_string
from .errors import InvalidWordError, ProgramLoadError
from .mem.memory import Memory

log = logging.getLogger(__name__)

QUIT_WORD = "quit"


def parse_word(text: str) -> str:
    """Validate one token as a word. Raises InvalidWordError."""
    if not is_bit_string(text, WORD_LEN):
        raise InvalidWordError(text, WORD_LEN)
    return text


def parse_program_lines(lines: Iterable[str]) -> List[str]:
    """Filter raw program lines down to at most 32 valid words."""
    words: List[str] = []
    for lineno, line in enumerate(lines, 1):
        line = line.rstrip("\r\n")
        if not line or line[0].isspace():
            continue
        if len(words) >= NUM_CELLS:
            log.warning("Memory full after %d words; ignoring line %d onwards",
                        NUM_CELLS, lineno)
            break
        try:
            words.append(parse_word(line.split()[0]))
        except InvalidWordError as e:
            log.warning("Line %d skipped: %s", lineno, e)
    return words


def load_default(memory: Memory) -> int:
    count = memory.load_words(DEFAULT_PROGRAM)
    log.info("Default program loaded (%d words)", count)
    return count


def load_from_file(memory: Memory, path: Union[str, Path] = DEFAULT_PROGRAM_FILE) -> int:
    """Load a word-per-line program file into memory. Returns words loaded."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            words = parse_program_lines(f)
    except OSError as e:
        raise ProgramLoadError(f"Failed to open file: {path} ({e.strerror})", path) from e
    count = memory.load_words(words)
    log.info("Loaded %d words from %s", count, path)
    return count


def _clean_console_input(raw: str) -> str:
    return "".join(ch for ch in raw if ch.isalnum())


def read_from_console(memory: Memory, input_fn: Optional[Callable[[str], str]] = None,
                      print_fn: Optional[Callable[[str], None]] = None) -> int:
    """Prompt for one word per address until 'quit', end of input or a full bank.

    Non-alphanumeric characters are dropped from each entry before it is
    checked. An invalid entry is rejected and the same address is asked
    for again.
    """
    input_fn = input_fn or input
    print_fn = print_fn or print

    print_fn(f"\nEnter an instruction ({WORD_LEN} bit binary number) for the "
             f"corresponding memory location or type '{QUIT_WORD}' to exit")

    address = 0
    while address < NUM_CELLS:
        try:
            raw = input_fn(f"Memory address {address}:")
        except EOFError:
            log.debug("Console input closed at address %d", address)
            break

        entry = _clean_console_input(raw)
        if entry == QUIT_WORD:
            break
        try:
            memory.write(address, parse_word(entry))
        except InvalidWordError as e:
            log.warning("Rejected entry for address %d: %s", address, e)
            continue
        address += 1

    log.info("Read %d words from console", address)
    return address
