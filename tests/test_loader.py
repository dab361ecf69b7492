"""
Program loader tests: default image, word-per-line files, console entry.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from acc8.config import DEFAULT_PROGRAM
from acc8.errors import ProgramLoadError
from acc8.loader import (
    load_default, load_from_file, parse_program_lines, read_from_console,
)
from acc8.mem.memory import Memory


def _feed(entries):
    """input() stand-in: returns entries in order, then raises EOFError."""
    it = iter(entries)

    def _input(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _input


class TestParseLines:
    def test_skips_whitespace_lines(self):
        lines = ["01000101\n", "\n", "   00000000\n", "\t11111111\n", "01111110\n"]
        assert parse_program_lines(lines) == ["01000101", "01111110"]

    def test_malformed_lines_do_not_take_an_address(self):
        lines = ["01000101\n", "0100010\n", "01000x01\n", "010001011\n", "01111110\r\n"]
        assert parse_program_lines(lines) == ["01000101", "01111110"]

    def test_trailing_text_after_word(self):
        assert parse_program_lines(["01000101 LDC 5\n"]) == ["01000101"]

    def test_at_most_32_words(self):
        words = parse_program_lines(["00000001\n"] * 40)
        assert len(words) == 32


class TestLoaders:
    def test_default(self):
        mem = Memory()
        assert load_default(mem) == 6
        assert mem.words()[:6] == list(DEFAULT_PROGRAM)
        assert mem.words()[6:] == ["00000000"] * 26

    def test_from_file(self, tmp_path):
        path = tmp_path / "data"
        path.write_text("01000011\n\n01101010\nbogus\n00000000\n")
        mem = Memory()
        assert load_from_file(mem, path) == 3
        assert mem.read(0) == "01000011"
        assert mem.read(1) == "01101010"
        assert mem.read(2) == "00000000"

    def test_undecodable_bytes_skip_their_line(self, tmp_path):
        path = tmp_path / "data"
        path.write_bytes(b"01000101\n\xff\xfe bad\n00000000\n")
        mem = Memory()
        assert load_from_file(mem, path) == 2
        assert mem.read(0) == "01000101"
        assert mem.read(1) == "00000000"

    def test_missing_file_is_fatal(self, tmp_path):
        mem = Memory()
        with pytest.raises(ProgramLoadError) as exc:
            load_from_file(mem, tmp_path / "nope")
        assert exc.value.path == tmp_path / "nope"
        assert mem.words() == ["00000000"] * 32


class TestConsole:
    def test_reads_until_quit(self):
        mem = Memory()
        n = read_from_console(mem, _feed(["0100 0101", "01111110", "quit", "11111111"]),
                              print_fn=lambda s: None)
        assert n == 2
        assert mem.read(0) == "01000101"
        assert mem.read(1) == "01111110"
        assert mem.read(2) == "00000000"

    def test_invalid_entry_retries_same_address(self):
        mem = Memory()
        prompts = []

        def _input(prompt):
            prompts.append(prompt)
            return ["abc", "0101", "00000011", "quit"][len(prompts) - 1]

        n = read_from_console(mem, _input, print_fn=lambda s: None)
        assert n == 1
        assert mem.read(0) == "00000011"
        assert prompts[:3] == ["Memory address 0:"] * 3
        assert prompts[3] == "Memory address 1:"

    def test_end_of_input_stops(self):
        mem = Memory()
        assert read_from_console(mem, _feed(["00000001"]), print_fn=lambda s: None) == 1

    def test_stops_when_memory_full(self):
        mem = Memory()
        n = read_from_console(mem, _feed(["00000001"] * 40), print_fn=lambda s: None)
        assert n == 32
