"""
acc8kit CLI smoke tests.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json
import logging

import pytest
import acc8kit
from rich.logging import RichHandler

from acc8.log_setup import setup_logging


class TestModes:
    def test_no_mode_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc:
            acc8kit.main([])
        assert exc.value.code != 0

    def test_modes_are_exclusive(self):
        with pytest.raises(SystemExit) as exc:
            acc8kit.main(["-d", "-c"])
        assert exc.value.code != 0

    def test_default_program_report(self, capsys):
        assert acc8kit.main(["-d"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Memory contents")
        assert "00: 01000101" in out
        assert "Contents of memory converted to assembly language" in out
        assert "03: ADD 30" in out
        assert "31: 18" in out
        assert out.rstrip().endswith("AC: 18")

    def test_file_mode(self, tmp_path, capsys):
        path = tmp_path / "prog.txt"
        path.write_text("01000011\n01101010\n00000000\n")
        assert acc8kit.main(["-f", str(path)]) == 0
        out = capsys.readouterr().out
        assert "10: 00000011" in out
        assert "AC: 3" in out

    def test_missing_file(self, tmp_path):
        assert acc8kit.main(["-f", str(tmp_path / "missing")]) == acc8kit.EXIT_LOAD_ERROR

    def test_console_mode(self, monkeypatch, capsys):
        entries = iter(["01000111", "quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(entries))
        assert acc8kit.main(["-c"]) == 0
        assert "AC: 7" in capsys.readouterr().out


class TestOptions:
    def test_step_budget(self, tmp_path, capsys):
        path = tmp_path / "loop"
        path.write_text("11000000\n")     # JMP 0
        assert acc8kit.main(["-f", str(path), "--max-steps", "50"]) == acc8kit.EXIT_NOT_HALTED

    def test_json_report(self, capsys):
        assert acc8kit.main(["-d", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["stop_reason"] == "HALT"
        assert data["ac_value"] == 18
        assert data["sign_mode"] == "twos"
        assert data["disassembly"][0] == "LDC 5"
        assert len(data["memory"]) == 32

    def test_legacy_sign_mode(self, tmp_path, capsys):
        path = tmp_path / "prog"
        path.write_text("01011101\n00000000\n")   # LDC 11101 / HLT
        assert acc8kit.main(["-f", str(path), "--sign-mode", "legacy"]) == 0
        out = capsys.readouterr().out
        assert "00: LDC 29" in out
        assert "AC: 29" in out

    def test_trace(self, capsys):
        assert acc8kit.main(["-d", "--trace"]) == 0
        out = capsys.readouterr().out
        assert "Trace" in out
        assert "05: HLT 00000" in out

    def test_config_from_args(self):
        args = acc8kit.build_parser().parse_args(["-f", "--max-steps", "9", "--sign-mode", "legacy"])
        assert args.file == "data"
        cfg = acc8kit.config_from_args(args)
        assert cfg.max_steps == 9
        assert cfg.sign_mode.value == "legacy"


class TestLogging:
    def teardown_method(self):
        for h in list(logging.getLogger("acc8").handlers):
            logging.getLogger("acc8").removeHandler(h)
            h.close()

    def _console_handler(self):
        handlers = [h for h in logging.getLogger("acc8").handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        return handlers[0]

    def test_log_file_gets_debug_lines(self, tmp_path, capsys):
        assert acc8kit.main(["-d"]) == 0
        log_path = tmp_path / "logs" / "run.log"
        assert acc8kit.main(["-d", "--log-file", str(log_path)]) == 0
        text = log_path.read_text(encoding="utf-8")
        assert "| DEBUG   |" in text
        assert "HLT at 05 after 6 steps" in text

    def test_quiet_and_verbose_levels(self, capsys):
        acc8kit.main(["-d", "-q"])
        assert self._console_handler().level == logging.ERROR
        acc8kit.main(["-d", "-v"])
        assert self._console_handler().level == logging.INFO
        acc8kit.main(["-d", "-vv"])
        assert self._console_handler().level == logging.DEBUG
        acc8kit.main(["-d"])
        assert self._console_handler().level == logging.WARNING

    def test_plain_console_handler(self):
        log = setup_logging("acc8", console_level=logging.INFO, rich_console=False)
        assert len(log.handlers) == 1
        handler = log.handlers[0]
        assert not isinstance(handler, RichHandler)
        assert isinstance(handler, logging.StreamHandler)
        assert handler.level == logging.INFO
