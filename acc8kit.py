#!/usr/bin/env python3
"""
acc8kit — ACC8 accumulator machine emulator + disassembler
===========================================================

Loads a program into the 32-word memory bank, runs it until HLT, then
prints the memory contents, the memory disassembled, and the AC.

Usage:
    python acc8kit.py (-d | -f [PATH] | -c) [options]
    python acc8kit.py --help

Program source (exactly one is required):
    -d, --default      built-in demo program
    -f, --file [PATH]  one 8-bit word per line (default: ./data)
    -c, --console      type the words in, 'quit' to finish

Examples:
    python acc8kit.py -d
    python acc8kit.py -f countdown.txt --max-steps 1000
    python acc8kit.py -f --sign-mode legacy --format json
    python acc8kit.py -c --trace -v

Exit status:
    0  program halted
    1  program source could not be read
    2  usage error
    3  stopped before HLT (step budget, breakpoint or illegal word)
"""

import argparse
import json
import logging
import sys

from acc8 import __version__
from acc8.config import DEFAULT_PROGRAM_FILE, EmulatorConfig, SignMode
from acc8.disasm import disassemble_memory, format_memory_dump
from acc8.emu import Acc8Emulator, StopReason
from acc8.errors import ProgramLoadError
from acc8.loader import load_default, load_from_file, read_from_console
from acc8.log_setup import setup_logging

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_NOT_HALTED = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="acc8kit",
        description="ACC8 emulator: load a program, run it to HLT, print memory and disassembly",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"acc8kit {__version__}")

    # ── program source ───────────────────────────────────────────────────
    src = parser.add_mutually_exclusive_group(required=True)
    src.add_argument("-d", "--default", action="store_true",
                     help="Use the built-in default program")
    src.add_argument("-f", "--file", nargs="?", const=DEFAULT_PROGRAM_FILE, default=None,
                     metavar="PATH",
                     help=f"Read program from file (default: {DEFAULT_PROGRAM_FILE})")
    src.add_argument("-c", "--console", action="store_true",
                     help="Read program from the console")

    # ── run options ──────────────────────────────────────────────────────
    parser.add_argument("--max-steps", type=int, default=None, metavar="N",
                        help="Stop after N instructions (default: run until HLT)")
    parser.add_argument("--sign-mode", choices=[m.value for m in SignMode],
                        default=SignMode.TWOS_COMPLEMENT.value,
                        help="Signed interpretation: twos (default) or legacy")
    parser.add_argument("--trace", action="store_true",
                        help="Print an instruction trace after the run")

    # ── output / logging ─────────────────────────────────────────────────
    parser.add_argument("--format", choices=["text", "json"], default="text",
                        help="Report format (default: text)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="More log output (-v info, -vv debug)")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only log errors")
    parser.add_argument("--log-file", default=None, metavar="PATH",
                        help="Also write a full DEBUG log to PATH")
    return parser


def _console_level(args) -> int:
    if args.quiet:
        return logging.ERROR
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    return logging.WARNING


def config_from_args(args) -> EmulatorConfig:
    return EmulatorConfig(
        sign_mode=SignMode(args.sign_mode),
        max_steps=args.max_steps,
        trace=args.trace,
    )


def load_program(emu: Acc8Emulator, args) -> int:
    if args.default:
        return load_default(emu.mem)
    if args.console:
        return read_from_console(emu.mem)
    return load_from_file(emu.mem, args.file)


# ═════════════════════════════════════════════════════════════════════════════
# REPORTING
# ═════════════════════════════════════════════════════════════════════════════

def format_text_report(emu: Acc8Emulator) -> str:
    listing = disassemble_memory(emu.mem, emu.config.sign_mode)
    lines = ["Memory contents", "", format_memory_dump(emu.mem.words()),
             "Contents of memory converted to assembly language", ""]
    lines.extend(d.format() for d in listing)
    lines.append("")
    lines.append(f"AC: {emu.ac_value}")
    return "\n".join(lines)


def format_json_report(emu: Acc8Emulator) -> str:
    data = emu.report().to_dict()
    data["sign_mode"] = emu.config.sign_mode.value
    data["disassembly"] = [d.text for d in disassemble_memory(emu.mem, emu.config.sign_mode)]
    return json.dumps(data, indent=2)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_steps is not None and args.max_steps < 0:
        parser.error("--max-steps must be >= 0")

    log = setup_logging("acc8", console_level=_console_level(args), log_file=args.log_file)

    emu = Acc8Emulator(config_from_args(args))
    try:
        load_program(emu, args)
    except ProgramLoadError as e:
        log.error("%s", e)
        return EXIT_LOAD_ERROR

    reason = emu.run()

    if args.format == "json":
        print(format_json_report(emu))
    else:
        print(format_text_report(emu))
    if args.trace:
        print("\nTrace\n")
        print(emu.get_trace())

    if reason is not StopReason.HALT:
        log.warning("Program did not halt: %s", reason.value)
        return EXIT_NOT_HALTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
