#!/usr/bin/env python3
"""
icvm: Intcode VM command-line driver

Usage:
    python icvm.py run <program> [--input N ...] [--patch ADDR=VALUE ...] [--dump-memory]
    python icvm.py disasm <program> [--start ADDR] [--count N]
    python icvm.py amplify <program> [--feedback] [--phases 0,1,2,3,4] [--workers N]
    python icvm.py paint <program> [--start-color 0|1]
    python icvm.py gravity <program> [--noun N --verb V | --target T]

Global options (before the subcommand):
    --profile default|debug|parallel   run profile from intcode.config
    -v / -vv                           INFO / DEBUG console logging
    --trace                            print the instruction trace (run only)
    --log-file PATH                    write DEBUG log to PATH

Exit codes: 0 ok, 1 program / input error, 2 internal error.

Examples:
    python icvm.py run day5.txt --input 5
    python icvm.py amplify day7.txt --feedback --workers 4
    python icvm.py gravity day2.txt --target 19690720
"""

import argparse
import logging
import sys

from intcode import (
    __version__, IntcodeError, IntcodeMachine, ProgramFormatError,
    listing, load_program,
)
from intcode.config import ALARM_NOUN, ALARM_VERB, GRAVITY_TARGET, RUN_PROFILES
from intcode.drivers import best_phases, find_noun_verb, paint_hull, run_chain, run_feedback, run_with
from intcode.log_setup import setup_logging, verbosity_to_level

log = logging.getLogger("intcode.cli")


def parse_int_list(value: str) -> list:
    """Parse '0,1,2' into [0, 1, 2]."""
    try:
        return [int(v) for v in value.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers: {value!r}")


def parse_patch(value: str) -> tuple:
    """Parse 'ADDR=VALUE' into (addr, value)."""
    addr, sep, val = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected ADDR=VALUE: {value!r}")
    try:
        return int(addr), int(val)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected integers in ADDR=VALUE: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="icvm",
        description="Intcode virtual machine driver",
        epilog="Profiles: " + ", ".join(RUN_PROFILES.keys()),
    )
    parser.add_argument("--profile", default="default", choices=list(RUN_PROFILES.keys()),
                        help="Run profile (default: default)")
    parser.add_argument("--verbose", "-v", action="count", default=None,
                        help="Increase logging verbosity (-v, -vv)")
    parser.add_argument("--trace", action="store_true", default=None,
                        help="Print the instruction trace after a run")
    parser.add_argument("--log-file", help="Write a DEBUG log to this file")
    parser.add_argument("--version", action="version", version=f"icvm {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("run", help="Run a program with scripted input")
    p.add_argument("program", help="Program file (comma-separated integers)")
    p.add_argument("--input", "-i", type=int, action="append", default=[],
                   help="Input value; repeat for several")
    p.add_argument("--patch", type=parse_patch, action="append", default=[],
                   help="Set memory ADDR=VALUE before running")
    p.add_argument("--dump-memory", action="store_true",
                   help="Print final memory image")

    p = sub.add_parser("disasm", help="Disassemble a program")
    p.add_argument("program")
    p.add_argument("--start", type=int, default=0)
    p.add_argument("--count", type=int, default=None)

    p = sub.add_parser("amplify", help="Run an amplifier chain")
    p.add_argument("program")
    p.add_argument("--feedback", action="store_true", help="Feedback loop mode")
    p.add_argument("--phases", type=parse_int_list, default=None,
                   help="Fixed phase sequence; omit to search all orderings")
    p.add_argument("--workers", type=int, default=None,
                   help="Worker processes for the phase search")

    p = sub.add_parser("paint", help="Run the hull-painting robot")
    p.add_argument("program")
    p.add_argument("--start-color", type=int, choices=(0, 1), default=0)

    p = sub.add_parser("gravity", help="Noun/verb patch run or search")
    p.add_argument("program")
    p.add_argument("--noun", type=int, default=None)
    p.add_argument("--verb", type=int, default=None)
    p.add_argument("--target", type=int, default=None,
                   help=f"Search noun/verb for this result (e.g. {GRAVITY_TARGET})")

    return parser


def cmd_run(args, trace: bool) -> int:
    vm = IntcodeMachine(load_program(args.program))
    for addr, value in args.patch:
        vm.mem[addr] = value
    vm.enable_trace(trace)
    try:
        vm.run_with_inputs(args.input)
    finally:
        if trace:
            print(vm.get_trace(), file=sys.stderr)
    print(",".join(str(v) for v in vm.output))
    if args.dump_memory:
        print(",".join(str(v) for v in vm.memory))
    return 0


def cmd_disasm(args) -> int:
    print(listing(load_program(args.program), args.start, args.count))
    return 0


def cmd_amplify(args, workers: int) -> int:
    image = load_program(args.program)
    if args.phases is not None:
        runner = run_feedback if args.feedback else run_chain
        print(runner(image, args.phases))
        return 0
    signal, phases = best_phases(image, feedback=args.feedback, workers=workers)
    print(f"{signal} {','.join(str(p) for p in phases)}")
    return 0


def cmd_paint(args) -> int:
    painted, image = paint_hull(load_program(args.program), args.start_color)
    print(painted)
    if image:
        print(image)
    return 0


def cmd_gravity(args) -> int:
    image = load_program(args.program)
    if args.target is not None:
        found = find_noun_verb(image, args.target)
        if found is None:
            print(f"No noun/verb produces {args.target}", file=sys.stderr)
            return 1
        noun, verb = found
        print(100 * noun + verb)
        return 0
    noun = ALARM_NOUN if args.noun is None else args.noun
    verb = ALARM_VERB if args.verb is None else args.verb
    print(run_with(image, noun, verb))
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    profile = RUN_PROFILES[args.profile]
    verbose = profile["verbose"] if args.verbose is None else args.verbose
    trace = profile["trace"] if args.trace is None else args.trace
    workers = profile["workers"]
    if getattr(args, "workers", None) is not None:
        workers = args.workers

    setup_logging(console_level=verbosity_to_level(verbose), log_file=args.log_file)
    log.debug("command=%s profile=%s", args.command, args.profile)

    try:
        if args.command == "run":
            return cmd_run(args, trace)
        if args.command == "disasm":
            return cmd_disasm(args)
        if args.command == "amplify":
            return cmd_amplify(args, workers)
        if args.command == "paint":
            return cmd_paint(args)
        if args.command == "gravity":
            return cmd_gravity(args)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except ProgramFormatError as e:
        print(f"Program format error: {e}", file=sys.stderr)
        return 1
    except IntcodeError as e:
        print(f"Intcode error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Internal error: {e}", file=sys.stderr)
        log.exception("unexpected failure")
        return 2
    parser.error(f"unknown command {args.command}")


if __name__ == "__main__":
    sys.exit(main())
