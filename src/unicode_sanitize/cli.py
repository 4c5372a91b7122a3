# src/unicode_sanitize/cli.py
"""
Demonstration harness for the sanitizer.

Usage:
    # Sanitize a file (or stdin) to stdout
    unicode-sanitize scrub notes.txt --allow-newlines
    printf 'a\\x07b' | unicode-sanitize scrub --debug

    # Check that every evil codepoint is caught
    unicode-sanitize audit
    unicode-sanitize audit --range surrogates

    # Show what happens to each character of a string
    unicode-sanitize explain --unescape 'BAD:\\u0007 ok:\\u2318'

    # Exercise the numeric helpers
    unicode-sanitize parse int32 99999999999

SANITIZE_* environment variables (see config.options_from_env) are applied
before the command-line flags.

Exit codes:
    0 - Success
    1 - Invalid input, leaked codepoints, or a parse error
"""

import argparse
import os
import sys
from dataclasses import replace
from types import SimpleNamespace

from unicode_sanitize.config import DEBUG_MARKER, debug_options, default_options, options_from_env
from unicode_sanitize.models import Err, Options, SanitizeFailure
from unicode_sanitize.numeric import parse_float64, parse_int32, parse_int64
from unicode_sanitize.observability import SanitizeRunEvent, Timer, emit_event
from unicode_sanitize.patterns import EVIL_RANGES, encode_codepoint
from unicode_sanitize.sanitizer import sanitize, sanitize_or_raise
from unicode_sanitize.utils import describe_codepoint, log_error

PARSERS = {
    "int32": parse_int32,
    "int64": parse_int64,
    "float64": parse_float64,
}


def build_options(args: argparse.Namespace, env: object | None = None) -> Options:
    """Combine preset, environment overrides and command-line flags."""
    base = debug_options() if getattr(args, "debug", False) else default_options()
    if env is None:
        env = SimpleNamespace(**os.environ)
    options = options_from_env(env, base)
    if getattr(args, "strip_reserved", False):
        options = replace(options, strip_reserved=True)
    if getattr(args, "allow_newlines", False):
        options = replace(options, allow_newlines=True)
    return options


def _read_input(path: str | None) -> bytes:
    if path is None or path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def cmd_scrub(args: argparse.Namespace, event: SanitizeRunEvent) -> int:
    options = build_options(args)
    event.strip_reserved = options.strip_reserved
    event.allow_newlines = options.allow_newlines
    event.debug = args.debug

    try:
        data = _read_input(args.file)
    except OSError as e:
        log_error("input_read_error", e, path=args.file)
        event.fail(type(e).__name__)
        return 1
    event.input_size_bytes = len(data)

    result = sanitize(data, options)
    if isinstance(result, Err):
        log_error("sanitize_failed", SanitizeFailure(result.error), path=args.file)
        event.fail(result.error.name)
        return 1

    output = result.value.encode("utf-8")
    sys.stdout.flush()
    sys.stdout.buffer.write(output)
    event.output_size_bytes = len(output)
    return 0


def cmd_audit(args: argparse.Namespace, event: SanitizeRunEvent) -> int:
    options = debug_options()
    event.debug = True
    ranges = [r for r in EVIL_RANGES if not args.range or r.name in args.range]

    for byte_range in ranges:
        leaked = 0
        for cp in byte_range.codepoints():
            event.codepoints_checked += 1
            result = sanitize(encode_codepoint(cp), options)
            if isinstance(result, Err):
                event.codepoints_rejected += 1
            elif result.value != DEBUG_MARKER:
                leaked += 1
                print(f"{describe_codepoint(cp)} {byte_range.name} {result.value!r}")
        event.codepoints_leaked += leaked
        status = "PASS" if leaked == 0 else "FAIL"
        print(
            f"  [{status}] {byte_range.name} "
            f"{describe_codepoint(byte_range.first)}..{describe_codepoint(byte_range.last)}"
        )

    print()
    print(f"Checked:  {event.codepoints_checked}")
    print(f"Rejected: {event.codepoints_rejected} (not well-formed UTF-8)")
    print(f"Leaked:   {event.codepoints_leaked}")

    if event.codepoints_leaked:
        event.fail("CodepointLeak")
        return 1
    return 0


def cmd_explain(args: argparse.Namespace, event: SanitizeRunEvent) -> int:
    options = debug_options() if args.debug else default_options()
    event.debug = args.debug
    text = args.text
    if args.unescape:
        try:
            text = text.encode("latin-1", "backslashreplace").decode("unicode_escape")
        except UnicodeDecodeError as e:
            log_error("explain_unescape_error", e, text=args.text)
            event.fail(type(e).__name__)
            return 1

    # str input always encodes, so neither a character nor the whole text can
    # fail validation
    offset = 0
    for char in text:
        shown = repr(sanitize_or_raise(char, options))
        print(f"{describe_codepoint(ord(char))} at byte {offset} becomes {shown}")
        offset += len(char.encode("utf-8", "surrogatepass"))

    event.input_size_bytes = offset
    sanitized = sanitize_or_raise(text, options)
    event.output_size_bytes = len(sanitized.encode("utf-8"))
    print(sanitized)
    return 0


def cmd_parse(args: argparse.Namespace, event: SanitizeRunEvent) -> int:
    result = PARSERS[args.kind](args.value)
    if isinstance(result, Err):
        event.fail(result.error.name)
        print(result.error.name)
        return 1
    print(result.value)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unicode-sanitize",
        description="Strip unsafe codepoints from UTF-8 text.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scrub = subparsers.add_parser("scrub", help="Sanitize a file or stdin to stdout")
    scrub.add_argument("file", nargs="?", help="Input file (default: stdin)")
    scrub.add_argument(
        "--strip-reserved",
        action="store_true",
        help="Also strip control, private-use and unassigned codepoints",
    )
    scrub.add_argument(
        "--allow-newlines",
        action="store_true",
        help="Keep line breaks as \\n instead of collapsing them",
    )
    scrub.add_argument(
        "--debug", action="store_true", help="Replace matches with a visible marker"
    )
    scrub.set_defaults(handler=cmd_scrub)

    audit = subparsers.add_parser("audit", help="Verify every evil codepoint is replaced")
    audit.add_argument(
        "--range",
        action="append",
        choices=[r.name for r in EVIL_RANGES],
        help="Only audit the named range (repeatable)",
    )
    audit.set_defaults(handler=cmd_audit)

    explain = subparsers.add_parser("explain", help="Show how each character is sanitized")
    explain.add_argument("text", help="Text to explain")
    explain.add_argument(
        "--unescape", action="store_true", help="Interpret \\uXXXX and \\xXX escapes first"
    )
    explain.add_argument(
        "--no-debug",
        dest="debug",
        action="store_false",
        help="Use the default preset instead of the debug marker",
    )
    explain.set_defaults(handler=cmd_explain)

    parse = subparsers.add_parser("parse", help="Parse a decimal number")
    parse.add_argument("kind", choices=sorted(PARSERS))
    parse.add_argument("value")
    parse.set_defaults(handler=cmd_parse)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    event = SanitizeRunEvent(command=args.command)
    with Timer() as timer:
        exit_code = args.handler(args, event)
    event.wall_time_ms = timer.elapsed_ms
    emit_event(event)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
