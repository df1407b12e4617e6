#!/usr/bin/env python3
# =============================================================================
# WHOWON v1.0.0 -- COMMAND-LINE RUNNER
# File:   whowon/run_selection.py
# =============================================================================
#
# Usage:
#   python -m whowon.run_selection --input entries.txt --target 10 --winners 1
#   cat entries.txt | whowon-pick --target 7 --exact-match
#
# Exit codes:
#   0 -- Winners selected (possibly none).
#   1 -- Request rejected (invalid field or empty input).
#   2 -- Input file could not be read.
# =============================================================================

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, TextIO

from whowon.core.config import (
    DuplicateMode,
    SelectionPreset,
    SelectionRequest,
    TieMode,
    apply_preset,
)
from whowon.core.logging_layer import EventFilter, EventLogger
from whowon.orchestrator.pipeline import SelectionResult, select_winners


def _separator(char: str = "=", width: int = 72) -> str:
    return char * width


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Pick winners closest to a target number.",
        prog="python -m whowon.run_selection",
    )
    parser.add_argument(
        "--input",
        default="-",
        help="File with one 'name number' entry per line ('-' reads stdin).",
    )
    parser.add_argument("--target", default=None, help="Winning number.")
    parser.add_argument(
        "--winners",
        default=None,
        help="Number of winners. Ignored with --exact-match.",
    )
    parser.add_argument(
        "--tie-mode",
        choices=[m.value for m in TieMode],
        default=None,
        help="Include every entry tied with the last winner, or stop at the count.",
    )
    parser.add_argument(
        "--duplicate-mode",
        choices=[m.value for m in DuplicateMode],
        default=None,
        help="Which occurrence of a repeated name survives.",
    )
    parser.add_argument(
        "--exact-match",
        action="store_true",
        default=False,
        help="Only entries whose number equals the target.",
    )
    parser.add_argument(
        "--whitelist",
        default="",
        help="Comma-separated names exempt from duplicate filtering.",
    )
    parser.add_argument(
        "--whitelist-multiline",
        action="store_true",
        default=False,
        help="Also split the whitelist on newlines.",
    )
    parser.add_argument(
        "--case-insensitive-whitelist",
        action="store_true",
        default=False,
        help="Match whitelist names ignoring case.",
    )
    parser.add_argument(
        "--no-message-filter",
        action="store_true",
        default=False,
        help="Show full names instead of 'First L' short names.",
    )
    parser.add_argument(
        "--preset",
        choices=[p.value for p in SelectionPreset],
        default=None,
        help="Fill winner count, tie and duplicate modes from a preset.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the result as a JSON document.",
    )
    parser.add_argument(
        "--audit",
        action="store_true",
        default=False,
        help="Print the pipeline audit events to stderr.",
    )
    return parser.parse_args(argv)


def build_request(args: argparse.Namespace) -> SelectionRequest:
    """
    Translate parsed arguments into a SelectionRequest.

    Preset values are applied first; explicit flags override them.
    """
    request = SelectionRequest.default()
    if args.preset is not None:
        request = apply_preset(request, args.preset)
    overrides = {
        "target": args.target,
        "exact_match": args.exact_match,
        "whitelist": args.whitelist,
        "message_filter_enabled": not args.no_message_filter,
        "whitelist_multiline": args.whitelist_multiline,
        "whitelist_case_sensitive": not args.case_insensitive_whitelist,
    }
    if args.winners is not None:
        overrides["winner_count"] = args.winners
    if args.tie_mode is not None:
        overrides["tie_mode"] = TieMode(args.tie_mode)
    if args.duplicate_mode is not None:
        overrides["duplicate_mode"] = DuplicateMode(args.duplicate_mode)
    return replace(request, **overrides)


def _read_input(path: str, stdin: TextIO) -> str:
    if path == "-":
        return stdin.read()
    return Path(path).read_text(encoding="utf-8")


def result_to_dict(result: SelectionResult) -> dict:
    """JSON-serialisable view of a SelectionResult."""
    return {
        "ok": result.ok,
        "timestamp": result.timestamp.isoformat() if result.timestamp else None,
        "winners": [
            {
                "display_name": w.display_name,
                "value": w.value,
                "original_line": w.original_line,
                "distance": w.distance,
            }
            for w in result.winners
        ],
        "errors": [
            {"field": e.field_name, "message": e.message} for e in result.errors
        ],
        "warnings": [
            {"field": e.field_name, "message": e.message} for e in result.warnings
        ],
        "dropped_lines": list(result.dropped_line_numbers),
    }


def render_text(result: SelectionResult) -> str:
    """Human-readable rendering of a SelectionResult."""
    if not result.ok:
        lines = ["Selection rejected:"]
        lines.extend("  [" + e.field_name + "] " + e.message for e in result.errors)
        return "\n".join(lines)

    report = result.report
    lines = [
        "Timestamp: " + result.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
        _separator(),
        "Winners",
        _separator("-"),
        report.winners_text or "No winners.",
        _separator(),
        "Original Messages",
        _separator("-"),
        report.original_text,
        _separator(),
        "Name(s) & Difference",
        _separator("-"),
        report.differences_text,
    ]
    if result.dropped_line_numbers:
        lines.append(_separator())
        lines.append(
            "Ignored lines without a number: "
            + ", ".join(str(n) for n in result.dropped_line_numbers)
        )
    return "\n".join(lines)


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    args = _parse_args(argv)
    try:
        raw_input = _read_input(args.input, stdin)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Cannot read input {args.input!r}: {exc}", file=sys.stderr)
        return 2

    logger = EventLogger()
    result = select_winners(raw_input, build_request(args), logger=logger)

    if args.audit:
        for event in logger.query_events(EventFilter(run_id=result.run_id)):
            print(
                "{} {} {} {}".format(
                    event.id, event.type, event.digest[:12],
                    json.dumps(event.data, sort_keys=True),
                ),
                file=sys.stderr,
            )

    if args.json:
        stdout.write(json.dumps(result_to_dict(result), indent=2) + "\n")
    else:
        stdout.write(render_text(result) + "\n")
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
