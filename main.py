#!/usr/bin/env python3
import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from auditor.config.settings import get_settings
from auditor.schemas.audit import AuditResult
from auditor.service import analyze_translation
from shared.utils.logging import configure_logging


def _read_text(inline: Optional[str], path: Optional[str], label: str) -> str:
    if path:
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"{label} file not found: {path}")
        if not file_path.is_file():
            raise IsADirectoryError(f"{label} path is not a file: {path}")
        return file_path.read_text(encoding="utf-8")
    return inline or ""


def format_report(result: AuditResult) -> str:
    """Render an audit as plain text: feedback, then the alignment table."""
    lines = ["FEEDBACK", "--------", result.feedback.strip(), "", "WORD BREAKDOWN", "--------------"]
    if not result.word_breakdown:
        lines.append("(none)")
        return "\n".join(lines)

    width_target = max(len(m.target_word) for m in result.word_breakdown)
    width_source = max(len(m.source_equivalent) for m in result.word_breakdown)
    for mapping in result.word_breakdown:
        lines.append(
            f"{mapping.target_word.ljust(width_target)}  "
            f"{mapping.source_equivalent.ljust(width_source)}  "
            f"{mapping.context}"
        )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Audit a translation against its English source with Gemini.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--source", type=str, help="English source text.")
    source.add_argument("--source-file", type=str, help="Path to a UTF-8 file with the English source text.")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--target", type=str, help="Translated text to audit.")
    target.add_argument("--target-file", type=str, help="Path to a UTF-8 file with the translated text.")
    parser.add_argument("--language", type=str, required=True, help="Name of the target language, e.g. Spanish.")
    parser.add_argument("--api-key", type=str, default=None, help="Gemini API key (defaults to GEMINI_API_KEY).")
    parser.add_argument("--model", type=str, default=None, help="Override the configured Gemini model.")
    parser.add_argument("--json", action="store_true", help="Print the audit as JSON.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[list] = None) -> int:
    """
    Run one audit from the command line.

    Returns 0 on success, 1 when the audit ends in an error message and
    2 for unreadable input files.
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.model:
        settings = settings.model_copy(update={"model_name": args.model})
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        source_text = _read_text(args.source, args.source_file, "Source")
        target_text = _read_text(args.target, args.target_file, "Target")
    except (OSError, UnicodeDecodeError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    result = asyncio.run(
        analyze_translation(source_text, target_text, args.language, args.api_key, settings=settings)
    )

    if isinstance(result, str):
        print(result, file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_wire(), ensure_ascii=False, indent=2))
    else:
        print(format_report(result))
    return 0


if __name__ == '__main__':
    sys.exit(main())
