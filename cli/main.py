from __future__ import annotations

import argparse
import sys
from typing import Sequence

from cli.output import print_diff, print_diff_result, print_rewrite_result
from cli.runner import CliSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fastwrite",
        description="Rewrite LaTeX sections with an LLM and review sentence-level diffs.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    diff = sub.add_parser("diff", help="Sentence-level diff between two text files")
    diff.add_argument("original")
    diff.add_argument("revised")
    diff.add_argument("--json-out", default=None)
    diff.add_argument("--keep-comments", action="store_true")
    diff.add_argument("--words", action="store_true", help="Highlight word changes in rewritten sentences")
    diff.add_argument("--plain", action="store_true", help="Show sentences without LaTeX markup")
    diff.add_argument("--no-color", action="store_true")

    rewrite = sub.add_parser("rewrite", help="Rewrite a section file in place using the LLM")
    rewrite.add_argument("source")
    rewrite.add_argument("--prompt", required=True, help="File with the rewrite requirements")
    rewrite.add_argument("-k", "--api-key", default=None, help="Overrides OPENAI_API_KEY")
    rewrite.add_argument("--system-prompt", default=None)
    rewrite.add_argument("--backup-dir", default=None)
    rewrite.add_argument("--diff-dir", default=None)
    rewrite.add_argument("--keep-comments", action="store_true")
    rewrite.add_argument("-v", "--verbose", action="store_true", help="Print system prompt and user content")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    session = CliSession()

    try:
        if args.command == "diff":
            result = session.run_diff(
                args.original,
                args.revised,
                keep_comments=args.keep_comments,
                json_out=args.json_out,
            )
            print_diff(
                result["ops"],
                color=not args.no_color and sys.stdout.isatty(),
                plain=args.plain,
                words=args.words,
            )
            print_diff_result(result)
            return 0
        if args.command == "rewrite":
            result = session.run_rewrite(
                args.source,
                args.prompt,
                api_key=args.api_key,
                system_prompt_path=args.system_prompt,
                backup_dir=args.backup_dir,
                diff_dir=args.diff_dir,
                keep_comments=args.keep_comments,
                verbose=args.verbose,
            )
            print_rewrite_result(result)
            return 0

        parser.error(f"Unknown command: {args.command}")
        return 2
    except Exception as exc:
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
