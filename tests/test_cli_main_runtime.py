from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import Mock, patch

from cli.main import build_parser, main
from cli.runner import CliSession


def _run(argv: list[str], session: CliSession | None = None) -> tuple[int, str]:
    buf = io.StringIO()
    session = session or CliSession(environ={}, show_progress=False)
    with patch("cli.main.CliSession", return_value=session), redirect_stdout(buf):
        code = main(argv)
    return code, buf.getvalue()


class CliMainRuntimeTests(unittest.TestCase):
    def test_parser_requires_command(self) -> None:
        with self.assertRaises(SystemExit), redirect_stdout(io.StringIO()):
            build_parser().parse_args([])

    def test_diff_prints_ops_and_writes_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.tex").write_text("The system is fast. It works well.", encoding="utf-8")
            (root / "b.tex").write_text(
                "The system is fast. It works extremely well. Users are happy.", encoding="utf-8"
            )
            json_out = root / "out" / "diff.json"

            code, out = _run(["diff", str(root / "a.tex"), str(root / "b.tex"), "--json-out", str(json_out)])

            self.assertEqual(code, 0)
            lines = out.splitlines()
            self.assertEqual(
                lines[:4],
                [
                    "  The system is fast.",
                    "- It works well.",
                    "+ It works extremely well.",
                    "+ Users are happy.",
                ],
            )
            self.assertIn("Sentences: 1 unchanged, 2 added, 1 removed", out)
            self.assertIn(f"JSON: {json_out}", out)

            payload = json.loads(json_out.read_text(encoding="utf-8"))
            self.assertEqual(payload["original"], "a.tex")
            self.assertEqual(len(payload["diff"]), 4)

    def test_diff_word_mode_marks_changed_words(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.tex").write_text("Keep this. It works well.", encoding="utf-8")
            (root / "b.tex").write_text("Keep this. It works extremely well.", encoding="utf-8")

            code, out = _run(["diff", str(root / "a.tex"), str(root / "b.tex"), "--words"])

            self.assertEqual(code, 0)
            self.assertIn("~ It works {+extremely+} well.", out)

    def test_diff_missing_file_reports_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, out = _run(["diff", str(Path(tmp) / "nope.tex"), str(Path(tmp) / "nope2.tex")])
        self.assertEqual(code, 1)
        self.assertTrue(out.startswith("Error: Original file does not exist"))

    def test_rewrite_without_api_key_keeps_section(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "0-intro.tex"
            source.write_text("We made X. It is good.\n", encoding="utf-8")
            prompt = root / "0-intro.md"
            prompt.write_text("- tighten\n", encoding="utf-8")

            code, out = _run(["rewrite", str(source), "--prompt", str(prompt)])

            self.assertEqual(code, 0)
            self.assertIn("No API key configured; section left unchanged.", out)
            self.assertEqual(source.read_text(encoding="utf-8"), "We made X. It is good.\n")
            self.assertEqual(len(list((root / "backups").glob("0-intro.tex.*.bak"))), 1)
            self.assertEqual(len(list((root / "diffs").glob("0-intro.tex.*.diff.json"))), 1)

    def test_rewrite_with_api_key_calls_llm(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "0-intro.tex"
            source.write_text("We made Xyz. It is good.", encoding="utf-8")
            prompt = root / "0-intro.md"
            prompt.write_text("- tighten\n", encoding="utf-8")
            system = root / "system.md"
            system.write_text("Custom editor.", encoding="utf-8")

            mock_response = Mock()
            mock_response.json.return_value = {
                "choices": [{"message": {"content": "```latex\nWe present Xyz. It is good.\n```"}}]
            }
            with patch("nlp.llm.llm_client.requests.post", return_value=mock_response) as post:
                code, out = _run(
                    [
                        "rewrite",
                        str(source),
                        "--prompt",
                        str(prompt),
                        "--api-key",
                        "sk-test",
                        "--system-prompt",
                        str(system),
                        "--verbose",
                    ]
                )

            self.assertEqual(code, 0, out)
            self.assertIn("Section written successfully!", out)
            self.assertIn("=== SYSTEM PROMPT ===\nCustom editor.", out)
            self.assertIn("Sentences: 1 unchanged, 1 added, 1 removed", out)
            self.assertEqual(source.read_text(encoding="utf-8"), "We present Xyz. It is good.")

            payload = post.call_args.kwargs["json"]
            self.assertEqual(payload["messages"][0]["content"], "Custom editor.")
            self.assertEqual(post.call_args.kwargs["headers"]["Authorization"], "Bearer sk-test")


if __name__ == "__main__":
    unittest.main()
