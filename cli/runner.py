from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from app.container import build_container
from app.settings import build_settings
from cli.output import print_prompt
from inout.diff_record_writer import DiffRecordWriter, build_diff_payload
from nlp.llm.tasks.section_rewrite import DEFAULT_SYSTEM_PROMPT, build_section_rewrite_request
from tex_tools.sentence_diff import diff_texts, summarize


def _read_text(path: Path, label: str) -> str:
    if not path.is_file():
        raise FileNotFoundError(f"{label} does not exist: {path}")
    return path.read_text(encoding="utf-8")


@dataclass
class CliSession:
    environ: Mapping[str, str] | None = None
    show_progress: bool = True
    last_result: dict[str, Any] | None = field(default=None, repr=False)

    def run_diff(
        self,
        original_path: str | Path,
        revised_path: str | Path,
        *,
        keep_comments: bool = False,
        json_out: str | Path | None = None,
    ) -> dict[str, Any]:
        original_file = Path(original_path).expanduser()
        revised_file = Path(revised_path).expanduser()
        original = _read_text(original_file, "Original file")
        revised = _read_text(revised_file, "Revised file")

        cfg = build_settings(keep_comments=keep_comments, environ=self.environ or {})
        ops = diff_texts(original, revised, cfg.segmenter)

        json_path = None
        if json_out:
            payload = build_diff_payload(original_file.name, revised_file.name, ops)
            json_path = DiffRecordWriter(Path(json_out).parent).write_to_path(Path(json_out), payload)

        result = {
            "original": str(original_file),
            "revised": str(revised_file),
            "summary": summarize(ops).to_dict(),
            "ops": ops,
            "json_out": str(json_path) if json_path else None,
        }
        self.last_result = result
        return result

    def run_rewrite(
        self,
        source_path: str | Path,
        prompt_path: str | Path,
        *,
        api_key: str | None = None,
        system_prompt_path: str | Path | None = None,
        backup_dir: str | Path | None = None,
        diff_dir: str | Path | None = None,
        keep_comments: bool = False,
        verbose: bool = False,
    ) -> dict[str, Any]:
        source = Path(source_path).expanduser().resolve()
        prompt = Path(prompt_path).expanduser().resolve()

        system_prompt = DEFAULT_SYSTEM_PROMPT
        if system_prompt_path is not None:
            system_prompt = _read_text(Path(system_prompt_path).expanduser(), "System prompt file")

        cfg = build_settings(
            api_key=api_key,
            keep_comments=keep_comments,
            section_path=source,
            backup_dir=backup_dir,
            diff_dir=diff_dir,
            environ=self.environ,
        )
        service = build_container(cfg, show_progress=self.show_progress)["section_rewrite_service"]
        service.system_prompt = system_prompt

        if verbose:
            request = build_section_rewrite_request(
                _read_text(source, "Section file"),
                _read_text(prompt, "Prompt file"),
                system_prompt,
            )
            print_prompt(request.system, request.user)

        result = service.rewrite(source, prompt)
        self.last_result = result
        return result
