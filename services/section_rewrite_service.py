from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from config.rewrite_paths_config import RewritePathsConfig
from config.segmenter_config import SegmenterConfig
from inout.diff_record_writer import DiffRecordWriter, build_diff_payload
from nlp.llm.tasks.section_rewrite import DEFAULT_SYSTEM_PROMPT
from services.backup_service import BackupService, backup_timestamp
from services.llm_service import LlmService
from tex_tools.sentence_diff import diff_texts, summarize
from utils.terminal_ui import stage


@dataclass
class SectionRewriteService:
    """
    Rewrite one LaTeX section file in place and record what changed.

    The section is backed up before it is overwritten, and the sentence
    diff between the backup and the new text is written as JSON. Without
    an ``llm_service`` the section text is written back unchanged.
    """

    paths: RewritePathsConfig
    llm_service: LlmService | None = None
    segmenter_cfg: SegmenterConfig = field(default_factory=SegmenterConfig)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    show_progress: bool = True

    def rewrite(
        self,
        source: Path,
        requirements_path: Path,
        timestamp: str | None = None,
    ) -> dict[str, Any]:
        if not source.is_file():
            raise FileNotFoundError(f"Section file does not exist: {source}")
        if not requirements_path.is_file():
            raise FileNotFoundError(f"Prompt file does not exist: {requirements_path}")

        self.paths.validate()
        self.paths.ensure_output_dirs()

        original = source.read_text(encoding="utf-8")
        requirements = requirements_path.read_text(encoding="utf-8")
        ts = timestamp or backup_timestamp()

        backup_path = BackupService(self.paths.backup_dir).create_backup(source, ts)
        revised = self._generate(original, requirements)
        source.write_text(revised, encoding="utf-8")

        ops = diff_texts(original, revised, self.segmenter_cfg)
        payload = build_diff_payload(backup_path.name, source.name, ops)
        # The backup may carry a collision suffix; the diff record shares it.
        stamp = backup_path.name[len(source.name) + 1:-len(".bak")]
        diff_path = DiffRecordWriter(self.paths.diff_dir).write(source, stamp, payload)

        return {
            "file": str(source),
            "backup": str(backup_path),
            "diff_json": str(diff_path),
            "rewritten": self.llm_service is not None,
            "summary": summarize(ops).to_dict(),
            "ops": ops,
        }

    def _generate(self, original: str, requirements: str) -> str:
        if self.llm_service is None:
            return original

        if not self.show_progress:
            return self.llm_service.rewrite_section(original, requirements, self.system_prompt)

        with stage("Refining with LLM..."):
            return self.llm_service.rewrite_section(original, requirements, self.system_prompt)
