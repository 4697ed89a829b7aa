from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from tex_tools.sentence_diff import DiffOp, summarize, to_records


def build_diff_payload(original_name: str, revised_name: str, ops: Sequence[DiffOp]) -> dict[str, Any]:
    return {
        "original": original_name,
        "revised": revised_name,
        "summary": summarize(ops).to_dict(),
        "diff": to_records(ops),
    }


@dataclass(frozen=True, slots=True)
class DiffRecordWriter:
    output_dir: Path

    def path_for(self, source: Path, timestamp: str) -> Path:
        return self.output_dir / f"{source.name}.{timestamp}.diff.json"

    def write(self, source: Path, timestamp: str, payload: dict[str, Any]) -> Path:
        return self.write_to_path(self.path_for(source, timestamp), payload)

    def write_to_path(self, out_path: Path, payload: dict[str, Any]) -> Path:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(payload, indent=2, ensure_ascii=True), encoding="utf-8")
        return out_path
