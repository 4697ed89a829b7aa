from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

@dataclass(frozen=True, slots=True)
class RewritePathsConfig:
    """
    Where section backups and diff records are written
    """
    backup_dir: Path
    diff_dir: Path

    @staticmethod
    def from_strings(
        backup_dir: str | Path,
        diff_dir: str | Path,
    ) -> "RewritePathsConfig":
        """
        Convenience constructor
        """
        return RewritePathsConfig(
            backup_dir=RewritePathsConfig._norm(backup_dir),
            diff_dir=RewritePathsConfig._norm(diff_dir),
        )

    @staticmethod
    def beside(source: str | Path) -> "RewritePathsConfig":
        """
        Default layout: ``backups/`` and ``diffs/`` next to the section file.
        """
        parent = RewritePathsConfig._norm(source).parent
        return RewritePathsConfig(backup_dir=parent / "backups", diff_dir=parent / "diffs")

    def ensure_output_dirs(self) -> None:
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        self.diff_dir.mkdir(parents=True, exist_ok=True)

    def validate(self) -> None:
        """
        Outputs can be created; but if they exist and aren't dirs, that's an error
        """
        for p, label in [
            (self.backup_dir, "backup_dir"),
            (self.diff_dir, "diff_dir"),
        ]:
            if p.exists() and not p.is_dir():
                raise ValueError(f"{label} exists but is not a directory: {p}")

    @staticmethod
    def _norm(p: str | Path) -> Path:
        return Path(p).expanduser().resolve()
