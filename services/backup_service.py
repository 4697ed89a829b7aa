from __future__ import annotations

import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


def backup_timestamp(now: datetime | None = None) -> str:
    d = now or datetime.now()
    return f"{d.day:02d}_{d.hour:02d}_{d.minute:02d}_{d.second:02d}"


@dataclass(frozen=True, slots=True)
class BackupService:
    """
    Keep a copy of a section file before it is overwritten.

    Backups are named ``<file name>.<day>_<hour>_<minute>_<second>.bak`` with
    zero-padded fields, so name order is time order within a month. A second
    backup in the same second gets a ``_1``, ``_2``... suffix instead of
    replacing the first.
    """

    backup_dir: Path

    def backup_path_for(self, source: Path, timestamp: str) -> Path:
        return self.backup_dir / f"{source.name}.{timestamp}.bak"

    def create_backup(self, source: Path, timestamp: str | None = None) -> Path:
        if not source.is_file():
            raise FileNotFoundError(f"Section file does not exist: {source}")

        self.backup_dir.mkdir(parents=True, exist_ok=True)
        ts = timestamp or backup_timestamp()
        target = self.backup_path_for(source, ts)
        n = 0
        while target.exists():
            n += 1
            target = self.backup_path_for(source, f"{ts}_{n}")
        shutil.copy2(source, target)
        return target

    def list_backups(self, source: Path) -> list[Path]:
        if not self.backup_dir.is_dir():
            return []
        return sorted(self.backup_dir.glob(f"{source.name}.*.bak"))
