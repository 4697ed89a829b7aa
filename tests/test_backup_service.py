from __future__ import annotations

import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from services.backup_service import BackupService, backup_timestamp


class BackupServiceTests(unittest.TestCase):
    def test_backup_timestamp_format(self) -> None:
        self.assertEqual(backup_timestamp(datetime(2024, 3, 7, 9, 5, 2)), "07_09_05_02")

    def test_backup_names_sort_in_time_order(self) -> None:
        earlier = backup_timestamp(datetime(2024, 3, 9, 23, 59, 59))
        later = backup_timestamp(datetime(2024, 3, 10, 0, 0, 0))
        self.assertLess(earlier, later)

    def test_same_second_backups_do_not_overwrite(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "0-intro.tex"
            service = BackupService(backup_dir=root / "backups")

            source.write_text("first\n", encoding="utf-8")
            first = service.create_backup(source, timestamp="01_02_03_04")
            source.write_text("second\n", encoding="utf-8")
            second = service.create_backup(source, timestamp="01_02_03_04")

            self.assertNotEqual(first, second)
            self.assertEqual(second.name, "0-intro.tex.01_02_03_04_1.bak")
            self.assertEqual(first.read_text(encoding="utf-8"), "first\n")
            self.assertEqual(second.read_text(encoding="utf-8"), "second\n")
            self.assertEqual(service.list_backups(source), [first, second])

    def test_create_backup_copies_section(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "0-intro.tex"
            source.write_text("We present X.\n", encoding="utf-8")
            service = BackupService(backup_dir=root / "backups")

            backup = service.create_backup(source, timestamp="1_2_3_4")

            self.assertEqual(backup, root / "backups" / "0-intro.tex.1_2_3_4.bak")
            self.assertEqual(backup.read_text(encoding="utf-8"), "We present X.\n")
            self.assertEqual(service.list_backups(source), [backup])

    def test_create_backup_requires_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            service = BackupService(backup_dir=Path(tmp) / "backups")
            with self.assertRaises(FileNotFoundError):
                service.create_backup(Path(tmp) / "missing.tex")

    def test_list_backups_without_directory_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            service = BackupService(backup_dir=Path(tmp) / "none")
            self.assertEqual(service.list_backups(Path(tmp) / "a.tex"), [])

    def test_list_backups_only_matches_the_section(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            backups = root / "backups"
            backups.mkdir()
            (backups / "a.tex.1_1_1_1.bak").write_text("", encoding="utf-8")
            (backups / "a.tex.2_1_1_1.bak").write_text("", encoding="utf-8")
            (backups / "b.tex.1_1_1_1.bak").write_text("", encoding="utf-8")

            found = BackupService(backup_dir=backups).list_backups(root / "a.tex")

            self.assertEqual([p.name for p in found], ["a.tex.1_1_1_1.bak", "a.tex.2_1_1_1.bak"])


if __name__ == "__main__":
    unittest.main()
