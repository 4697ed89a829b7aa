from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from app.container import build_container, build_llm_service
from app.settings import build_settings
from services.llm_service import LlmService
from services.section_rewrite_service import SectionRewriteService


class ContainerRuntimeTests(unittest.TestCase):
    def test_no_api_key_means_no_llm_service(self) -> None:
        cfg = build_settings(environ={})
        self.assertIsNone(build_llm_service(cfg))
        deps = build_container(cfg)
        self.assertIsNone(deps["llm_service"])
        self.assertIsNone(deps["section_rewrite_service"])

    def test_api_key_builds_client_from_endpoint(self) -> None:
        cfg = build_settings(api_key="sk-cli", environ={"OPENAI_MODEL": "local"})
        service = build_llm_service(cfg)
        self.assertIsInstance(service, LlmService)
        self.assertEqual(service.client.api_key, "sk-cli")
        self.assertEqual(service.client.model_name, "local")
        self.assertEqual(service.client.request_cfg.max_tokens, 4000)

    def test_section_path_wires_rewrite_service(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            section = Path(tmp) / "0-intro.tex"
            cfg = build_settings(
                section_path=section,
                diff_dir=Path(tmp) / "out",
                keep_comments=True,
                environ={"OPENAI_API_KEY": "sk-env"},
            )
            deps = build_container(cfg, show_progress=False)
            service = deps["section_rewrite_service"]

            self.assertIsInstance(service, SectionRewriteService)
            self.assertIs(service.llm_service, deps["llm_service"])
            self.assertFalse(service.show_progress)
            self.assertFalse(service.segmenter_cfg.strip_comments)
            self.assertEqual(service.paths.backup_dir, section.resolve().parent / "backups")
            self.assertEqual(service.paths.diff_dir, (Path(tmp) / "out").resolve())


if __name__ == "__main__":
    unittest.main()
