from __future__ import annotations

from typing import Any

from app.settings import AppConfig
from nlp.llm.llm_client import OpenAICompatChatClient
from services.llm_service import LlmService
from services.section_rewrite_service import SectionRewriteService


def build_llm_service(app_cfg: AppConfig) -> LlmService | None:
    # Without a key the rewrite step passes the section through unchanged.
    if not app_cfg.llm_endpoint.has_api_key:
        return None
    client = OpenAICompatChatClient.from_config(app_cfg.llm_endpoint, app_cfg.llm_request)
    return LlmService(client=client)


def build_container(app_cfg: AppConfig, *, show_progress: bool = True) -> dict[str, Any]:
    """
    Dependency container builder
    - Constructs the LLM and rewrite services from a loaded config
    - Returns a dictionary of ready-to-use services
    """
    llm_service = build_llm_service(app_cfg)

    section_rewrite_service = None
    if app_cfg.rewrite_paths is not None:
        section_rewrite_service = SectionRewriteService(
            paths=app_cfg.rewrite_paths,
            llm_service=llm_service,
            segmenter_cfg=app_cfg.segmenter,
            show_progress=show_progress,
        )

    return {
        "llm_service": llm_service,
        "section_rewrite_service": section_rewrite_service,
    }
