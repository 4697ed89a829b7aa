from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from config.llm_endpoint_config import LlmEndpointConfig
from config.llm_request_config import LlmRequestConfig
from config.rewrite_paths_config import RewritePathsConfig
from config.segmenter_config import SegmenterConfig


@dataclass(frozen=True, slots=True)
class AppConfig:
    segmenter: SegmenterConfig
    llm_endpoint: LlmEndpointConfig
    llm_request: LlmRequestConfig
    rewrite_paths: RewritePathsConfig | None = None


def build_settings(
    *,
    api_key: str | None = None,
    keep_comments: bool = False,
    section_path: str | Path | None = None,
    backup_dir: str | Path | None = None,
    diff_dir: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:

    segmenter = SegmenterConfig.from_strings(strip_comments=not keep_comments)

    llm_endpoint = LlmEndpointConfig.from_env(environ).with_api_key(api_key)
    llm_endpoint.validate()

    llm_request = LlmRequestConfig.from_values(
        max_tokens=4000,
        temperature=0.3,
    )

    rewrite_paths = None
    if section_path is not None:
        defaults = RewritePathsConfig.beside(section_path)
        rewrite_paths = RewritePathsConfig.from_strings(
            backup_dir=backup_dir or defaults.backup_dir,
            diff_dir=diff_dir or defaults.diff_dir,
        )
        rewrite_paths.validate()

    return AppConfig(
        segmenter=segmenter,
        llm_endpoint=llm_endpoint,
        llm_request=llm_request,
        rewrite_paths=rewrite_paths,
    )
