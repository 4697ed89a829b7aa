from __future__ import annotations

from dataclasses import dataclass

from nlp.llm.llm_client import OpenAICompatChatClient
from nlp.llm.llm_types import ChatRequest, ChatResponse
from nlp.llm.tasks.section_rewrite import (
    DEFAULT_SYSTEM_PROMPT,
    build_section_rewrite_request,
    strip_markdown_code_fences,
)


@dataclass
class LlmService:
    client: OpenAICompatChatClient

    def chat(
        self,
        system: str,
        user: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
        top_p: float | None = None,
        seed: int | None = None,
        stop: list[str] | None = None,
    ) -> ChatResponse:
        return self.client.chat(
            system=system,
            user=user,
            max_tokens=max_tokens,
            temperature=temperature,
            top_p=top_p,
            seed=seed,
            stop=stop,
        )

    def send(self, request: ChatRequest) -> ChatResponse:
        return self.chat(
            request.system,
            request.user,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
            top_p=request.top_p,
            seed=request.seed,
            stop=request.stop,
        )

    def rewrite_section(
        self,
        original_latex: str,
        requirements: str,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ) -> str:
        request = build_section_rewrite_request(original_latex, requirements, system_prompt)
        response = self.send(request)
        if not response.content:
            raise RuntimeError("LLM API returned empty content")
        return strip_markdown_code_fences(response.content)
