from __future__ import annotations

import re

from nlp.llm.llm_types import ChatRequest


DEFAULT_SYSTEM_PROMPT = (
    "You are a strict academic editor for top-tier computer systems and security venues.\n"
    "Rewrite the LaTeX section you are given so that it is concise, precise and authoritative.\n"
    "Remove filler words and redundant adjectives. Every sentence must carry new information.\n"
    "Prefer the active voice and explicit logical connectors over dashes and colons.\n"
    "Keep every LaTeX command, citation, label and math expression intact.\n"
)

_CODE_FENCE = re.compile(r"^\s*```[\w-]*\s*\n(.*?)\n```\s*$", re.DOTALL)


def build_section_rewrite_request(
    original_latex: str,
    requirements: str,
    system_prompt: str = DEFAULT_SYSTEM_PROMPT,
) -> ChatRequest:
    user = (
        f"User requirements:\n\n{requirements}\n\n"
        f"Current LaTeX content:\n\n{original_latex}\n\n"
        "Rewrite the LaTeX to satisfy the requirements and system instructions. "
        "Return ONLY the updated LaTeX (no explanation, no markdown fences)."
    )
    return ChatRequest(system=system_prompt, user=user)


def strip_markdown_code_fences(text: str) -> str:
    stripped = (text or "").strip()
    match = _CODE_FENCE.match(stripped)
    return (match.group(1) if match else stripped).strip()
