# voca_providers/llm/openai/adapter.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from voca_engine.errors import ProviderError

from voca_providers.llm.packing import RenderedPrompt

from .client import OpenAIClient, OpenAIRequest

_NUMBERED = re.compile(r"^\d+\.")

# Padding never grows the list beyond this, whatever suggestion_count says.
PAD_LIMIT = 5
PAD_TEMPLATE = "대안 표현 {n}"


def _payload_text(payload: Any) -> str:
    if payload is None:
        return ""
    if isinstance(payload, str):
        return payload
    if isinstance(payload, Mapping):
        for key in ("output_text", "content", "text"):
            val = payload.get(key)
            if isinstance(val, str):
                return val
        return ""
    out = getattr(payload, "output_text", None)
    return out if isinstance(out, str) else ""


@dataclass(frozen=True)
class OpenAIAdapter:
    """
    Text-only adapter:
      RenderedPrompt -> OpenAIClient -> text -> candidate list

    This adapter:
    - does NOT rank or score
    - only parses + canonicalizes the model's line-per-candidate output
    """

    client: OpenAIClient

    async def invoke(
        self,
        *,
        rendered_prompt: RenderedPrompt,
        model_id: str,
        temperature: float,
        max_output_tokens: Optional[int] = None,
    ) -> Any:
        """
        Transport call only. Returns raw payload (str/dict/etc).
        Parsing happens in parse_candidates().
        """
        req = OpenAIRequest(
            rendered_prompt=rendered_prompt,
            model_id=model_id,
            temperature=float(temperature),
            max_output_tokens=max_output_tokens,
        )
        return await self.client.invoke(req)

    def parse_candidates(self, *, payload: Any, suggestion_count: int) -> tuple[str, ...]:
        """
        - one candidate per non-empty line, stripped
        - numbered lines ("1. ...") and header-like lines (containing ":") are dropped
        - at most suggestion_count kept
        - padded with generic alternatives while short of min(suggestion_count, PAD_LIMIT)
        """
        text = _payload_text(payload)
        if not text.strip():
            raise ProviderError("No content received from OpenAI")

        lines: list[str] = []
        for raw in text.split("\n"):
            line = raw.strip()
            if not line or _NUMBERED.match(line) or ":" in line:
                continue
            lines.append(line)
        lines = lines[:suggestion_count]

        while len(lines) < suggestion_count and len(lines) < PAD_LIMIT:
            lines.append(PAD_TEMPLATE.format(n=len(lines) + 1))

        return tuple(lines)
