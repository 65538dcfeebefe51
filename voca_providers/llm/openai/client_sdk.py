# voca_providers/llm/openai/client_sdk.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from openai import AsyncOpenAI

from .client import OpenAIClient, OpenAIRequest


@dataclass(frozen=True)
class OpenAISDKConfig:
    """
    Minimal config for the OpenAI Python SDK client.
    Transport-only: no prompts, no parsing.
    """
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    organization: Optional[str] = None
    project: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "OpenAISDKConfig":
        env = os.environ if environ is None else environ
        return cls(
            api_key=env.get("OPENAI_API_KEY") or None,
            base_url=env.get("OPENAI_BASE_URL") or None,
            organization=env.get("OPENAI_ORG_ID") or None,
            project=env.get("OPENAI_PROJECT_ID") or None,
        )


class OpenAISDKClient(OpenAIClient):
    """
    Real transport client using the OpenAI Python SDK (Responses API, async).

    Contract:
      invoke(OpenAIRequest) -> raw payload (output text; one candidate per line per prompt pack)
    """

    def __init__(self, *, config: OpenAISDKConfig | None = None) -> None:
        cfg = config or OpenAISDKConfig()

        # AsyncOpenAI() pulls from env by default; these kwargs override when provided.
        kwargs: dict[str, Any] = {}
        if cfg.api_key:
            kwargs["api_key"] = cfg.api_key
        if cfg.base_url:
            kwargs["base_url"] = cfg.base_url
        if cfg.organization:
            kwargs["organization"] = cfg.organization
        if cfg.project:
            kwargs["project"] = cfg.project

        self._client = AsyncOpenAI(**kwargs)

    async def invoke(self, req: OpenAIRequest) -> Any:
        """
        Responses API:
          - instructions = system message
          - input = user message
        Returns aggregated output text (SDK convenience).
        """
        params: dict[str, Any] = {
            "model": req.model_id,
            "instructions": req.rendered_prompt.system,
            "input": req.rendered_prompt.user,
            "temperature": req.temperature,
        }
        if req.max_output_tokens:
            params["max_output_tokens"] = req.max_output_tokens

        resp = await self._client.responses.create(**params)

        out = getattr(resp, "output_text", None)
        if isinstance(out, str):
            return out

        # Adapter decides how to handle anything that isn't text.
        return resp
