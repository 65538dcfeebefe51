# voca_providers/llm/llm_provider.py
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional, Sequence

from voca_engine.errors import ProviderError
from voca_engine.models.expression_input import ExpressionInput

from voca_engine.runtime.provider import SuggestionProvider
from voca_providers.llm.packing import (
    PromptPack,
    RenderedPrompt,
    default_vocabulary_pack_v1,
    render_prompt,
)

logger = logging.getLogger(__name__)


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


@dataclass(frozen=True)
class LLMRouteSpec:
    """
    Declarative routing spec:
      - provider_id: stable provider identity for logs
      - model_id: model name/alias (e.g. "gpt-4.1-mini")
      - pack: PromptPack that defines how an input is rendered
      - temperature / max_output_tokens: sampling, threaded to the adapter
      - suggestion_count: how many candidates to ask for and keep
    """
    provider_id: str
    model_id: str
    pack: PromptPack
    temperature: float = 0.7
    max_output_tokens: int = 150
    suggestion_count: int = 5


class LLMSuggestionProvider(SuggestionProvider):
    """
    Model-agnostic provider:

        ExpressionInput
          -> render_prompt(pack, input, suggestion_count)
          -> adapter.invoke(rendered_prompt, model_id, temperature, max_output_tokens)
          -> adapter.parse_candidates(payload, suggestion_count)
          -> candidates

    Adapter contract (required methods):
      - async invoke(rendered_prompt, model_id, temperature, max_output_tokens) -> Any
      - parse_candidates(payload, suggestion_count) -> Sequence[str]

    Transport failures surface as ProviderError; there is no retry here.
    """

    provider_id: str

    def __init__(self, *, route: LLMRouteSpec, adapter: Any) -> None:
        self.provider_id = route.provider_id
        self._route = route
        self._adapter = adapter
        self._extra: Dict[str, Any] = {}

    @property
    def route(self) -> LLMRouteSpec:
        return self._route

    def configure(self, options: Mapping[str, Any]) -> None:
        """
        Known keys: model, temperature (0..2), max_output_tokens, suggestion_count (1..10).
        Anything else is kept and threaded into prompt meta.
        """
        route = self._route
        for key, value in options.items():
            if key == "model":
                route = replace(route, model_id=str(value))
            elif key == "temperature":
                route = replace(route, temperature=_clamp(float(value), 0.0, 2.0))
            elif key == "max_output_tokens":
                route = replace(route, max_output_tokens=int(value))
            elif key == "suggestion_count":
                route = replace(route, suggestion_count=int(_clamp(int(value), 1, 10)))
            else:
                self._extra[key] = value
        self._route = route

    async def generate(self, input: ExpressionInput) -> Sequence[str]:
        route = self._route

        # 1) Pack/Render prompt deterministically
        rendered: RenderedPrompt = render_prompt(
            pack=route.pack,
            input=input,
            suggestion_count=route.suggestion_count,
            extra={
                "provider_id": self.provider_id,
                "model_id": route.model_id,
                "temperature": route.temperature,
                **self._extra,
            },
        )

        # 2) Invoke model via adapter (adapter owns SDK / HTTP specifics)
        try:
            payload = await self._adapter.invoke(
                rendered_prompt=rendered,
                model_id=route.model_id,
                temperature=route.temperature,
                max_output_tokens=route.max_output_tokens,
            )
        except ProviderError:
            raise
        except Exception as exc:
            logger.warning("%s: model call failed (%s): %s", self.provider_id, route.model_id, exc)
            raise ProviderError(f"Failed to generate vocabulary suggestions: {exc}") from exc

        # 3) Adapter turns raw text into candidates
        return self._adapter.parse_candidates(payload=payload, suggestion_count=route.suggestion_count)


def default_openai_provider(
    *,
    model_id: str = "gpt-4.1-mini",
    adapter: Optional[Any] = None,
    temperature: float = 0.7,
    provider_id: str = "openai_vocabulary",
) -> LLMSuggestionProvider:
    """
    Convenience factory:
    - Uses default_vocabulary_pack_v1()
    - Without an adapter, wires OpenAIAdapter over the real SDK client (env-configured)
    """
    if adapter is None:
        from voca_providers.llm.openai.adapter import OpenAIAdapter
        from voca_providers.llm.openai.client_sdk import OpenAISDKClient, OpenAISDKConfig

        adapter = OpenAIAdapter(client=OpenAISDKClient(config=OpenAISDKConfig.from_env()))

    route = LLMRouteSpec(
        provider_id=provider_id,
        model_id=model_id,
        pack=default_vocabulary_pack_v1(),
        temperature=temperature,
    )
    return LLMSuggestionProvider(route=route, adapter=adapter)
