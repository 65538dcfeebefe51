# voca_providers/llm/openai/client.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, runtime_checkable

from voca_providers.llm.packing import RenderedPrompt


@dataclass(frozen=True)
class OpenAIRequest:
    """
    Transport-layer request for an OpenAI-backed adapter.

    Note:
    - rendered_prompt contains the fully packed system/user content + metadata
    - model_id + sampling are threaded explicitly so calls can be replayed
    """
    rendered_prompt: RenderedPrompt
    model_id: str
    temperature: float = 0.7
    max_output_tokens: Optional[int] = None


@runtime_checkable
class OpenAIClient(Protocol):
    """
    Minimal client interface expected by OpenAIAdapter.

    - adapter owns parsing
    - client owns transport (SDK/HTTP) and returns raw payloads
    """

    async def invoke(self, req: OpenAIRequest) -> Any:
        ...


class OpenAIClientStub(OpenAIClient):
    """
    Deterministic stub for tests.

      OpenAIClientStub(payload=<any>)
      OpenAIClientStub(payloads=[<any>, <any>])
      OpenAIClientStub(error=RuntimeError("boom"))

    Returns sequentially; if invoked more times than provided, repeats last payload.
    Every request is recorded in `.requests`.
    """

    def __init__(
        self,
        *,
        payload: Any | None = None,
        payloads: List[Any] | None = None,
        error: BaseException | None = None,
    ) -> None:
        if payloads is not None:
            self._payloads = list(payloads)
        else:
            self._payloads = [payload]
        self._error = error
        self._i = 0
        self.requests: List[OpenAIRequest] = []

    async def invoke(self, req: OpenAIRequest) -> Any:
        self.requests.append(req)
        if self._error is not None:
            raise self._error
        if not self._payloads:
            return None
        if self._i >= len(self._payloads):
            return self._payloads[-1]
        out = self._payloads[self._i]
        self._i += 1
        return out
