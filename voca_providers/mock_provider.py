# voca_providers/mock_provider.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Sequence, Tuple

from voca_engine.models.expression_input import ExpressionInput
from voca_engine.models.types import InputKind
from voca_engine.runtime.provider import SuggestionProvider

logger = logging.getLogger(__name__)


# Keyword -> candidates, checked in order; first keyword contained in the content wins.
EXPRESSION_TABLE: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("잔잔하게", ("부드럽게", "조용히", "평온하게", "고요하게", "은은하게")),
    ("들린다", ("울려 퍼진다", "들려온다", "스며든다", "전해진다", "흘러나온다")),
    ("노래", ("멜로디", "선율", "가락", "음성", "하모니")),
    ("소리", ("음향", "울림", "반향", "목소리", "음성")),
)
EXPRESSION_DEFAULT = ("아름답게 표현된", "감성적인", "서정적인", "운율이 있는", "정감이 넘치는")

EXPLANATION_TABLE: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("카페", ("아늑한 분위기", "따뜻한 공간", "여유로운 시간", "감성적인 순간", "일상의 쉼표")),
    ("창", ("바깥 풍경", "시야에 들어오는", "창밖의 세상", "유리창 너머", "투명한 경계")),
)
EXPLANATION_DEFAULT = ("상황적 맥락", "분위기 있는", "감정이 담긴", "순간적인", "인상적인")

IMAGE_TABLE: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("풍경", ("파노라마", "장관", "경치", "전망", "비스타")),
    ("landscape", ("파노라마", "장관", "경치", "전망", "비스타")),
)
IMAGE_DEFAULT = ("시각적 표현", "이미지로 담긴", "화면 속의", "포착된 순간", "그림 같은")

_TABLES = {
    InputKind.EXPRESSION: (EXPRESSION_TABLE, EXPRESSION_DEFAULT),
    InputKind.EXPLANATION: (EXPLANATION_TABLE, EXPLANATION_DEFAULT),
    InputKind.IMAGE: (IMAGE_TABLE, IMAGE_DEFAULT),
}


class MockSuggestionProvider(SuggestionProvider):
    """
    Offline provider backed by keyword tables, one per input kind.

    Options (all optional, via configure()):
      - delay: seconds to sleep before answering (simulated latency)
      - custom_suggestions: {keyword: [candidates]} checked before the built-in tables
      - suggestion_count: truncate results to this many candidates
    """

    provider_id = "mock_provider"

    def __init__(self, **options: Any) -> None:
        self._config: Dict[str, Any] = {"delay": 0.0, "custom_suggestions": {}}
        self.configure(options)

    def configure(self, options: Mapping[str, Any]) -> None:
        self._config.update(options)

    def get_config(self) -> Dict[str, Any]:
        return dict(self._config)

    def set_delay(self, seconds: float) -> None:
        self._config["delay"] = float(seconds)

    def add_custom_suggestions(self, keyword: str, suggestions: Sequence[str]) -> None:
        custom = dict(self._config.get("custom_suggestions") or {})
        custom[keyword] = tuple(suggestions)
        self._config["custom_suggestions"] = custom

    async def generate(self, input: ExpressionInput) -> Sequence[str]:
        delay = float(self._config.get("delay") or 0.0)
        if delay > 0:
            await asyncio.sleep(delay)

        out = list(self._lookup(input))
        count = self._config.get("suggestion_count")
        if count:
            out = out[: int(count)]
        logger.debug("mock suggestions for %s: %d", input.input_id, len(out))
        return out

    def _lookup(self, input: ExpressionInput) -> Sequence[str]:
        for keyword, words in (self._config.get("custom_suggestions") or {}).items():
            if keyword in input.content:
                return tuple(words)

        table, default = _TABLES[input.kind]
        for keyword, words in table:
            if keyword in input.content:
                return words
        return default
