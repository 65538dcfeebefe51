# voca_providers/llm/packing.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from voca_engine.models.expression_input import ExpressionInput
from voca_engine.models.types import InputKind


@dataclass(frozen=True)
class PromptPack:
    """
    v1 prompt pack: str.format() templates only.

    user_templates is keyed by InputKind value; `default_user_template` covers
    kinds without a dedicated template.
    """
    pack_id: str
    pack_version: str
    system_template: str
    default_user_template: str
    user_templates: Mapping[str, str] = field(default_factory=dict)
    kind_labels: Mapping[str, str] = field(default_factory=dict)

    def user_template_for(self, kind: InputKind) -> str:
        return self.user_templates.get(kind.value, self.default_user_template)


@dataclass(frozen=True)
class RenderedPrompt:
    """
    Canonical, deterministic prompt object for adapters.
    """
    pack_id: str
    pack_version: str
    system: str
    user: str
    meta: Mapping[str, object]


def render_prompt(
    *,
    pack: PromptPack,
    input: ExpressionInput,
    suggestion_count: int,
    extra: Mapping[str, object] | None = None,
) -> RenderedPrompt:
    """
    Deterministic packing of an input → prompt text.

    Only formatting; no intelligence. Literal braces in templates must be
    escaped as {{ and }}.
    """
    kind_label = pack.kind_labels.get(input.kind.value, input.kind.value)

    system = pack.system_template.format(
        pack_id=pack.pack_id,
        pack_version=pack.pack_version,
    )
    user = pack.user_template_for(input.kind).format(
        kind_label=kind_label,
        content=input.content,
        suggestion_count=suggestion_count,
    )

    meta: dict[str, object] = {
        "pack_id": pack.pack_id,
        "pack_version": pack.pack_version,
        "input_id": input.input_id,
        "input_kind": input.kind.value,
        "suggestion_count": suggestion_count,
    }
    if extra:
        meta.update(dict(extra))

    return RenderedPrompt(
        pack_id=pack.pack_id,
        pack_version=pack.pack_version,
        system=system,
        user=user,
        meta=meta,
    )


def default_vocabulary_pack_v1() -> PromptPack:
    """
    Korean vocabulary-enrichment pack: one candidate per line, no numbering.
    """
    system = (
        "당신은 한국어 어휘 향상을 돕는 전문가입니다. "
        "사용자의 입력에 대해 더 다양하고 풍부한 어휘 표현을 제안해주세요."
    )

    head = "다음 {kind_label}에 대해 {suggestion_count}개의 어휘 대안을 제안해주세요.\n\n"
    tail = " 각 제안은 한 줄씩 번호 없이 나열해주세요."

    user_templates = {
        InputKind.EXPRESSION.value: (
            head
            + '표현: "{content}"\n\n'
            + "위 표현을 더 풍부하고 다양하게 표현할 수 있는 어휘나 구문을 제안해주세요."
            + tail
        ),
        InputKind.EXPLANATION.value: (
            head
            + '상황 설명: "{content}"\n\n'
            + "위 상황을 표현할 때 사용할 수 있는 감각적이고 생동감 있는 어휘나 표현을 제안해주세요."
            + tail
        ),
        InputKind.IMAGE.value: (
            head
            + '이미지 정보: "{content}"\n\n'
            + "위 이미지를 묘사할 때 사용할 수 있는 시각적이고 표현력이 풍부한 어휘나 구문을 제안해주세요."
            + tail
        ),
    }
    default_user = (
        head
        + '내용: "{content}"\n\n'
        + "위 내용과 관련된 다양한 어휘 표현을 제안해주세요."
        + tail
    )

    return PromptPack(
        pack_id="vocabulary",
        pack_version="v1",
        system_template=system,
        default_user_template=default_user,
        user_templates=user_templates,
        kind_labels={
            InputKind.EXPRESSION.value: "표현",
            InputKind.EXPLANATION.value: "상황 설명",
            InputKind.IMAGE.value: "이미지",
        },
    )
