# tests/test_providers_smoke.py
from __future__ import annotations

from types import SimpleNamespace

import pytest

from voca_engine.errors import ProviderError
from voca_engine.models import ExpressionInput, InputKind
from voca_engine.runtime import VocaEngine
from voca_providers import MockSuggestionProvider, StubSuggestionProvider, SuggestionProvider
from voca_providers import mock_provider as mock_module
from voca_providers.llm import (
    LLMRouteSpec,
    LLMSuggestionProvider,
    default_openai_provider,
    default_vocabulary_pack_v1,
    render_prompt,
)
from voca_providers.llm.openai import OpenAIAdapter, OpenAIClient, OpenAIClientStub
from voca_providers.llm.openai.client_sdk import OpenAISDKConfig


def _llm(payload=None, *, payloads=None, error=None, suggestion_count: int = 5):
    client = OpenAIClientStub(payload=payload, payloads=payloads, error=error)
    route = LLMRouteSpec(
        provider_id="openai_test",
        model_id="gpt-test",
        pack=default_vocabulary_pack_v1(),
        suggestion_count=suggestion_count,
    )
    return LLMSuggestionProvider(route=route, adapter=OpenAIAdapter(client=client)), client


def test_providers_satisfy_protocol():
    llm, client = _llm("a")
    for p in (StubSuggestionProvider(), MockSuggestionProvider(), llm):
        assert isinstance(p, SuggestionProvider)
    assert isinstance(client, OpenAIClient)


# ---------------------------
# MockSuggestionProvider
# ---------------------------

@pytest.mark.asyncio
async def test_mock_first_matching_keyword_wins():
    mock = MockSuggestionProvider()
    out = await mock.generate(ExpressionInput.expression("음악이 잔잔하게 들린다"))
    assert list(out) == ["부드럽게", "조용히", "평온하게", "고요하게", "은은하게"]


@pytest.mark.asyncio
async def test_mock_tables_are_per_kind_with_defaults():
    mock = MockSuggestionProvider()

    assert (await mock.generate(ExpressionInput.explanation("카페 창가")))[0] == "아늑한 분위기"
    assert (await mock.generate(ExpressionInput.image("mountain landscape")))[0] == "파노라마"
    # "카페" is an explanation keyword only
    assert list(await mock.generate(ExpressionInput.expression("카페"))) == list(mock_module.EXPRESSION_DEFAULT)
    assert list(await mock.generate(ExpressionInput.image("cat"))) == list(mock_module.IMAGE_DEFAULT)


@pytest.mark.asyncio
async def test_mock_custom_suggestions_take_precedence_and_count_truncates():
    mock = MockSuggestionProvider(suggestion_count=2)
    mock.add_custom_suggestions("노래", ["노랫소리", "가창", "읊조림"])

    out = await mock.generate(ExpressionInput.expression("노래가 들린다"))
    assert list(out) == ["노랫소리", "가창"]
    assert mock.get_config()["custom_suggestions"] == {"노래": ("노랫소리", "가창", "읊조림")}


@pytest.mark.asyncio
async def test_mock_delay_sleeps_before_answering(monkeypatch):
    slept = []

    async def fake_sleep(seconds):
        slept.append(seconds)

    monkeypatch.setattr(mock_module.asyncio, "sleep", fake_sleep)

    mock = MockSuggestionProvider()
    await mock.generate(ExpressionInput.expression("x"))
    assert slept == []

    mock.set_delay(0.5)
    await mock.generate(ExpressionInput.expression("x"))
    assert slept == [0.5]


def test_mock_configure_keeps_unknown_keys():
    mock = MockSuggestionProvider()
    mock.configure({"tone": "formal"})
    cfg = mock.get_config()
    assert cfg["tone"] == "formal"
    assert cfg["delay"] == 0.0


# ---------------------------
# Prompt packing
# ---------------------------

def test_render_prompt_uses_kind_template_and_meta():
    inp = ExpressionInput.explanation("비 오는 카페")
    rendered = render_prompt(pack=default_vocabulary_pack_v1(), input=inp, suggestion_count=3, extra={"k": "v"})

    assert "비 오는 카페" in rendered.user
    assert "3개" in rendered.user
    assert "상황 설명" in rendered.user
    assert rendered.system
    assert rendered.meta["input_id"] == inp.input_id
    assert rendered.meta["input_kind"] == InputKind.EXPLANATION.value
    assert rendered.meta["suggestion_count"] == 3
    assert rendered.meta["k"] == "v"


# ---------------------------
# OpenAIAdapter.parse_candidates
# ---------------------------

def test_parse_candidates_filters_numbered_and_header_lines():
    adapter = OpenAIAdapter(client=OpenAIClientStub(payload=""))
    text = "제안: 아래와 같습니다\n1. 멜로디\n 선율 \n\n가락\n하모니\n"

    assert adapter.parse_candidates(payload=text, suggestion_count=3) == ("선율", "가락", "하모니")


def test_parse_candidates_pads_up_to_five():
    adapter = OpenAIAdapter(client=OpenAIClientStub(payload=""))

    assert adapter.parse_candidates(payload="선율", suggestion_count=3) == ("선율", "대안 표현 2", "대안 표현 3")
    padded = adapter.parse_candidates(payload="선율\n가락", suggestion_count=8)
    assert padded == ("선율", "가락", "대안 표현 3", "대안 표현 4", "대안 표현 5")


def test_parse_candidates_accepts_mapping_and_response_objects():
    adapter = OpenAIAdapter(client=OpenAIClientStub(payload=""))

    assert adapter.parse_candidates(payload={"output_text": "a\nb"}, suggestion_count=2) == ("a", "b")
    assert adapter.parse_candidates(payload=SimpleNamespace(output_text="c"), suggestion_count=1) == ("c",)


@pytest.mark.parametrize("payload", [None, "", "   \n  ", {"unrelated": 1}])
def test_parse_candidates_rejects_empty_payloads(payload):
    adapter = OpenAIAdapter(client=OpenAIClientStub(payload=""))
    with pytest.raises(ProviderError):
        adapter.parse_candidates(payload=payload, suggestion_count=5)


# ---------------------------
# LLMSuggestionProvider
# ---------------------------

@pytest.mark.asyncio
async def test_llm_provider_threads_route_into_request():
    llm, client = _llm("멜로디\n선율\n가락\n하모니\n음성")
    inp = ExpressionInput.expression("노래가 들린다")

    out = await llm.generate(inp)

    assert out == ("멜로디", "선율", "가락", "하모니", "음성")
    (req,) = client.requests
    assert req.model_id == "gpt-test"
    assert req.temperature == 0.7
    assert req.max_output_tokens == 150
    assert "노래가 들린다" in req.rendered_prompt.user
    assert req.rendered_prompt.meta["provider_id"] == "openai_test"
    assert req.rendered_prompt.meta["input_id"] == inp.input_id


@pytest.mark.asyncio
async def test_llm_provider_configure_clamps_and_keeps_extras():
    llm, client = _llm("a\nb\nc")
    llm.configure({"model": "gpt-other", "temperature": 5, "suggestion_count": 50, "tone": "formal"})

    assert llm.route.model_id == "gpt-other"
    assert llm.route.temperature == 2.0
    assert llm.route.suggestion_count == 10

    llm.configure({"temperature": -1, "suggestion_count": 0, "max_output_tokens": 64})
    assert llm.route.temperature == 0.0
    assert llm.route.suggestion_count == 1
    assert llm.route.max_output_tokens == 64

    await llm.generate(ExpressionInput.expression("x"))
    req = client.requests[-1]
    assert req.model_id == "gpt-other"
    assert req.max_output_tokens == 64
    assert req.rendered_prompt.meta["tone"] == "formal"


@pytest.mark.asyncio
async def test_llm_provider_wraps_transport_failures():
    boom = RuntimeError("connection reset")
    llm, _ = _llm(error=boom)

    with pytest.raises(ProviderError) as info:
        await llm.generate(ExpressionInput.expression("x"))
    assert info.value.__cause__ is boom


@pytest.mark.asyncio
async def test_llm_provider_passes_provider_errors_through():
    original = ProviderError("quota")
    llm, _ = _llm(error=original)

    with pytest.raises(ProviderError) as info:
        await llm.generate(ExpressionInput.expression("x"))
    assert info.value is original


def test_default_openai_provider_with_injected_adapter():
    adapter = OpenAIAdapter(client=OpenAIClientStub(payload="a"))
    provider = default_openai_provider(adapter=adapter, model_id="gpt-x", temperature=0.2)

    assert provider.provider_id == "openai_vocabulary"
    assert provider.route.model_id == "gpt-x"
    assert provider.route.temperature == 0.2
    assert provider.route.pack.pack_id == "vocabulary"


def test_sdk_config_from_env_mapping():
    cfg = OpenAISDKConfig.from_env(
        {"OPENAI_API_KEY": "sk-test", "OPENAI_BASE_URL": "", "OPENAI_PROJECT_ID": "proj_1"}
    )
    assert cfg.api_key == "sk-test"
    assert cfg.base_url is None
    assert cfg.organization is None
    assert cfg.project == "proj_1"


# ---------------------------
# Engine wiring
# ---------------------------

@pytest.mark.asyncio
async def test_engine_with_llm_provider_end_to_end():
    llm, client = _llm(payloads=["멜로디\n선율\n가락", "1. 번호만\n제목: 헤더"])
    engine = VocaEngine(provider=llm)

    assert engine.set_default_suggestion_count(3) == 3
    assert llm.route.suggestion_count == 3

    col = await engine.create_collection("노래")
    inp = await engine.add_input("expression", "노래가 들린다")
    sug = await engine.generate_suggestions(inp.input_id)
    assert sug.candidates == ("멜로디", "선율", "가락")

    # second reply has only filtered lines, so it is padded
    again = await engine.generate_suggestions(inp.input_id)
    assert again.candidates == ("대안 표현 1", "대안 표현 2", "대안 표현 3")

    entry = await engine.save_entry(inp.input_id, sug.suggestion_id, col.collection_id, tags=["music"])
    assert await engine.search_entries(col.collection_id, "선율") == (entry,)
    assert len(client.requests) == 2


@pytest.mark.asyncio
async def test_engine_surfaces_llm_failures_as_provider_error():
    llm, _ = _llm(payload="   ")
    engine = VocaEngine(provider=llm)
    inp = await engine.add_input(InputKind.IMAGE, "https://example.org/a.png")

    with pytest.raises(ProviderError):
        await engine.generate_suggestions(inp.input_id)
    assert engine.store.counts()["suggestions"] == 0


@pytest.mark.asyncio
async def test_engine_with_mock_provider_end_to_end():
    engine = VocaEngine(provider=MockSuggestionProvider())
    engine.set_default_suggestion_count(2)

    inp = await engine.add_input("explain", "창밖을 본다")
    sug = await engine.generate_suggestions(inp.input_id)
    assert sug.candidates == ("바깥 풍경", "시야에 들어오는")
