import io
import json

import pytest

from fakes import service_error
from reviewscore.llm_adapter import LLMAdapter, LLMFallbackError
from reviewscore.scoring import ScoringEngine


class FakeBedrock:
    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    def invoke_model(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        raw = self.answer if isinstance(self.answer, bytes) else json.dumps(self.answer).encode("utf-8")
        return {"body": io.BytesIO(raw)}


def _nova(text):
    return {"output": {"message": {"role": "assistant", "content": [{"text": text}]}}}


def test_generate_sends_messages_payload():
    client = FakeBedrock(_nova('  {"ok": true}\n'))
    llm = LLMAdapter(client, "amazon.nova-pro-v1:0")
    text = llm.generate("score this", system="be precise", max_tokens=250, temperature=0.2, top_p=0.9)
    assert text == '{"ok": true}'
    call = client.calls[0]
    assert call["modelId"] == "amazon.nova-pro-v1:0"
    assert call["contentType"] == "application/json"
    payload = json.loads(call["body"])
    assert payload["system"] == [{"text": "be precise"}]
    assert payload["messages"] == [{"role": "user", "content": [{"text": "score this"}]}]
    assert payload["inferenceConfig"] == {"maxTokens": 250, "temperature": 0.2, "topP": 0.9}


def test_top_p_is_omitted_when_unset():
    client = FakeBedrock(_nova("hi"))
    LLMAdapter(client, "m").generate("p", system="s")
    payload = json.loads(client.calls[0]["body"])
    assert payload["inferenceConfig"] == {"maxTokens": 400, "temperature": 0.0}


def test_transport_error_raises_fallback():
    llm = LLMAdapter(FakeBedrock(error=service_error("InvokeModel", "ThrottlingException")), "m")
    with pytest.raises(LLMFallbackError):
        llm.generate("p", system="s")


def test_undecodable_body_raises_fallback():
    llm = LLMAdapter(FakeBedrock(answer=b"<html>gateway timeout</html>"), "m")
    with pytest.raises(LLMFallbackError):
        llm.generate("p", system="s")


@pytest.mark.parametrize(
    "answer",
    [
        {"output": {}},
        {"output": {"message": {"content": []}}},
        {"output": {"message": {"content": [{"image": "..."}]}}},
        ["not", "an", "object"],
        {"output": "throttled"},
        {"output": {"message": [{"text": "hi"}]}},
        {"output": {"message": {"content": {"text": "hi"}}}},
    ],
)
def test_unexpected_shape_raises_fallback(answer):
    llm = LLMAdapter(FakeBedrock(answer), "m")
    with pytest.raises(LLMFallbackError):
        llm.generate("p", system="s")


def test_malformed_answer_degrades_single_review_score():
    engine = ScoringEngine(LLMAdapter(FakeBedrock({"output": "throttled"}), "m"))
    result = engine.score_single("Great noodles")
    assert (result.fake_percentage, result.sentiment_score, result.verdict) == (0, 0, "Unclear")
