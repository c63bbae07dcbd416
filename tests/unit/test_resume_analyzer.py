"""Tests for the resume analysis client and its retry loop."""

import json
from unittest.mock import Mock

import httpx
import pytest

from jobseeker.agents.resume_analyzer import ResumeAnalyzer, create_chat_model, is_retryable
from jobseeker.config import Settings
from jobseeker.errors import AnalysisFailed, InvalidInput, InvalidResponse, NotConfigured
from jobseeker.utils.parser import DEFAULT_JOB_KEYWORDS

from tests.conftest import RESUME_TEXT, VALID_ANALYSIS


def _reply(payload) -> Mock:
    return Mock(content=payload if isinstance(payload, str) else json.dumps(payload))


class TestAnalyze:
    def test_valid_response(self, analyzer, mock_llm, sleeps):
        result = analyzer.analyze(RESUME_TEXT)

        assert result.skill_categories()[0] == {"category": "Programming Languages", "items": ["Go", "Python"]}
        assert result.job_keywords == VALID_ANALYSIS["jobKeywords"]
        assert mock_llm.invoke.call_count == 1
        assert sleeps == []

    def test_prompt_carries_resume_text(self, analyzer, mock_llm):
        analyzer.analyze(RESUME_TEXT)

        messages = mock_llm.invoke.call_args.args[0]
        assert RESUME_TEXT in messages[0].content
        assert "jobKeywords" in messages[0].content

    def test_too_few_keywords_get_defaults(self, analyzer, mock_llm):
        mock_llm.invoke.return_value = _reply(dict(VALID_ANALYSIS, jobKeywords=["Go Developer"]))

        result = analyzer.analyze(RESUME_TEXT)

        assert result.job_keywords == list(DEFAULT_JOB_KEYWORDS)

    @pytest.mark.parametrize("text", ["", "   ", "short resume", "x" * 49])
    def test_short_input_never_calls_model(self, analyzer, mock_llm, text):
        with pytest.raises(InvalidInput):
            analyzer.analyze(text)
        mock_llm.invoke.assert_not_called()

    def test_not_configured(self):
        analyzer = ResumeAnalyzer(None)
        assert analyzer.is_configured() is False
        with pytest.raises(NotConfigured) as exc_info:
            analyzer.analyze(RESUME_TEXT)
        assert exc_info.value.retryable is False
        assert exc_info.value.http_status == 503


class TestRetry:
    def test_transient_failures_then_success(self, analyzer, mock_llm, sleeps):
        mock_llm.invoke.side_effect = [
            httpx.ReadTimeout("timed out"),
            httpx.ConnectError("connection refused"),
            _reply(VALID_ANALYSIS),
        ]

        result = analyzer.analyze(RESUME_TEXT)

        assert result.summary == VALID_ANALYSIS["summary"]
        assert mock_llm.invoke.call_count == 3
        assert sleeps == [1.0, 2.0]

    def test_gives_up_after_three_attempts(self, analyzer, mock_llm, sleeps):
        mock_llm.invoke.side_effect = TimeoutError("request timed out")

        with pytest.raises(AnalysisFailed) as exc_info:
            analyzer.analyze(RESUME_TEXT)

        assert mock_llm.invoke.call_count == 3
        assert sleeps == [1.0, 2.0]
        assert exc_info.value.retryable is True
        assert exc_info.value.http_status == 503

    def test_invalid_responses_are_retried(self, analyzer, mock_llm, sleeps):
        mock_llm.invoke.return_value = _reply("Sorry, I can only answer in prose.")

        with pytest.raises(InvalidResponse):
            analyzer.analyze(RESUME_TEXT)

        assert mock_llm.invoke.call_count == 3
        assert sleeps == [1.0, 2.0]

    def test_invalid_then_valid(self, analyzer, mock_llm, sleeps):
        mock_llm.invoke.side_effect = [_reply({"skills": {}}), _reply(VALID_ANALYSIS)]

        analyzer.analyze(RESUME_TEXT)

        assert mock_llm.invoke.call_count == 2
        assert sleeps == [1.0]

    def test_empty_content_is_retryable(self, analyzer, mock_llm):
        mock_llm.invoke.side_effect = [Mock(content=""), _reply(VALID_ANALYSIS)]

        analyzer.analyze(RESUME_TEXT)

        assert mock_llm.invoke.call_count == 2

    def test_non_retryable_error_fails_at_once(self, analyzer, mock_llm, sleeps):
        mock_llm.invoke.side_effect = ValueError("Invalid API key")

        with pytest.raises(AnalysisFailed) as exc_info:
            analyzer.analyze(RESUME_TEXT)

        assert mock_llm.invoke.call_count == 1
        assert sleeps == []
        assert exc_info.value.retryable is False
        assert exc_info.value.http_status == 500

    def test_custom_budget_and_delay(self, mock_llm):
        delays = []
        mock_llm.invoke.side_effect = ConnectionError("network down")
        analyzer = ResumeAnalyzer(mock_llm, max_attempts=4, base_delay=0.5, sleep=delays.append)

        with pytest.raises(AnalysisFailed):
            analyzer.analyze(RESUME_TEXT)

        assert delays == [0.5, 1.0, 2.0]

    def test_max_attempts_must_be_positive(self, mock_llm):
        with pytest.raises(ValueError):
            ResumeAnalyzer(mock_llm, max_attempts=0)


@pytest.mark.parametrize(
    "error, expected",
    [
        (httpx.ReadTimeout("read timeout"), True),
        (ConnectionResetError(), True),
        (RuntimeError("429 rate limit reached"), True),
        (RuntimeError("Connection reset by peer"), True),
        (ValueError("bad request"), False),
        (KeyError("choices"), False),
    ],
)
def test_is_retryable(error, expected):
    assert is_retryable(error) is expected


def test_create_chat_model_without_key():
    assert create_chat_model(Settings(_env_file=None, deepseek_api_key="")) is None


def test_create_chat_model_disables_client_retries():
    model = create_chat_model(Settings(_env_file=None, deepseek_api_key="sk-test", llm_timeout=12))
    assert model is not None
    assert model.max_retries == 0
