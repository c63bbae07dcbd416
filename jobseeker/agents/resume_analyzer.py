"""
Resume Analyzer.

Sends extracted resume text to the chat model, validates the JSON it returns,
and retries transient failures with exponential backoff.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx
import openai
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_deepseek import ChatDeepSeek

from jobseeker.config import Settings
from jobseeker.errors import AnalysisFailed, InvalidInput, InvalidResponse, NotConfigured, ServiceError
from jobseeker.utils.parser import ValidatedAnalysis, parse_analysis_response

logger = logging.getLogger(__name__)

MIN_RESUME_CHARS = 50

RESUME_ANALYSIS_PROMPT = """You are a resume analysis engine, not a career coach.
Analyze the resume objectively, as a set of verifiable professional signals.

## Rules
- Do NOT use subjective praise ("strong", "excellent", "passionate") unless directly supported by evidence
- Do NOT infer intentions, interests, or potential. Only analyze what is explicitly present
- Think like a hiring system, not a human reviewer

## Steps
1. Extract only factual, verifiable skills and experiences
2. Weight skills by depth (used vs designed vs owned) and scope (personal/team/production)
3. Map signals to common job market role functions
4. Infer job keywords the way LinkedIn/Indeed/Seek would categorize this resume

## Output Format (JSON only, no explanation)
```json
{
    "skills": {
        "Programming Languages": ["skill1", "skill2"],
        "Frameworks & Libraries": ["skill1", "skill2"],
        "Tools & Platforms": ["skill1", "skill2"],
        "Databases": ["skill1", "skill2"],
        "Cloud & Infrastructure": ["skill1", "skill2"]
    },
    "summary": "A neutral, evidence-based professional summary (1-2 paragraphs)",
    "jobKeywords": ["job title 1", "job title 2", "job title 3"]
}
```

Return ONLY the JSON object, no other text.
"""

_RETRYABLE_EXCEPTIONS = (
    TimeoutError,
    ConnectionError,
    httpx.TimeoutException,
    httpx.NetworkError,
    openai.APIConnectionError,  # includes APITimeoutError
    openai.RateLimitError,
)
_RETRYABLE_MARKERS = ("timeout", "timed out", "rate limit", "network", "connection reset")


def is_retryable(error: BaseException) -> bool:
    """Transient network, timeout and rate-limit failures may succeed on retry."""
    if isinstance(error, ServiceError):
        return error.retryable
    if isinstance(error, _RETRYABLE_EXCEPTIONS):
        return True
    message = str(error).lower()
    return any(marker in message for marker in _RETRYABLE_MARKERS)


def build_prompt(resume_text: str) -> str:
    return f"{RESUME_ANALYSIS_PROMPT}\nResume:\n{resume_text}"


def create_chat_model(settings: Settings) -> BaseChatModel | None:
    """Chat model for analysis, or None when no API key is configured."""
    if not settings.deepseek_api_key:
        logger.warning("DEEPSEEK_API_KEY not set; resume analysis disabled")
        return None

    kwargs: dict[str, Any] = {
        "model": settings.llm_model,
        "api_key": settings.deepseek_api_key,
        "temperature": settings.llm_temperature,
        "timeout": settings.llm_timeout,
        "max_retries": 0,  # retries are owned by ResumeAnalyzer
    }
    if settings.llm_api_base:
        kwargs["base_url"] = settings.llm_api_base
    return ChatDeepSeek(**kwargs)


class ResumeAnalyzer:
    """Analysis client: one validated structured analysis per call."""

    def __init__(
        self,
        model: BaseChatModel | None,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.model = model
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResumeAnalyzer":
        return cls(
            create_chat_model(settings),
            max_attempts=settings.analysis_max_attempts,
            base_delay=settings.analysis_base_delay,
        )

    def is_configured(self) -> bool:
        return self.model is not None

    def analyze(self, resume_text: str) -> ValidatedAnalysis:
        """
        Analyze resume text.

        Raises:
            NotConfigured: no API key at construction
            InvalidInput: text empty or shorter than MIN_RESUME_CHARS
            InvalidResponse / AnalysisFailed: after the retry budget, or at once
                when the failure is not retryable
        """
        if self.model is None:
            raise NotConfigured("Analysis API not configured")

        if not resume_text or len(resume_text.strip()) < MIN_RESUME_CHARS:
            raise InvalidInput("Resume text too short or empty")

        return self._with_retry(lambda: self._analyze_once(resume_text))

    def _analyze_once(self, resume_text: str) -> ValidatedAnalysis:
        try:
            response = self.model.invoke([HumanMessage(content=build_prompt(resume_text))])
        except Exception as e:
            raise AnalysisFailed(str(e) or "Analysis API call failed", retryable=is_retryable(e)) from e

        content = getattr(response, "content", None)
        if not isinstance(content, str) or not content:
            raise AnalysisFailed("Empty response from analysis API", retryable=True)

        result = parse_analysis_response(content)
        if not isinstance(result, ValidatedAnalysis):
            raise InvalidResponse(f"Failed to parse analysis response: {result.reason}")
        return result

    def _with_retry(self, operation: Callable[[], ValidatedAnalysis]) -> ValidatedAnalysis:
        """Run operation up to max_attempts times, sleeping base_delay * 2**(n-1) after attempt n."""
        attempt = 1
        while True:
            try:
                return operation()
            except ServiceError as e:
                if not e.retryable:
                    raise
                if attempt >= self.max_attempts:
                    logger.error("Analysis failed after %d attempts: %s", attempt, e)
                    raise
                delay = self.base_delay * 2 ** (attempt - 1)
                logger.warning("Analysis attempt %d failed (%s); retrying in %.1fs", attempt, e, delay)
                self._sleep(delay)
                attempt += 1
