# mood analyzer: sentiment/energy scoring of journal text with gemini
#
# analysis pipeline:
#   1. strip html markup from the entry content
#   2. ask gemini (via langchain) for sentiment, energy, summary, keywords as json
#   3. pull the json object out of the reply and parse it
#   4. clamp scores to 0-100, cap keywords at 5
#   5. on any failure fall back to a fixed neutral result
#
# analyze() never raises: analysis is best-effort and must not block
# entry persistence. the failure cause is kept internally for logging.

import asyncio
import html
import json
import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI

from app.config import settings
from app.models.journal import MoodAnalysis

logger = logging.getLogger(__name__)

MAX_KEYWORDS = 5

FALLBACK_ANALYSIS = MoodAnalysis(
    sentiment=50,
    energy=50,
    summary="Could not analyze journal entry. Please try again later.",
    keywords=["unavailable"],
)

TAG_PATTERN = re.compile(r"<[^>]*>?")
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

MOOD_PROMPT = ChatPromptTemplate.from_messages([
    ("human", """Analyze the sentiment and emotional energy in this journal entry.
Provide the following information:
1. A sentiment score from 0-100 (where 0 is very negative, 50 is neutral, 100 is very positive)
2. An energy level score from 0-100 (where 0 is very low energy, 50 is moderate, 100 is very high energy)
3. A brief 1-2 sentence summary of the emotional state
4. 3-5 keywords that represent the main themes or emotions

Format your response as JSON with these fields:
{{
  "sentiment": number,
  "energy": number,
  "summary": "string",
  "keywords": ["string", "string", ...]
}}

Journal entry:
{content}"""),
])


class AnalysisFailure(Enum):
    """why an analysis fell back to defaults"""
    NOT_CONFIGURED = "not_configured"
    TIMEOUT = "timeout"
    PROVIDER_ERROR = "provider_error"
    MALFORMED_RESPONSE = "malformed_response"


class MalformedAnalysisError(ValueError):
    """provider reply could not be read as a mood analysis"""


@dataclass
class AnalysisOutcome:
    """result of one analysis attempt; cause is None on success"""
    result: MoodAnalysis
    cause: Optional[AnalysisFailure] = None

    @property
    def is_fallback(self) -> bool:
        return self.cause is not None


def strip_markup(text: str) -> str:
    """remove html tags and decode entities, leaving plain text"""
    return html.unescape(TAG_PATTERN.sub("", text or "")).strip()


def round_half_up(value: float) -> int:
    """round to nearest integer, .5 always goes up"""
    return int(math.floor(value + 0.5))


def _clamp_score(value: Any) -> int:
    if isinstance(value, bool):
        raise MalformedAnalysisError(f"score is not a number: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise MalformedAnalysisError(f"score is not a number: {value!r}")
    if number != number:  # nan
        raise MalformedAnalysisError("score is NaN")
    return round_half_up(max(0.0, min(100.0, number)))


def parse_analysis(raw: str) -> MoodAnalysis:
    """parse a provider reply into a normalized MoodAnalysis.

    the reply may wrap the json in prose or code fences, so the outermost
    {...} block is extracted first. scores are rounded and clamped to 0-100,
    keywords capped at MAX_KEYWORDS.
    """
    match = JSON_OBJECT_PATTERN.search(raw or "")
    if not match:
        raise MalformedAnalysisError("could not extract json from response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise MalformedAnalysisError(f"invalid json: {e}")
    if not isinstance(data, dict):
        raise MalformedAnalysisError("response json is not an object")

    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = "No summary available"

    raw_keywords = data.get("keywords")
    keywords = []
    if isinstance(raw_keywords, list):
        keywords = [str(k).strip() for k in raw_keywords if k is not None and str(k).strip()]

    return MoodAnalysis(
        sentiment=_clamp_score(data.get("sentiment")),
        energy=_clamp_score(data.get("energy")),
        summary=summary.strip(),
        keywords=keywords[:MAX_KEYWORDS],
    )


def get_llm() -> ChatGoogleGenerativeAI:
    """create a gemini llm instance for mood analysis"""
    return ChatGoogleGenerativeAI(
        model=settings.GEMINI_MODEL,
        google_api_key=settings.GEMINI_API_KEY,
        temperature=settings.ANALYSIS_TEMPERATURE,
    )


class MoodAnalyzer:
    """wraps the gemini analysis chain with normalization and a fallback.

    chain can be injected (anything with an async ainvoke(dict) -> str),
    otherwise it's built lazily from settings on first use.
    """

    def __init__(self, chain=None, api_key: Optional[str] = None, timeout: Optional[float] = None):
        self._chain = chain
        self._api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self._timeout = settings.ANALYSIS_TIMEOUT_SECONDS if timeout is None else timeout

    @property
    def is_configured(self) -> bool:
        return self._chain is not None or bool(self._api_key)

    def _get_chain(self):
        if self._chain is None:
            logger.info(f"Building mood analysis chain with model {settings.GEMINI_MODEL}")
            self._chain = MOOD_PROMPT | get_llm() | StrOutputParser()
        return self._chain

    async def analyze_outcome(self, text: str) -> AnalysisOutcome:
        """run one analysis attempt and report how it went"""
        if not self.is_configured:
            logger.warning("GEMINI_API_KEY not set, using fallback mood analysis")
            return AnalysisOutcome(FALLBACK_ANALYSIS.model_copy(deep=True), AnalysisFailure.NOT_CONFIGURED)

        content = strip_markup(text)

        try:
            raw = await asyncio.wait_for(
                self._get_chain().ainvoke({"content": content}),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Mood analysis timed out after {self._timeout}s")
            return AnalysisOutcome(FALLBACK_ANALYSIS.model_copy(deep=True), AnalysisFailure.TIMEOUT)
        except Exception as e:
            logger.warning(f"Mood analysis request failed: {e}")
            return AnalysisOutcome(FALLBACK_ANALYSIS.model_copy(deep=True), AnalysisFailure.PROVIDER_ERROR)

        try:
            result = parse_analysis(raw if isinstance(raw, str) else str(raw))
        except MalformedAnalysisError as e:
            logger.warning(f"Mood analysis response malformed: {e}")
            return AnalysisOutcome(FALLBACK_ANALYSIS.model_copy(deep=True), AnalysisFailure.MALFORMED_RESPONSE)

        return AnalysisOutcome(result)

    async def analyze(self, text: str) -> MoodAnalysis:
        """analyze journal text. always returns a valid result, never raises."""
        outcome = await self.analyze_outcome(text)
        return outcome.result
