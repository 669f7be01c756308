# services/ai_provider.py
"""
AIProvider: the capability every hosted model backend offers.

Subclasses implement the raw calls (``_complete``, ``_embed``,
``_synthesize``). Prompting, JSON parsing, retries and rate limiting are
shared here so the backends cannot drift apart.
"""

import json
import re
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence

from RAG.similarity_search import ScoredMatch
from RAG.solution_context import build_context
from services import prompts
from services.analytics import report_data_context
from services.errors import (
    AnalysisError,
    EmbeddingError,
    ProviderError,
    ReportGenerationError,
    SolutionGenerationError,
    SpeechError,
)
from utils.logger import get_logger

logger = get_logger("AIProvider")


# ============================================================
# Rate Limiter
# ============================================================

class RateLimiter:
    """Sliding one-minute window shared by the calls of one provider."""

    def __init__(self, max_requests_per_minute: int = 50):
        self.max_requests_per_minute = max_requests_per_minute
        self.request_times: List[float] = []
        self.lock = threading.Lock()

    def wait_if_needed(self):
        with self.lock:
            now = time.time()
            self.request_times = [t for t in self.request_times if now - t < 60]

            if len(self.request_times) >= self.max_requests_per_minute:
                oldest = self.request_times[0]
                wait = 60 - (now - oldest)
                logger.warning(f"Rate limit reached, waiting {wait:.1f}s")
                time.sleep(wait)
                now = time.time()
                self.request_times = [t for t in self.request_times if now - t < 60]

            self.request_times.append(now)


def is_rate_limit_error(error: Exception) -> bool:
    text = str(error).lower()
    return "429" in text or "rate limit" in text


def parse_json_response(text: str) -> Dict[str, Any]:
    """Parse a model reply that should be a JSON object, tolerating markdown fences."""
    text = (text or "").strip()
    text = re.sub(r"```(?:json)?\s*", "", text).strip()

    match = re.search(r"\{.*\}", text, re.DOTALL)
    if not match:
        raise ValueError("No JSON object found in model response")

    return json.loads(match.group(0))


def _coerce(value: Any, cast: Callable[[Any], Any]) -> Any:
    try:
        return cast(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def normalize_analysis(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Fill in defaults so every analysis has the same shape, whatever types the model used."""
    if not isinstance(raw, dict):
        raise ValueError("Analysis response is not a JSON object")
    productivity = raw.get("productivity")
    if not isinstance(productivity, dict):
        productivity = {}
    complexity = productivity.get("complexity")
    return {
        "extracted_skills": [
            {
                "name": str(skill["name"]),
                "category": str(skill.get("category") or "Other"),
                "confidence": _coerce(skill.get("confidence"), float) or 0.0,
            }
            for skill in _list(raw.get("extracted_skills"))
            if isinstance(skill, dict) and skill.get("name")
        ],
        "technologies": [str(t) for t in _list(raw.get("technologies"))],
        "problems_solved": _coerce(raw.get("problems_solved"), lambda v: int(round(float(v)))) or 0,
        "accomplishments": [str(a) for a in _list(raw.get("accomplishments"))],
        "productivity": {
            "hours_spent": _coerce(productivity.get("hours_spent"), float),
            "tasks_completed": _coerce(productivity.get("tasks_completed"), lambda v: int(round(float(v)))),
            "complexity": complexity if isinstance(complexity, str) else None,
        },
    }


# ============================================================
# Provider base
# ============================================================

class AIProvider(ABC):
    """Text analysis, embeddings, speech and report generation."""

    name = "base"

    def __init__(
        self,
        model: str,
        embed_model: str,
        temperature: float = 0.3,
        max_retries: int = 3,
        retry_base_delay: float = 2.0,
        max_requests_per_minute: int = 50,
    ):
        self.model = model
        self.embed_model = embed_model
        self.temperature = temperature
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.rate_limiter = RateLimiter(max_requests_per_minute)

    # ---------------------------------------------------------------------
    # Backend calls
    # ---------------------------------------------------------------------
    @abstractmethod
    def _complete(self, prompt: str) -> str:
        """Single chat completion returning the reply text."""

    @abstractmethod
    def _embed(self, text: str) -> List[float]:
        """Single embedding call."""

    @abstractmethod
    def _synthesize(self, text: str) -> bytes:
        """Single text-to-speech call returning audio bytes."""

    # ---------------------------------------------------------------------
    # Retry
    # ---------------------------------------------------------------------
    def call_with_retry(self, fn: Callable[..., Any], *args) -> Any:
        last_error = None

        for attempt in range(self.max_retries):
            try:
                self.rate_limiter.wait_if_needed()
                return fn(*args)
            except ProviderError:
                raise
            except Exception as e:
                last_error = e
                if attempt == self.max_retries - 1:
                    break

                if is_rate_limit_error(e):
                    wait = min(120, (2 ** attempt) * self.retry_base_delay * 3)
                    logger.warning(f"[{self.name}] Rate limited, waiting {wait}s before retry")
                else:
                    wait = min(60, (2 ** attempt) * self.retry_base_delay)
                    logger.warning(f"[{self.name}] Call failed ({e}), retrying in {wait}s")
                time.sleep(wait)

        raise ProviderError(f"{self.name} call failed after {self.max_retries} attempts: {last_error}")

    def complete(self, prompt: str) -> str:
        content = self.call_with_retry(self._complete, prompt)
        if not content:
            raise ProviderError(f"{self.name} returned an empty response")
        return content

    # ---------------------------------------------------------------------
    # Capabilities
    # ---------------------------------------------------------------------
    def analyze_work_entry(self, title: str, description: str) -> Dict[str, Any]:
        """Extract skills, technologies and productivity signals from a work entry."""
        try:
            reply = self.complete(prompts.create_analysis_prompt(title, description))
            return normalize_analysis(parse_json_response(reply))
        except (ProviderError, ValueError, TypeError, AttributeError) as e:
            logger.error(f"Error analyzing work entry: {e}")
            raise AnalysisError(f"AI analysis failed: {e}") from e

    def embed(self, text: str) -> List[float]:
        try:
            embedding = self.call_with_retry(self._embed, text)
        except ProviderError as e:
            logger.error(f"Error generating embedding: {e}")
            raise EmbeddingError(str(e)) from e

        if not embedding:
            raise EmbeddingError(f"{self.name} returned an empty embedding")
        return [float(x) for x in embedding]

    def embed_or_empty(self, text: str) -> List[float]:
        """Embedding, or an empty list when the provider is unavailable."""
        try:
            return self.embed(text)
        except EmbeddingError as e:
            logger.warning(f"Storing record without embedding: {e}")
            return []

    def generate_bug_solution(self, query: str, matches: Sequence[ScoredMatch]) -> str:
        try:
            return self.complete(prompts.create_solution_prompt(query, build_context(matches)))
        except ProviderError as e:
            logger.error(f"Error generating solution: {e}")
            raise SolutionGenerationError(f"Solution generation failed: {e}") from e

    def generate_report(self, entries: List[Dict[str, Any]], start_date: Any, end_date: Any) -> str:
        try:
            return self.complete(prompts.create_report_prompt(report_data_context(entries, start_date, end_date)))
        except ProviderError as e:
            logger.error(f"Error generating report: {e}")
            raise ReportGenerationError(f"Report generation failed: {e}") from e

    def synthesize_speech(self, text: str) -> bytes:
        try:
            audio = self.call_with_retry(self._synthesize, text)
        except SpeechError:
            raise
        except ProviderError as e:
            logger.error(f"Error generating audio: {e}")
            raise SpeechError(f"Audio generation failed: {e}") from e

        if not audio:
            raise SpeechError(f"{self.name} returned no audio")
        return audio

    def describe(self) -> Dict[str, Optional[str]]:
        return {"provider": self.name, "model": self.model, "embed_model": self.embed_model}
