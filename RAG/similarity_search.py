# RAG/similarity_search.py
"""
Embedding-based similarity search over stored bug reports.

Candidates come from the caller (a repository snapshot); the query embedding
comes from an injected provider. Nothing here touches the network directly
or keeps state between calls.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

import numpy as np

from utils.logger import get_logger

logger = get_logger("SimilaritySearch")

DEFAULT_TOP_K = 3
DEFAULT_THRESHOLD = 0.3


class Embedder(Protocol):
    def embed(self, text: str) -> List[float]: ...


@dataclass(frozen=True)
class ScoredMatch:
    """A candidate paired with its similarity to the query."""
    item: Dict[str, Any]
    similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {"item": self.item, "similarity": self.similarity}


def cosine_similarity(vec_a: Optional[Sequence[float]], vec_b: Optional[Sequence[float]]) -> float:
    """
    Cosine similarity of two vectors.

    Absent, empty or differently sized vectors, zero-norm vectors and
    non-finite results all score 0.0 instead of raising.
    """
    if vec_a is None or vec_b is None:
        return 0.0
    if len(vec_a) == 0 or len(vec_b) == 0 or len(vec_a) != len(vec_b):
        return 0.0

    a = np.asarray(vec_a, dtype=np.float64)
    b = np.asarray(vec_b, dtype=np.float64)

    denominator = np.linalg.norm(a) * np.linalg.norm(b)
    if denominator == 0:
        return 0.0

    score = float(np.dot(a, b) / denominator)
    # NaN or inf components would break the ordering of ranked results
    return score if np.isfinite(score) else 0.0


def rank_matches(
    query_embedding: Sequence[float],
    candidates: Sequence[Dict[str, Any]],
    top_k: int = DEFAULT_TOP_K,
    threshold: Optional[float] = DEFAULT_THRESHOLD,
) -> List[ScoredMatch]:
    """
    Score, sort, truncate and filter candidates against a query embedding.

    Sorting is stable, so equal scores keep the candidates' order. The
    threshold is applied after truncation and keeps only scores strictly
    above it; ``None`` disables it.
    """
    scored = [
        ScoredMatch(item=candidate, similarity=cosine_similarity(query_embedding, candidate.get("embedding")))
        for candidate in candidates
    ]

    ranked = sorted(scored, key=lambda match: match.similarity, reverse=True)[:top_k]

    if threshold is not None:
        ranked = [match for match in ranked if match.similarity > threshold]

    return ranked


class SimilaritySearchEngine:
    """Finds the stored items closest to a free-text query."""

    def __init__(
        self,
        embedder: Embedder,
        top_k: int = DEFAULT_TOP_K,
        threshold: Optional[float] = DEFAULT_THRESHOLD,
    ):
        if top_k < 1:
            raise ValueError("top_k must be >= 1")
        self.embedder = embedder
        self.top_k = top_k
        self.threshold = threshold

    @property
    def threshold_enabled(self) -> bool:
        return self.threshold is not None

    def search_similar(self, query_text: str, candidates: Sequence[Dict[str, Any]]) -> List[ScoredMatch]:
        """
        Rank candidates by similarity to ``query_text``.

        Returns an empty list when the query embedding is unavailable.
        """
        try:
            query_embedding = self.embedder.embed(query_text)
        except Exception as e:
            logger.warning(f"Query embedding unavailable, returning no matches: {e}")
            return []

        if not query_embedding:
            logger.warning("Query embedding is empty, returning no matches")
            return []

        matches = rank_matches(query_embedding, candidates, top_k=self.top_k, threshold=self.threshold)
        logger.info(
            f"Similarity search scored {len(candidates)} candidates, "
            f"returning {len(matches)} (threshold={self.threshold})"
        )
        return matches
