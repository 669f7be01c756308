"""
Retrieval layer: similarity search over stored bug embeddings.
"""

from .similarity_search import ScoredMatch, SimilaritySearchEngine, cosine_similarity, rank_matches
from .solution_context import build_context

__all__ = [
    "ScoredMatch",
    "SimilaritySearchEngine",
    "cosine_similarity",
    "rank_matches",
    "build_context",
]
