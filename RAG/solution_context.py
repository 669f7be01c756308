# RAG/solution_context.py
# Serializes ranked matches into the context block handed to solution generation.

from typing import Any, Dict, List, Sequence

from RAG.similarity_search import ScoredMatch


def format_match(rank: int, match: ScoredMatch) -> str:
    bug = match.item
    tags = ", ".join(bug.get("tags") or [])
    return (
        f"Bug {rank} (Similarity: {match.similarity * 100:.1f}%):\n"
        f"Title: {bug.get('title', '')}\n"
        f"Description: {bug.get('description', '')}\n"
        f"Solution: {bug.get('solution', '')}\n"
        f"Tags: {tags}\n"
        f"---"
    )


def build_context(matches: Sequence[ScoredMatch]) -> str:
    """Build the context block, highest similarity first."""
    return "\n\n".join(format_match(i, match) for i, match in enumerate(matches, 1))


def summarize_matches(matches: Sequence[ScoredMatch]) -> List[Dict[str, Any]]:
    """Shape matches for an API response."""
    results = []
    for match in matches:
        bug = match.item
        results.append({
            "bug": {
                "id": bug.get("id"),
                "title": bug.get("title"),
                "description": bug.get("description"),
                "solution": bug.get("solution"),
                "tags": bug.get("tags") or [],
                "severity": bug.get("severity"),
            },
            "similarity": match.similarity,
        })
    return results
