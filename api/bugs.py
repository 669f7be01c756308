"""
Bug endpoints: CRUD, statistics, and retrieval-augmented solution search.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from RAG.similarity_search import SimilaritySearchEngine
from RAG.solution_context import summarize_matches
from services import analytics
from services.ai_provider import AIProvider
from services.errors import SolutionGenerationError
from services.mongo_store import BugRepository
from .dependencies import get_bug_repository, get_provider, get_search_engine
from .models import (
    Bug,
    BugCreate,
    BugList,
    BugResponse,
    BugStats,
    BugUpdate,
    SearchSolutionRequest,
    SearchSolutionResponse,
    Severity,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bugs", tags=["bugs"])


def embedding_text(title: str, description: str, solution: str) -> str:
    return f"{title} {description} {solution}"


@router.post("", response_model=BugResponse, status_code=201)
def create_bug(
    payload: BugCreate,
    repo: BugRepository = Depends(get_bug_repository),
    provider: AIProvider = Depends(get_provider),
):
    if not payload.title or not payload.description or not payload.solution:
        raise HTTPException(status_code=400, detail="Title, description, and solution are required")

    embedding = provider.embed_or_empty(embedding_text(payload.title, payload.description, payload.solution))

    bug = repo.create({
        "title": payload.title,
        "description": payload.description,
        "solution": payload.solution,
        "tags": payload.tags,
        "severity": payload.severity.value,
        "category": payload.category or "Other",
        "resolved_date": datetime.utcnow(),
        "embedding": embedding,
    })
    logger.info(f"✅ Bug entry created: {bug['id']} (embedded: {bool(embedding)})")
    return BugResponse(message="Bug entry created successfully", data=bug)


@router.get("", response_model=BugList)
def list_bugs(
    severity: Optional[Severity] = Query(None),
    category: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Full-text search over title, description and solution"),
    repo: BugRepository = Depends(get_bug_repository),
):
    bugs = repo.list(
        severity=severity.value if severity else None,
        category=category,
        tag=tag,
        search=search,
    )
    return BugList(count=len(bugs), data=bugs)


@router.post("/search-solution", response_model=SearchSolutionResponse)
def search_solution(
    payload: SearchSolutionRequest,
    repo: BugRepository = Depends(get_bug_repository),
    engine: SimilaritySearchEngine = Depends(get_search_engine),
    provider: AIProvider = Depends(get_provider),
):
    """
    Find past bugs similar to the query and synthesize a suggested solution.

    Embedding failures and empty result sets are answered with an empty
    ``similar_bugs`` list rather than an error.
    """
    if not payload.query or not payload.query.strip():
        raise HTTPException(status_code=400, detail="Query is required")

    logger.info("🔍 Searching for similar bugs using RAG...")
    candidates = repo.list_with_embeddings()

    if not candidates:
        return SearchSolutionResponse(
            query=payload.query,
            message="No bugs in database yet. Add some bug solutions first!",
        )

    matches = engine.search_similar(payload.query, candidates)

    if not matches:
        return SearchSolutionResponse(query=payload.query, message="No similar bugs found")

    logger.info(f"🤖 Generating AI solution based on {len(matches)} similar bugs...")
    try:
        suggested = provider.generate_bug_solution(payload.query, matches)
    except SolutionGenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return SearchSolutionResponse(
        query=payload.query,
        suggested_solution=suggested,
        similar_bugs=summarize_matches(matches),
    )


@router.get("/analytics/stats", response_model=BugStats)
def bug_statistics(repo: BugRepository = Depends(get_bug_repository)):
    return analytics.bug_stats(repo.list_all())


@router.get("/{bug_id}", response_model=Bug)
def get_bug(bug_id: str, repo: BugRepository = Depends(get_bug_repository)):
    bug = repo.get(bug_id)
    if not bug:
        raise HTTPException(status_code=404, detail="Bug not found")
    return bug


@router.put("/{bug_id}", response_model=BugResponse)
def update_bug(
    bug_id: str,
    payload: BugUpdate,
    repo: BugRepository = Depends(get_bug_repository),
    provider: AIProvider = Depends(get_provider),
):
    existing = repo.get(bug_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Bug not found")

    if any(value is not None and not value.strip() for value in (payload.title, payload.description, payload.solution)):
        raise HTTPException(status_code=400, detail="Title, description, and solution cannot be empty")

    update_data = payload.model_dump(exclude_unset=True, exclude_none=True, mode="json")
    if payload.resolved_date:
        update_data["resolved_date"] = payload.resolved_date

    # Text changed: the stored embedding no longer describes the bug
    if payload.title or payload.description or payload.solution:
        update_data["embedding"] = provider.embed_or_empty(embedding_text(
            payload.title or existing["title"],
            payload.description or existing["description"],
            payload.solution or existing["solution"],
        ))

    bug = repo.update(bug_id, update_data)
    if not bug:
        raise HTTPException(status_code=404, detail="Bug not found")

    return BugResponse(message="Bug updated successfully", data=bug)


@router.delete("/{bug_id}")
def delete_bug(bug_id: str, repo: BugRepository = Depends(get_bug_repository)):
    if not repo.delete(bug_id):
        raise HTTPException(status_code=404, detail="Bug not found")
    return {"message": "Bug deleted successfully"}
