"""
Work entry endpoints: CRUD with AI analysis, plus skill/technology analytics.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from services import analytics
from services.ai_provider import AIProvider
from services.errors import AnalysisError
from services.mongo_store import WorkEntryRepository
from .dependencies import get_provider, get_work_entry_repository
from .models import WorkEntry, WorkEntryCreate, WorkEntryList, WorkEntryResponse, WorkEntryUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/work-entries", tags=["work-entries"])


def embedding_text(title: str, description: str) -> str:
    return f"{title} {description}"


def enrich(provider: AIProvider, title: str, description: str) -> Dict[str, Any]:
    """Analysis fields and embedding for a work entry. Raises AnalysisError."""
    analysis = provider.analyze_work_entry(title, description)
    embedding = provider.embed_or_empty(embedding_text(title, description))
    return {**analysis, "embedding": embedding, "ai_processed": True, "processing_error": None}


@router.post("", response_model=WorkEntryResponse, status_code=201)
def create_work_entry(
    payload: WorkEntryCreate,
    repo: WorkEntryRepository = Depends(get_work_entry_repository),
    provider: AIProvider = Depends(get_provider),
):
    if not payload.title or not payload.description:
        raise HTTPException(status_code=400, detail="Title and description are required")

    base = {
        "title": payload.title,
        "description": payload.description,
        "date": payload.date or datetime.utcnow(),
    }

    logger.info("🤖 Analyzing work entry with AI...")
    try:
        enriched = enrich(provider, payload.title, payload.description)
    except AnalysisError as e:
        # The entry is kept even when analysis fails
        logger.error(f"Error analyzing work entry: {e}")
        entry = repo.create({
            **base,
            "extracted_skills": [],
            "technologies": [],
            "problems_solved": 0,
            "accomplishments": [],
            "productivity": {},
            "ai_processed": False,
            "processing_error": str(e),
            "embedding": [],
        })
        return WorkEntryResponse(
            message="Work entry saved, but AI analysis failed",
            data=entry,
            warning=str(e),
        )

    entry = repo.create({**base, **enriched})
    logger.info(f"✅ Work entry created: {entry['id']}")
    return WorkEntryResponse(message="Work entry created and analyzed successfully", data=entry)


@router.get("", response_model=WorkEntryList)
def list_work_entries(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    technology: Optional[str] = Query(None),
    skill: Optional[str] = Query(None, description="Case-insensitive match on skill name"),
    repo: WorkEntryRepository = Depends(get_work_entry_repository),
):
    entries = repo.list(start_date=start_date, end_date=end_date, technology=technology, skill=skill)
    return WorkEntryList(count=len(entries), data=entries)


@router.get("/analytics/skills")
def skills_analytics(repo: WorkEntryRepository = Depends(get_work_entry_repository)):
    return analytics.skills_summary(repo.list_processed())


@router.get("/analytics/technologies")
def technologies_analytics(repo: WorkEntryRepository = Depends(get_work_entry_repository)):
    return analytics.technologies_summary(repo.list_processed())


@router.get("/{entry_id}", response_model=WorkEntry)
def get_work_entry(entry_id: str, repo: WorkEntryRepository = Depends(get_work_entry_repository)):
    entry = repo.get(entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Work entry not found")
    return entry


@router.put("/{entry_id}", response_model=WorkEntryResponse)
def update_work_entry(
    entry_id: str,
    payload: WorkEntryUpdate,
    repo: WorkEntryRepository = Depends(get_work_entry_repository),
    provider: AIProvider = Depends(get_provider),
):
    existing = repo.get(entry_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Work entry not found")

    if any(value is not None and not value.strip() for value in (payload.title, payload.description)):
        raise HTTPException(status_code=400, detail="Title and description cannot be empty")

    update_data = payload.model_dump(exclude_unset=True, exclude_none=True)

    if payload.title or payload.description:
        title = payload.title or existing["title"]
        description = payload.description or existing["description"]
        try:
            update_data.update(enrich(provider, title, description))
        except AnalysisError as e:
            raise HTTPException(status_code=502, detail=str(e))

    entry = repo.update(entry_id, update_data)
    if not entry:
        raise HTTPException(status_code=404, detail="Work entry not found")

    return WorkEntryResponse(message="Work entry updated successfully", data=entry)


@router.delete("/{entry_id}")
def delete_work_entry(entry_id: str, repo: WorkEntryRepository = Depends(get_work_entry_repository)):
    if not repo.delete(entry_id):
        raise HTTPException(status_code=404, detail="Work entry not found")
    return {"message": "Work entry deleted successfully"}
