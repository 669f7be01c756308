"""
Report endpoints: AI-written period reports, statistics, timeline and audio.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from config import Config
from services import analytics
from services.ai_provider import AIProvider
from services.audio_store import generate_audio
from services.errors import ReportGenerationError, SpeechError, SpeechUnavailableError
from services.mongo_store import WorkEntryRepository
from utils.report_generator import export_report_pdf
from .dependencies import get_provider, get_work_entry_repository
from .models import (
    AudioRequest,
    AudioResponse,
    ReportMetadata,
    ReportPeriod,
    ReportRequest,
    ReportResponse,
    ReportStats,
    TimelineWeek,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


def speech_http_error(error: SpeechError) -> HTTPException:
    status = 501 if isinstance(error, SpeechUnavailableError) else 502
    return HTTPException(status_code=status, detail=str(error))


@router.post("/generate", response_model=ReportResponse)
def generate_report(
    payload: ReportRequest,
    repo: WorkEntryRepository = Depends(get_work_entry_repository),
    provider: AIProvider = Depends(get_provider),
):
    if not payload.start_date or not payload.end_date:
        raise HTTPException(status_code=400, detail="Start date and end date are required")

    logger.info(f"📊 Generating report from {payload.start_date} to {payload.end_date}...")
    entries = repo.list_processed(payload.start_date, payload.end_date)

    if not entries:
        raise HTTPException(status_code=404, detail="No work entries found in this date range")

    try:
        report_text = provider.generate_report(entries, payload.start_date.date(), payload.end_date.date())
    except ReportGenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))

    metadata = ReportMetadata(
        period=ReportPeriod(start_date=payload.start_date, end_date=payload.end_date),
        entries_count=len(entries),
    )
    audio_file = pdf_file = None

    if payload.include_audio:
        logger.info("🎙️ Converting report to audio...")
        try:
            audio_file = generate_audio(provider, report_text, Config.REPORTS_DIR)
        except SpeechError as e:
            raise speech_http_error(e)

    if payload.include_pdf:
        pdf_file = export_report_pdf(
            report_text,
            analytics.report_stats(entries),
            metadata.model_dump(mode="json"),
            Config.REPORTS_DIR,
        )

    return ReportResponse(
        report_text=report_text,
        metadata=metadata,
        audio_file=audio_file,
        pdf_file=pdf_file,
    )


@router.get("/stats", response_model=ReportStats)
def report_statistics(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    repo: WorkEntryRepository = Depends(get_work_entry_repository),
):
    # A range only applies when both ends are given
    if not (start_date and end_date):
        start_date = end_date = None
    return analytics.report_stats(repo.list_processed(start_date, end_date))


@router.post("/generate-audio", response_model=AudioResponse)
def generate_report_audio(payload: AudioRequest, provider: AIProvider = Depends(get_provider)):
    if not payload.text or not payload.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    logger.info("🎙️ Generating audio file...")
    try:
        audio_file = generate_audio(provider, payload.text, Config.REPORTS_DIR)
    except SpeechError as e:
        raise speech_http_error(e)

    return AudioResponse(message="Audio generated successfully", audio_file=audio_file)


@router.get("/timeline", response_model=List[TimelineWeek])
def report_timeline(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    repo: WorkEntryRepository = Depends(get_work_entry_repository),
):
    if not (start_date and end_date):
        start_date = end_date = None
    return analytics.weekly_timeline(repo.list_processed(start_date, end_date))
