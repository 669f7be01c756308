"""
Pydantic models for the Progress Tracker API layer
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


# ==================== Enums ====================

class Severity(str, Enum):
    """Bug severity"""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


def _strip(value: Optional[str]) -> Optional[str]:
    return value.strip() if isinstance(value, str) else value


# ==================== Work Entry Models ====================

class Skill(BaseModel):
    name: str
    category: Optional[str] = None
    confidence: Optional[float] = None


class Productivity(BaseModel):
    hours_spent: Optional[float] = None
    tasks_completed: Optional[int] = None
    complexity: Optional[str] = None


class WorkEntryCreate(BaseModel):
    """Request to record a work entry"""
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = Field(None, description="Defaults to now")

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        return _strip(value)


class WorkEntryUpdate(BaseModel):
    """Partial update; changing title or description triggers re-analysis"""
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        return _strip(value)


class WorkEntry(BaseModel):
    """Stored work entry (embedding omitted)"""
    id: str
    title: str
    description: str
    date: datetime
    extracted_skills: List[Skill] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    problems_solved: int = 0
    accomplishments: List[str] = Field(default_factory=list)
    productivity: Productivity = Field(default_factory=Productivity)
    ai_processed: bool = False
    processing_error: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WorkEntryResponse(BaseModel):
    message: str
    data: WorkEntry
    warning: Optional[str] = None


class WorkEntryList(BaseModel):
    count: int
    data: List[WorkEntry]


# ==================== Bug Models ====================

class BugCreate(BaseModel):
    """Request to record a solved bug"""
    title: Optional[str] = None
    description: Optional[str] = None
    solution: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    severity: Severity = Severity.MEDIUM
    category: str = "Other"

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        return _strip(value)


class BugUpdate(BaseModel):
    """Partial update; changing title, description or solution re-embeds the bug"""
    title: Optional[str] = None
    description: Optional[str] = None
    solution: Optional[str] = None
    tags: Optional[List[str]] = None
    severity: Optional[Severity] = None
    category: Optional[str] = None
    resolved_date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: Optional[str]) -> Optional[str]:
        return _strip(value)


class Bug(BaseModel):
    """Stored bug (embedding omitted)"""
    id: str
    title: str
    description: str
    solution: str
    tags: List[str] = Field(default_factory=list)
    severity: Severity = Severity.MEDIUM
    category: Optional[str] = "Other"
    resolved_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BugResponse(BaseModel):
    message: str
    data: Bug


class BugList(BaseModel):
    count: int
    data: List[Bug]


class BugSummary(BaseModel):
    id: str
    title: str
    description: str
    solution: str
    tags: List[str] = Field(default_factory=list)
    severity: Optional[Severity] = None


class SimilarBug(BaseModel):
    bug: BugSummary
    similarity: float


class SearchSolutionRequest(BaseModel):
    query: Optional[str] = Field(None, description="Description of the new issue")


class SearchSolutionResponse(BaseModel):
    query: Optional[str] = None
    message: Optional[str] = None
    suggested_solution: Optional[str] = None
    similar_bugs: List[SimilarBug] = Field(default_factory=list)


class TagCount(BaseModel):
    tag: str
    count: int


class BugStats(BaseModel):
    total: int
    by_severity: Dict[str, int]
    by_category: Dict[str, int]
    common_tags: List[TagCount]


# ==================== Report Models ====================

class ReportRequest(BaseModel):
    """Request to generate a report for a date range"""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    include_audio: bool = False
    include_pdf: bool = False


class GeneratedFile(BaseModel):
    filename: str
    filepath: str
    url: str


class ReportPeriod(BaseModel):
    start_date: datetime
    end_date: datetime


class ReportMetadata(BaseModel):
    period: ReportPeriod
    entries_count: int
    generated_at: datetime = Field(default_factory=datetime.utcnow)


class ReportResponse(BaseModel):
    report_text: str
    metadata: ReportMetadata
    audio_file: Optional[GeneratedFile] = None
    pdf_file: Optional[GeneratedFile] = None


class AudioRequest(BaseModel):
    text: Optional[str] = None


class AudioResponse(BaseModel):
    message: str
    audio_file: GeneratedFile


class SkillCount(BaseModel):
    name: str
    category: Optional[str] = None
    count: int


class ReportStats(BaseModel):
    total_entries: int
    total_problems_solved: float
    total_tasks_completed: float
    total_hours_spent: float
    skills_breakdown: List[SkillCount]
    technologies_used: List[str]
    complexity_distribution: Dict[str, int]
    top_accomplishments: List[str]


class TimelineWeek(BaseModel):
    week_start: str
    entries: List[WorkEntry]
    total_problems: float
    total_tasks: float
    skills: List[str]
    technologies: List[str]
    entries_count: int

