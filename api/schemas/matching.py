# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-14
# Description: matching.py
# -----------------------------------------------------------------------------
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # JSON bodies use camelCase; python side stays snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmbeddingStatusResponse(CamelModel):
    document_id: str
    document_type: str
    status: str
    last_indexed_at: Optional[datetime] = None
    retry_count: int = 0
    error_message: Optional[str] = None


class JobMatchResponse(CamelModel):
    job_id: str
    title: str
    company_name: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    work_mode: str = ""
    experience_level: str = ""
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    salary_currency: Optional[str] = None
    skills_required: List[str] = Field(default_factory=list)
    score: float
    score_percent: int = Field(..., ge=0, le=100)
    matched_skills: List[str] = Field(default_factory=list)
    posted_at: Optional[datetime] = None


class CandidateMatchResponse(CamelModel):
    user_id: str
    full_name: Optional[str] = None
    headline: Optional[str] = None
    current_role: Optional[str] = None
    location: Optional[str] = None
    years_of_experience: int = 0
    experience_level: str = ""
    availability: str = ""
    skills: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    score: float
    score_percent: int = Field(..., ge=0, le=100)
    matched_skills: List[str] = Field(default_factory=list)
    profile_updated_at: Optional[datetime] = None


class JobMatchResultsResponse(CamelModel):
    total: int
    page: int
    page_size: int
    embedding_ready: bool
    results: List[JobMatchResponse]


class CandidateMatchResultsResponse(CamelModel):
    total: int
    page: int
    page_size: int
    embedding_ready: bool
    results: List[CandidateMatchResponse]
