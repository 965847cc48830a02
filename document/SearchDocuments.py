# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: SearchDocuments
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from document.DocumentData import CandidateData, JobData, parse_timestamp


def _clean_metadata(meta: Dict[str, Any]) -> Dict[str, Any]:
    # Vector store metadata accepts scalars only and rejects None
    return {k: v for k, v in meta.items() if v is not None}


def _load_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    return [str(v) for v in json.loads(value)]


@dataclass
class JobSearchDocument:
    """Denormalised job projection stored in the vector index."""
    id: str
    title: str
    description: str = ""
    requirements: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    work_mode: str = ""
    experience_level: str = ""
    job_type: str = ""
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    salary_currency: Optional[str] = None
    is_salary_visible: bool = False
    skills: List[str] = field(default_factory=list)
    service_now_versions: List[str] = field(default_factory=list)
    is_active: bool = True
    created_at: Optional[datetime] = None
    embedding: List[float] = field(default_factory=list)

    @classmethod
    def from_job(cls, job: JobData, embedding: List[float]) -> "JobSearchDocument":
        return cls(
            id=str(job.id),
            title=job.title,
            description=job.description,
            requirements=job.requirements,
            company_name=job.company_name,
            location=job.location,
            country=job.country,
            work_mode=job.work_mode,
            experience_level=job.experience_level,
            job_type=job.job_type,
            salary_min=job.salary_min,
            salary_max=job.salary_max,
            salary_currency=job.salary_currency,
            is_salary_visible=job.is_salary_visible,
            skills=list(job.skills),
            service_now_versions=list(job.service_now_versions),
            is_active=job.is_active,
            created_at=job.created_at,
            embedding=list(embedding),
        )

    def to_metadata(self) -> Dict[str, Any]:
        return _clean_metadata({
            "title": self.title,
            "company_name": self.company_name,
            "location": self.location,
            "country": self.country,
            "work_mode": self.work_mode,
            "experience_level": self.experience_level,
            "job_type": self.job_type,
            "salary_min": self.salary_min,
            "salary_max": self.salary_max,
            "salary_currency": self.salary_currency,
            "is_salary_visible": self.is_salary_visible,
            "skills": json.dumps(self.skills),
            "service_now_versions": json.dumps(self.service_now_versions),
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        })

    @classmethod
    def from_metadata(
            cls,
            doc_id: str,
            meta: Dict[str, Any],
            text: str = "",
            embedding: Optional[List[float]] = None,
    ) -> "JobSearchDocument":
        return cls(
            id=doc_id,
            title=meta.get("title", ""),
            description=text or "",
            company_name=meta.get("company_name"),
            location=meta.get("location"),
            country=meta.get("country"),
            work_mode=meta.get("work_mode", ""),
            experience_level=meta.get("experience_level", ""),
            job_type=meta.get("job_type", ""),
            salary_min=meta.get("salary_min"),
            salary_max=meta.get("salary_max"),
            salary_currency=meta.get("salary_currency"),
            is_salary_visible=bool(meta.get("is_salary_visible", False)),
            skills=_load_list(meta.get("skills")),
            service_now_versions=_load_list(meta.get("service_now_versions")),
            is_active=bool(meta.get("is_active", False)),
            created_at=parse_timestamp(meta["created_at"]) if meta.get("created_at") else None,
            embedding=list(embedding or []),
        )


@dataclass
class CandidateSearchDocument:
    """Denormalised candidate projection stored in the vector index."""
    id: str
    full_name: Optional[str] = None
    headline: Optional[str] = None
    summary: Optional[str] = None
    current_role: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    years_of_experience: int = 0
    experience_level: str = ""
    availability: str = ""
    open_to_remote: bool = False
    skills: List[str] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)
    service_now_versions: List[str] = field(default_factory=list)
    updated_at: Optional[datetime] = None
    embedding: List[float] = field(default_factory=list)

    @classmethod
    def from_candidate(cls, candidate: CandidateData, embedding: List[float]) -> "CandidateSearchDocument":
        return cls(
            id=str(candidate.user_id),
            full_name=candidate.full_name or None,
            headline=candidate.headline,
            summary=candidate.bio,
            current_role=candidate.current_role,
            location=candidate.location,
            country=candidate.country,
            years_of_experience=candidate.years_of_experience,
            experience_level=candidate.experience_level,
            availability=candidate.availability,
            open_to_remote=candidate.open_to_remote,
            skills=list(candidate.skills),
            certifications=list(candidate.certifications),
            service_now_versions=list(candidate.service_now_versions),
            updated_at=candidate.updated_at,
            embedding=list(embedding),
        )

    def to_metadata(self) -> Dict[str, Any]:
        return _clean_metadata({
            "full_name": self.full_name,
            "headline": self.headline,
            "current_role": self.current_role,
            "location": self.location,
            "country": self.country,
            "years_of_experience": self.years_of_experience,
            "experience_level": self.experience_level,
            "availability": self.availability,
            "open_to_remote": self.open_to_remote,
            "skills": json.dumps(self.skills),
            "certifications": json.dumps(self.certifications),
            "service_now_versions": json.dumps(self.service_now_versions),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        })

    @classmethod
    def from_metadata(
            cls,
            doc_id: str,
            meta: Dict[str, Any],
            text: str = "",
            embedding: Optional[List[float]] = None,
    ) -> "CandidateSearchDocument":
        return cls(
            id=doc_id,
            full_name=meta.get("full_name"),
            headline=meta.get("headline"),
            summary=text or None,
            current_role=meta.get("current_role"),
            location=meta.get("location"),
            country=meta.get("country"),
            years_of_experience=int(meta.get("years_of_experience", 0)),
            experience_level=meta.get("experience_level", ""),
            availability=meta.get("availability", ""),
            open_to_remote=bool(meta.get("open_to_remote", False)),
            skills=_load_list(meta.get("skills")),
            certifications=_load_list(meta.get("certifications")),
            service_now_versions=_load_list(meta.get("service_now_versions")),
            updated_at=parse_timestamp(meta["updated_at"]) if meta.get("updated_at") else None,
            embedding=list(embedding or []),
        )
