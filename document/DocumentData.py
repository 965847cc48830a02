# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: DocumentData
# -----------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def _pick(data: Dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    """Read a field from a payload that may use camelCase or snake_case keys."""
    if camel in data and data[camel] is not None:
        return data[camel]
    if snake in data and data[snake] is not None:
        return data[snake]
    return default


def _str_list(value: Any) -> List[str]:
    if not value:
        return []
    return [str(v) for v in value if v is not None and str(v).strip()]


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return datetime.now(timezone.utc)


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


@dataclass
class JobData:
    """Current job posting as returned by the jobs service."""
    id: str
    employer_id: str
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
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobData":
        return cls(
            id=str(_pick(data, "id", "id")),
            employer_id=str(_pick(data, "employerId", "employer_id", "")),
            title=_pick(data, "title", "title", ""),
            description=_pick(data, "description", "description", ""),
            requirements=_pick(data, "requirements", "requirements"),
            company_name=_pick(data, "companyName", "company_name"),
            location=_pick(data, "location", "location"),
            country=_pick(data, "country", "country"),
            work_mode=str(_pick(data, "workMode", "work_mode", "")),
            experience_level=str(_pick(data, "experienceLevel", "experience_level", "")),
            job_type=str(_pick(data, "jobType", "job_type", "")),
            salary_min=_optional_float(_pick(data, "salaryMin", "salary_min")),
            salary_max=_optional_float(_pick(data, "salaryMax", "salary_max")),
            salary_currency=_pick(data, "salaryCurrency", "salary_currency"),
            is_salary_visible=bool(_pick(data, "isSalaryVisible", "is_salary_visible", False)),
            skills=_str_list(_pick(data, "skills", "skills")),
            service_now_versions=_str_list(_pick(data, "serviceNowVersions", "service_now_versions")),
            is_active=bool(_pick(data, "isActive", "is_active", False)),
            created_at=parse_timestamp(_pick(data, "createdAt", "created_at")),
        )


@dataclass
class CandidateData:
    """Current candidate profile as returned by the profiles service."""
    user_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
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
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CandidateData":
        return cls(
            user_id=str(_pick(data, "userId", "user_id")),
            first_name=_pick(data, "firstName", "first_name"),
            last_name=_pick(data, "lastName", "last_name"),
            headline=_pick(data, "headline", "headline"),
            bio=_pick(data, "bio", "bio"),
            current_role=_pick(data, "currentRole", "current_role"),
            location=_pick(data, "location", "location"),
            country=_pick(data, "country", "country"),
            years_of_experience=int(_pick(data, "yearsOfExperience", "years_of_experience", 0)),
            experience_level=str(_pick(data, "experienceLevel", "experience_level", "")),
            availability=str(_pick(data, "availability", "availability", "")),
            open_to_remote=bool(_pick(data, "openToRemote", "open_to_remote", False)),
            skills=_str_list(_pick(data, "skills", "skills")),
            certifications=_str_list(_pick(data, "certifications", "certifications")),
            service_now_versions=_str_list(_pick(data, "serviceNowVersions", "service_now_versions")),
            updated_at=parse_timestamp(_pick(data, "updatedAt", "updated_at")),
        )
