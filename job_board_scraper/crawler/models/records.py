from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class JobSeed(BaseModel):
    """Fields already known from the listing page."""

    url: str
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    date_posted: Optional[str] = None
    id: Optional[str] = None
    shortcode: Optional[str] = None
    department: Optional[str] = None
    workplace_type: Optional[str] = None
    employment_type: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class JobRecord(BaseModel):
    """One output row. Every field is optional; a missing value is not an error."""

    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    date_posted: Optional[str] = None
    description_html: Optional[str] = None
    description_text: Optional[str] = None
    job_types: Optional[List[str]] = None
    salary: Optional[str] = None
    employment_type: Optional[str] = None
    valid_through: Optional[str] = None
    url: Optional[str] = None
    id: Optional[str] = None
    shortcode: Optional[str] = None
    department: Optional[str] = None
    workplace_type: Optional[str] = None
    benefits: Optional[str] = None
    qualifications: Optional[str] = None
    responsibilities: Optional[str] = None
    industry: Optional[str] = None
