from __future__ import annotations

import json
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import MalformedPayloadError


class WorkableCompany(BaseModel):
    id: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class WorkableLocation(BaseModel):
    location_str: Optional[str] = Field(default=None, alias="location_str")
    city: Optional[str] = None
    subregion: Optional[str] = None
    country_name: Optional[str] = Field(default=None, alias="countryName")
    country: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class WorkableJobSummary(BaseModel):
    id: Optional[str] = None
    shortcode: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    department: Optional[str] = None
    workplace: Optional[str] = None
    employment_type: Optional[str] = Field(default=None, alias="employmentType")
    published_on: Optional[str] = Field(default=None, alias="published_on")
    created: Optional[str] = None
    company: Optional[WorkableCompany] = None
    location: Optional[WorkableLocation] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)


class WorkableListResponse(BaseModel):
    """Listing API page; ``jobs`` entries stay raw so each one is validated on its own."""

    jobs: List[Any] = Field(default_factory=list)
    next_page: Optional[str] = Field(default=None, alias="nextPage")
    total_size: Optional[int] = Field(default=None, alias="totalSize")

    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)


def load_workable_list(raw_payload: Any) -> WorkableListResponse:
    """Normalize a raw listing payload into a typed response.

    Accepts raw JSON string, bytes, or an already-parsed mapping. Raises
    MalformedPayloadError when ``jobs`` is missing or not a list.
    """

    if isinstance(raw_payload, (bytes, bytearray)):
        raw_payload = raw_payload.decode()

    if isinstance(raw_payload, str):
        try:
            data = json.loads(raw_payload)
        except json.JSONDecodeError:
            raise MalformedPayloadError("Listing payload was not valid JSON")
    else:
        data = raw_payload

    if not isinstance(data, dict) or not isinstance(data.get("jobs"), list):
        raise MalformedPayloadError("Listing payload has no 'jobs' list")

    next_page = data.get("nextPage")
    if next_page is not None and not isinstance(next_page, (str, int)):
        data = {**data, "nextPage": None}
    total_size = data.get("totalSize")
    if total_size is not None and (isinstance(total_size, bool) or not isinstance(total_size, int)):
        data = {**data, "totalSize": None}

    return WorkableListResponse.model_validate(data)
