"""Owner contact processing routes."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from contacts.categories import CATEGORY_ORDER, categorize, category_metadata
from contacts.pipeline import process_contacts
from core.logging_config import get_logger
from core.utils import generate_unique_key

router = APIRouter()
LOGGER = get_logger(__name__)


class ProcessContactsRequest(BaseModel):
    """Request body for contact processing."""

    bbl: Optional[str] = Field(None, description="Parcel BBL, e.g. 1-13-1 or 1000130001")
    contacts: List[Dict[str, Any]] = Field(default_factory=list, description="Raw owner contacts")
    threshold: Optional[float] = Field(None, ge=0.0, le=1.0, description="Merge threshold")
    respect_source_groups: Optional[bool] = Field(
        None, description="Only merge contacts from the same agency/source"
    )


class ProcessContactsResponse(BaseModel):
    """Merged, categorized contacts plus run statistics."""

    bbl: Optional[str]
    contacts: List[Dict[str, Any]]
    stats: Dict[str, Any]
    clusters: Optional[List[List[int]]] = None


@router.post("/process", response_model=ProcessContactsResponse)
async def process_parcel_contacts(
    request: ProcessContactsRequest,
    explain: bool = Query(default=False, description="Include the input indices of each cluster"),
) -> Dict[str, Any]:
    """
    Format, deduplicate and categorize one parcel's contacts.

    Returns:
        One contact card per cluster, in first-appearance order.
    """
    LOGGER.debug(f"Processing {len(request.contacts)} contacts for bbl={request.bbl}")
    result = process_contacts(
        request.contacts,
        request.threshold,
        bbl=request.bbl,
        respect_source_groups=request.respect_source_groups,
        request_id=generate_unique_key(),
    )
    return {"bbl": request.bbl, **result.to_dict(include_clusters=explain)}


@router.get("/categories")
async def list_categories() -> List[Dict[str, Any]]:
    """Category metadata in display order."""
    return [category_metadata(tag).to_dict() for tag in CATEGORY_ORDER]


@router.get("/categorize")
async def categorize_pair(
    agency: str = Query(..., description="Reporting agency"),
    source: str = Query(default="", description="Source dataset"),
) -> Dict[str, Any]:
    """Category an agency/source pair maps to."""
    category = categorize({"agency": agency, "source": source})
    return {"agency": agency, "source": source, **category_metadata(category).to_dict()}
