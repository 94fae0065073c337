"""
Supply and testimonial API routes.

Route prefix: /api/v1
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import supply_repository, top_provider_repository
from database.models import SupplyRecord
from database.repositories import SupplyRepository, TopProviderRepository
from utils.schemas import (
    CategoryStat,
    DeleteResult,
    InsertResult,
    SupplyCreate,
    SupplyUpdate,
    UpdateResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["supplies"])

TOP_SUPPLIES_LIMIT = 6

SortKey = Literal["amount", "-amount", "title", "-title"]


# ── Supplies ───────────────────────────────────────────────────────────


@router.get("/supplies")
async def list_supplies(
    category: Optional[str] = None,
    sort: Optional[SortKey] = None,
    limit: Optional[int] = Query(None, ge=1),
    supplies: SupplyRepository = Depends(supply_repository),
) -> List[Dict[str, Any]]:
    """All supply posts, optionally filtered by category, sorted and capped."""
    return await supplies.list(category=category, sort=sort, limit=limit)


@router.get("/top-supplies")
async def top_supplies(
    supplies: SupplyRepository = Depends(supply_repository),
) -> List[Dict[str, Any]]:
    """The six largest supplies by amount."""
    return await supplies.top(TOP_SUPPLIES_LIMIT)


@router.get("/supply-categories")
async def supply_categories(
    supplies: SupplyRepository = Depends(supply_repository),
) -> List[str]:
    return await supplies.categories()


@router.get("/supply-stats", response_model=List[CategoryStat])
async def supply_stats(
    limit: int = Query(TOP_SUPPLIES_LIMIT, ge=1),
    supplies: SupplyRepository = Depends(supply_repository),
) -> List[Dict[str, Any]]:
    """Supply count and total amount per category, busiest first."""
    return await supplies.category_stats(limit)


@router.get("/supplies/{supply_id}")
async def get_supply(
    supply_id: str,
    supplies: SupplyRepository = Depends(supply_repository),
) -> Dict[str, Any]:
    return await supplies.get(supply_id)


@router.post("/supplies", response_model=InsertResult)
async def create_supply(
    req: SupplyCreate,
    supplies: SupplyRepository = Depends(supply_repository),
) -> Dict[str, Any]:
    """Create a new supply post."""
    result = await supplies.create(SupplyRecord.model_validate(req.model_dump()))
    logger.info("Created supply %s (%s)", result["insertedId"], req.title)
    return result


@router.put("/update-supply/{supply_id}", response_model=UpdateResult)
async def update_supply(
    supply_id: str,
    req: SupplyUpdate,
    supplies: SupplyRepository = Depends(supply_repository),
) -> Dict[str, Any]:
    """Set title / category / amount on an existing supply."""
    fields = req.model_dump(exclude_none=True)
    return await supplies.update(supply_id, fields)


@router.delete("/supplies/{supply_id}", response_model=DeleteResult)
async def delete_supply(
    supply_id: str,
    supplies: SupplyRepository = Depends(supply_repository),
) -> Dict[str, Any]:
    result = await supplies.delete(supply_id)
    logger.info("Deleted supply %s (count=%d)", supply_id, result["deletedCount"])
    return result


# ── Testimonials ───────────────────────────────────────────────────────


@router.get("/top-provider-testimonials")
async def top_provider_testimonials(
    providers: TopProviderRepository = Depends(top_provider_repository),
) -> List[Dict[str, Any]]:
    return await providers.list()
