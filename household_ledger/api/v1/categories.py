"""GET /v1/categories - category registry"""

from typing import List
from fastapi import APIRouter

from household_ledger.api.v1.schemas import CategorySchema
from household_ledger.domain.categories import all_categories

router = APIRouter()


@router.get("/categories", response_model=List[CategorySchema])
def list_categories():
    """Category registry with display names, colors and icons"""
    return [CategorySchema.from_domain(meta) for meta in all_categories()]
