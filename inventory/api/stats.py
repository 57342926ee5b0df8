"""
Stats API - inventory totals for the dashboard
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from inventory.services.product_store import ProductStore, get_store

router = APIRouter()


class StatsResponse(BaseModel):
    total_products: int
    total_items: int
    categories: int
    total_value: float


@router.get("", response_model=StatsResponse)
async def get_stats(store: ProductStore = Depends(get_store)):
    return await store.stats()
