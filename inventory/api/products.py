"""
Products API endpoints
"""
from fastapi import APIRouter, Depends
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from inventory.services.product_store import ProductStore, get_store

router = APIRouter()


class ProductResponse(BaseModel):
    id: int
    name: Optional[str]
    category: Optional[str]
    quantity: Optional[int]
    price: Optional[float]
    description: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class ProductPayload(BaseModel):
    # Presence is checked by the store so a missing field is a 400, not a 422
    name: Optional[str] = None
    category: Optional[str] = None
    # SQLite INTEGER is a signed 64-bit value
    quantity: Optional[int] = Field(None, ge=0, le=2**63 - 1)
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None


class CreatedResponse(BaseModel):
    id: int
    message: str


class MessageResponse(BaseModel):
    message: str


@router.get("", response_model=List[ProductResponse])
async def list_products(store: ProductStore = Depends(get_store)):
    """List all products, newest first"""
    return await store.list()


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, store: ProductStore = Depends(get_store)):
    """Get a single product"""
    return await store.get(product_id)


@router.post("", response_model=CreatedResponse)
async def create_product(data: ProductPayload, store: ProductStore = Depends(get_store)):
    """Create a new product"""
    product_id = await store.create(data.model_dump())
    return CreatedResponse(id=product_id, message="Product created successfully")


@router.put("/{product_id}", response_model=MessageResponse)
async def update_product(
    product_id: int,
    data: ProductPayload,
    store: ProductStore = Depends(get_store)
):
    """Replace every field of a product"""
    await store.update(product_id, data.model_dump())
    return MessageResponse(message="Product updated successfully")


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: int, store: ProductStore = Depends(get_store)):
    """Delete a product permanently"""
    await store.delete(product_id)
    return MessageResponse(message="Product deleted successfully")
