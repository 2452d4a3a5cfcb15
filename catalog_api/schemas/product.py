"""Product schemas for request/response validation."""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class ProductBase(BaseModel):
    """Base product schema."""
    sku: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    brand: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(0, ge=0)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: Optional[str] = None
    image_url: Optional[str] = None


class ProductCreate(ProductBase):
    """Schema for creating a product."""
    is_active: bool = True


class ProductUpdate(BaseModel):
    """Schema for updating a product. Unset fields are left untouched."""
    sku: Optional[str] = Field(None, min_length=1, max_length=100)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    brand: Optional[str] = Field(None, min_length=1, max_length=255)
    quantity: Optional[int] = Field(None, ge=0)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_active: Optional[bool] = None
    category: Optional[str] = None
    image_url: Optional[str] = None


class ProductResponse(ProductBase):
    """Schema for product response."""
    id: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
