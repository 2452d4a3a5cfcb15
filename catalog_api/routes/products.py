"""Product routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from catalog_api.auth import require_admin, require_user
from catalog_api.database import get_db
from catalog_api.schemas.auth import CurrentUser
from catalog_api.schemas.common import MessageResponse
from catalog_api.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from catalog_api.services.products import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("/", response_model=MessageResponse[List[ProductResponse]])
def list_products(
    brand: Optional[str] = Query(None, description="Filter by brand"),
    category: Optional[str] = Query(None, description="Filter by category"),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_user)
):
    """List active products, optionally filtered by brand or category."""
    products = ProductService(db).find_all(brand=brand, category=category, page=page, limit=limit)
    return {
        "message": "Products retrieved successfully",
        "data": [ProductResponse.model_validate(p) for p in products],
    }


@router.post(
    "/",
    response_model=MessageResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Create a new product (admin only)."""
    product = ProductService(db).create(product_data)
    return {"message": "Product created successfully", "data": ProductResponse.model_validate(product)}


@router.get("/{product_id}", response_model=MessageResponse[ProductResponse])
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_user)
):
    """Get a specific product, including soft-deleted ones."""
    product = ProductService(db).find_one(product_id)
    return {"message": "Product retrieved successfully", "data": ProductResponse.model_validate(product)}


@router.patch("/{product_id}", response_model=MessageResponse[ProductResponse])
def update_product(
    product_id: int,
    product_update: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Update fields of a product (admin only)."""
    product = ProductService(db).update(product_id, product_update)
    return {"message": "Product updated successfully", "data": ProductResponse.model_validate(product)}


@router.put("/{product_id}", response_model=MessageResponse[ProductResponse])
def replace_product(
    product_id: int,
    product_update: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Replace a product; behaves like PATCH, unset fields are kept."""
    product = ProductService(db).update(product_id, product_update)
    return {"message": "Product replaced successfully", "data": ProductResponse.model_validate(product)}


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Soft delete a product (admin only)."""
    ProductService(db).remove(product_id)
    return {"message": "Product deleted successfully"}


@router.patch("/{product_id}/restore", response_model=MessageResponse[ProductResponse])
def restore_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_admin)
):
    """Bring a soft-deleted product back (admin only)."""
    product = ProductService(db).restore(product_id)
    return {"message": "Product restored successfully", "data": ProductResponse.model_validate(product)}
