"""Category, dish and subtag schemas."""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator

from app.schemas.common import CamelModel


# Categories

class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=2, max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=100)
    sort_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=100)
    sort_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class CategoryResponse(CamelModel):
    id: str
    tenant_id: str
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None
    sort_order: int
    is_active: bool
    dish_count: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class ReorderRequest(CamelModel):
    """Ids in their new display order."""
    ids: List[str] = Field(..., min_length=1)

    @field_validator("ids")
    @classmethod
    def unique_ids(cls, v: List[str]) -> List[str]:
        if len(set(v)) != len(v):
            raise ValueError("ids must not repeat")
        return v


# Subtags

class SubtagCreate(CamelModel):
    name: str = Field(..., min_length=2, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class SubtagUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class SubtagResponse(CamelModel):
    id: str
    tenant_id: str
    name: str
    created_at: datetime
    updated_at: datetime


class SubtagRef(CamelModel):
    id: str
    name: str


# Dishes

class DishCreate(CamelModel):
    name: str = Field(..., min_length=2, max_length=255)
    description: Optional[str] = Field(None, min_length=10)
    price: Decimal = Field(..., gt=0, decimal_places=2)
    category_id: str
    image: Optional[str] = None
    is_active: bool = True
    is_featured: bool = False
    allergens: List[str] = []
    tags: List[str] = []
    subtag_ids: List[str] = []
    preparation_time: Optional[int] = Field(None, ge=1, le=180)
    servings: Optional[int] = Field(None, ge=1, le=20)
    sort_order: int = Field(0, ge=0)


class DishUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    description: Optional[str] = Field(None, min_length=10)
    price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    category_id: Optional[str] = None
    image: Optional[str] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    allergens: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    subtag_ids: Optional[List[str]] = None
    preparation_time: Optional[int] = Field(None, ge=1, le=180)
    servings: Optional[int] = Field(None, ge=1, le=20)
    sort_order: Optional[int] = Field(None, ge=0)


class CategorySummary(CamelModel):
    id: str
    name: str
    slug: str


class DishResponse(CamelModel):
    id: str
    tenant_id: str
    category_id: str
    category: Optional[CategorySummary] = None
    name: str
    slug: str
    description: Optional[str] = None
    price: Decimal
    image: Optional[str] = None
    is_active: bool
    is_featured: bool
    allergens: List[str] = []
    tags: List[str] = []
    subtag_ids: List[str] = []
    subtags: List[SubtagRef] = []
    preparation_time: Optional[int] = None
    servings: Optional[int] = None
    sort_order: int
    created_at: datetime
    updated_at: datetime


class DishFilters(CamelModel):
    """Dish search criteria; ``search`` matches name or description."""
    category_id: Optional[str] = None
    search: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
