"""
Pydantic models for request/response validation.

Request models only check JSON shape and types; the product/order field
rules live in utils/validators.py so every violation is reported together.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    """Shared base — allows construction by Python name or alias."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ── Category Models ─────────────────────────────────────────────────

class CategoryRef(ApiModel):
    """Category reference inside a product submission (only id is used)."""
    id: int
    name: Optional[str] = None


class CategoryResponse(ApiModel):
    id: int
    name: str


# ── Product Models ──────────────────────────────────────────────────

class ProductRequest(ApiModel):
    """Body of POST /products and PUT /products/{id}."""
    name: str
    description: str
    price: float
    img_url: Optional[str] = Field(default=None, alias="imgUrl")
    categories: List[CategoryRef] = Field(default_factory=list)


class ProductResponse(ApiModel):
    """Full product representation."""
    id: int
    name: str
    description: str
    price: float
    img_url: Optional[str] = Field(None, alias="imgUrl")
    categories: List[CategoryResponse] = Field(default_factory=list)


class ProductMinResponse(ApiModel):
    """Product as listed in search results."""
    id: int
    name: str
    price: float
    img_url: Optional[str] = Field(None, alias="imgUrl")


# ── Auth / User Models ──────────────────────────────────────────────

class LoginRequest(ApiModel):
    username: str = Field(..., min_length=1, max_length=120)
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(ApiModel):
    access_token: str = Field(..., alias="accessToken")
    token_type: str = Field("Bearer", alias="tokenType")
    expires_in_seconds: int = Field(..., alias="expiresInSeconds")
    role: str


class UserResponse(ApiModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    birth_date: Optional[date] = Field(None, alias="birthDate")
    role: str


# ── Order Models ────────────────────────────────────────────────────

class OrderItemRequest(ApiModel):
    product_id: int = Field(..., alias="productId")
    quantity: int


class OrderRequest(ApiModel):
    items: List[OrderItemRequest] = Field(default_factory=list)


class ClientResponse(ApiModel):
    id: int
    name: str


class OrderItemResponse(ApiModel):
    product_id: int = Field(..., alias="productId")
    name: str
    price: float
    quantity: int
    img_url: Optional[str] = Field(None, alias="imgUrl")
    sub_total: float = Field(..., alias="subTotal")


class OrderResponse(ApiModel):
    id: int
    moment: datetime
    status: str
    client: ClientResponse
    items: List[OrderItemResponse]
    total: float
