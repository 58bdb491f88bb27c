"""
Input validation rules for catalog submissions.

Each check_* function returns the list of violations ({"fieldName", "message"});
an empty list means the submission is valid. The require_* wrappers raise
ValidationError (HTTP 422) carrying every violation at once.
"""
import math

from domain.constants import (
    ORDER_ITEM_MIN_QUANTITY,
    PRODUCT_DESCRIPTION_MIN_LENGTH,
    PRODUCT_NAME_MAX_LENGTH,
    PRODUCT_NAME_MIN_LENGTH,
)
from domain.errors import ValidationError
from models import OrderRequest, ProductRequest


def _violation(field: str, message: str) -> dict:
    return {"fieldName": field, "message": message}


def check_product(payload: ProductRequest) -> list[dict]:
    """
    Validate a product submission.

    Rules:
        name         3..80 characters, not blank
        description  at least 5 non-blank characters
        price        finite and strictly positive
        categories   at least one
    """
    errors = []

    name = payload.name or ""
    if len(name.strip()) < PRODUCT_NAME_MIN_LENGTH or len(name) > PRODUCT_NAME_MAX_LENGTH:
        errors.append(_violation(
            "name",
            f"Name must be between {PRODUCT_NAME_MIN_LENGTH} and {PRODUCT_NAME_MAX_LENGTH} characters",
        ))

    description = payload.description or ""
    if len(description.strip()) < PRODUCT_DESCRIPTION_MIN_LENGTH:
        errors.append(_violation(
            "description",
            f"Description must have at least {PRODUCT_DESCRIPTION_MIN_LENGTH} characters",
        ))

    # NaN compares false against everything
    if payload.price is None or not math.isfinite(payload.price) or payload.price <= 0:
        errors.append(_violation("price", "Price must be positive"))

    if not payload.categories:
        errors.append(_violation("categories", "Product must have at least one category"))

    return errors


def check_order(payload: OrderRequest) -> list[dict]:
    """Validate an order submission: at least one item, positive quantities."""
    errors = []
    if not payload.items:
        errors.append(_violation("items", "Order must have at least one item"))
    for i, item in enumerate(payload.items):
        if item.quantity < ORDER_ITEM_MIN_QUANTITY:
            errors.append(_violation(f"items[{i}].quantity", "Quantity must be at least 1"))
    return errors


def require_valid_product(payload: ProductRequest) -> ProductRequest:
    errors = check_product(payload)
    if errors:
        raise ValidationError(errors)
    return payload


def require_valid_order(payload: OrderRequest) -> OrderRequest:
    errors = check_order(payload)
    if errors:
        raise ValidationError(errors)
    return payload
