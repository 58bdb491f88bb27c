"""
Category service — listing and resolving category references.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db_models import Category
from domain.errors import ValidationError


async def list_categories(db: AsyncSession) -> list[Category]:
    res = await db.execute(select(Category).order_by(Category.id))
    return res.scalars().all()


async def resolve_categories(db: AsyncSession, category_ids: list[int]) -> list[Category]:
    """
    Load the categories for a submission, preserving first-seen order and
    dropping duplicates. Unknown ids are a validation failure on `categories`.
    """
    wanted = list(dict.fromkeys(category_ids))
    if not wanted:
        return []
    res = await db.execute(select(Category).where(Category.id.in_(wanted)))
    found = {c.id: c for c in res.scalars().all()}
    missing = [cid for cid in wanted if cid not in found]
    if missing:
        raise ValidationError([
            {"fieldName": "categories", "message": f"Category not found: {cid}"}
            for cid in missing
        ])
    return [found[cid] for cid in wanted]
