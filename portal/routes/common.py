"""
Helpers shared by the route modules.
"""

from __future__ import annotations

from typing import Optional, Sequence

from dacite import from_dict
from pydantic import BaseModel

from portal.config import get_settings
from portal.content import paginate
from portal.repository import DACITE_CONFIG
from shared.types import VaultItem


def page_response(
    items: Sequence[VaultItem], offset: int, limit: Optional[int]
) -> dict:
    settings = get_settings()
    limit = min(limit or settings.default_page_size, settings.max_page_size)
    page, total = paginate(items, offset, limit)
    return {"items": page, "total": total, "offset": offset, "limit": limit}


def to_dataclass(data_class, model: BaseModel):
    return from_dict(data_class=data_class, data=model.model_dump(), config=DACITE_CONFIG)
