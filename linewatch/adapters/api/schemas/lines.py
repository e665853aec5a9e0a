from __future__ import annotations

from pydantic import BaseModel


class CategoryLinesSchema(BaseModel):
    category: str
    lines: list[str]


class LineClassificationSchema(BaseModel):
    line: str
    type: str
