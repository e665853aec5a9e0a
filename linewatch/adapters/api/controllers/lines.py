from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from linewatch.adapters.api.dependencies import get_line_query_service
from linewatch.adapters.api.schemas.lines import (
    CategoryLinesSchema,
    LineClassificationSchema,
)
from linewatch.app.services.line_query_service import LineQueryService

router = APIRouter(tags=["lines"])


@router.get("/lines", response_model=dict[str, list[str]])
def list_lines(
    service: LineQueryService = Depends(get_line_query_service),
) -> dict[str, list[str]]:
    return {name: list(lines) for name, lines in service.categorized_lines().items()}


@router.get("/lines/{category}", response_model=CategoryLinesSchema)
def get_category_lines(
    category: str,
    service: LineQueryService = Depends(get_line_query_service),
) -> CategoryLinesSchema:
    buckets = service.categorized_lines()
    if category not in buckets:
        raise HTTPException(
            status_code=404,
            detail=f"Category not found; available: {', '.join(buckets)}",
        )
    return CategoryLinesSchema(category=category, lines=list(buckets[category]))


@router.get("/classify/{line}", response_model=LineClassificationSchema)
def classify_line(
    line: str,
    service: LineQueryService = Depends(get_line_query_service),
) -> LineClassificationSchema:
    return LineClassificationSchema(line=line, type=service.classify(line).value)
