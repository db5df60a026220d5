"""Journal CRUD, listing, search and analytics routes (per-owner)."""

from dataclasses import asdict
from typing import Literal, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from cli.config_models import MoodlogConfig
from journal.analytics import build_report
from journal.errors import EntryNotFoundError, EntryValidationError, InvalidQueryError
from journal.export import JournalExporter
from journal.models import new_entry
from journal.search import JournalSearch
from journal.sentiment import resolve_sentiment
from journal.storage import JournalStorage
from web.auth import get_current_user
from web.deps import get_config, get_search, get_storage
from web.models import (
    AnalyticsReport,
    JournalCreate,
    JournalEntry,
    JournalExport,
    JournalPage,
    JournalUpdate,
)
from web.rate_limit import enforce_write_limit

logger = structlog.get_logger()

router = APIRouter(prefix="/api/journal", tags=["journal"])

SortOrder = Literal["-createdAt", "createdAt"]


def _to_response(entry) -> JournalEntry:
    return JournalEntry.model_validate(asdict(entry))


def _page_size(limit: Optional[int], config: MoodlogConfig) -> int:
    """Fall back to the configured default; reject sizes over the configured max."""
    cfg = config.pagination
    if limit is None:
        return cfg.default_limit
    if limit > cfg.max_limit:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"limit must be at most {cfg.max_limit}",
        )
    return limit


def _to_page(result) -> JournalPage:
    return JournalPage(
        entries=[_to_response(e) for e in result.entries],
        pagination=asdict(result.pagination),
    )


@router.post("", response_model=JournalEntry, status_code=status.HTTP_201_CREATED)
async def create_entry(
    body: JournalCreate,
    user: dict = Depends(enforce_write_limit),
    storage: JournalStorage = Depends(get_storage),
):
    fields = body.model_dump(exclude_none=True)
    fields["sentiment"] = resolve_sentiment(body.content, body.sentiment)
    try:
        entry = storage.insert(new_entry(user["id"], **fields))
    except EntryValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("journal.entry_created", owner=user["id"], entry_id=entry.id)
    return _to_response(entry)


@router.get("", response_model=JournalPage)
async def list_entries(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    sort: SortOrder = "-createdAt",
    user: dict = Depends(get_current_user),
    search: JournalSearch = Depends(get_search),
    config: MoodlogConfig = Depends(get_config),
):
    result = search.list_entries(
        user["id"], page=page, limit=_page_size(limit, config), newest_first=sort.startswith("-")
    )
    return _to_page(result)


@router.get("/analytics", response_model=AnalyticsReport)
async def get_analytics(
    time_range: str = Query("week", alias="timeRange"),
    user: dict = Depends(get_current_user),
    storage: JournalStorage = Depends(get_storage),
):
    report = build_report(storage, user["id"], time_range=time_range)
    return AnalyticsReport.model_validate(asdict(report))


@router.get("/search", response_model=JournalPage)
async def search_entries(
    q: str | None = None,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    user: dict = Depends(get_current_user),
    search: JournalSearch = Depends(get_search),
    config: MoodlogConfig = Depends(get_config),
):
    try:
        result = search.search(user["id"], q, page=page, limit=_page_size(limit, config))
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_page(result)


@router.get("/export", response_model=JournalExport)
async def export_entries(
    user: dict = Depends(get_current_user),
    storage: JournalStorage = Depends(get_storage),
):
    """Every entry the caller owns, oldest first, for download."""
    data = JournalExporter(storage).collect(user["id"])
    logger.info("journal.exported", owner=user["id"], count=data["count"], fmt="api")
    return JournalExport(
        user=user,
        export_date=data["export_date"],
        count=data["count"],
        entries=[JournalEntry.model_validate(e) for e in data["entries"]],
    )


@router.get("/{entry_id}", response_model=JournalEntry)
async def read_entry(
    entry_id: str,
    user: dict = Depends(get_current_user),
    storage: JournalStorage = Depends(get_storage),
):
    try:
        return _to_response(storage.get_by_id(user["id"], entry_id))
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Journal entry not found")


@router.put("/{entry_id}", response_model=JournalEntry)
async def update_entry(
    entry_id: str,
    body: JournalUpdate,
    user: dict = Depends(enforce_write_limit),
    storage: JournalStorage = Depends(get_storage),
):
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    try:
        entry = storage.update_partial(user["id"], entry_id, fields)
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    except EntryValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("journal.entry_updated", owner=user["id"], entry_id=entry_id)
    return _to_response(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: str,
    user: dict = Depends(enforce_write_limit),
    storage: JournalStorage = Depends(get_storage),
):
    if not storage.delete(user["id"], entry_id):
        raise HTTPException(status_code=404, detail="Journal entry not found")
    logger.info("journal.entry_deleted", owner=user["id"], entry_id=entry_id)
