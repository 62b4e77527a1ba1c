"""Hours import endpoints: upload for preview, apply, directory listing."""

from __future__ import annotations

import json
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Header, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from hours_import.core.exceptions import (
    InvalidMonthError,
    NoWorkerDataError,
    SessionNotFoundError,
    UnsupportedFileError,
)
from hours_import.core.types import NameMapping
from hours_import.models.apply import ApplyResult
from hours_import.models.directory import MatchCandidate
from hours_import.models.preview import ImportPreview
from hours_import.services.coordinator import ImportCoordinator

router = APIRouter(tags=["hours-import"])


class ApplyRequest(BaseModel):
    worker_mapping: NameMapping = Field(default_factory=dict)
    month: Optional[str] = None


def get_coordinator(request: Request) -> ImportCoordinator:
    return request.app.state.coordinator


def _parse_mapping(raw: str | None) -> NameMapping:
    if not raw:
        return {}
    try:
        mapping = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail="Invalid mapping data") from exc
    if not isinstance(mapping, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in mapping.items()
    ):
        raise HTTPException(status_code=400, detail="Mapping must be an object of name -> id")
    return mapping


@router.post("/upload", response_model=ImportPreview)
async def upload(
    file: UploadFile = File(...),
    month: Optional[str] = Form(None),
    mapping: Optional[str] = Form(None),
    organization_id: str = Header(..., alias="X-Organization-Id"),
    coordinator: ImportCoordinator = Depends(get_coordinator),
) -> ImportPreview:
    """Parse an uploaded timeclock export and return the match preview."""
    overrides = _parse_mapping(mapping)
    content = await file.read()
    try:
        return await run_in_threadpool(
            coordinator.upload_and_preview,
            content, file.filename or "", organization_id, overrides, month,
        )
    except (NoWorkerDataError, UnsupportedFileError, InvalidMonthError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/apply/{session_id}", response_model=ApplyResult)
def apply(
    session_id: str,
    body: ApplyRequest,
    organization_id: str = Header(..., alias="X-Organization-Id"),
    coordinator: ImportCoordinator = Depends(get_coordinator),
) -> ApplyResult:
    """Commit a previewed import with the confirmed name -> worker mapping."""
    try:
        return coordinator.apply(session_id, organization_id, body.worker_mapping, body.month)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidMonthError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/employees", response_model=list[MatchCandidate])
def employees(
    organization_id: str = Header(..., alias="X-Organization-Id"),
    coordinator: ImportCoordinator = Depends(get_coordinator),
) -> list[MatchCandidate]:
    """Active workers for the manual matching dropdown."""
    return coordinator.list_directory(organization_id)
