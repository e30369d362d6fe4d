"""Complaints API router: list with dashboard filters, submit, admin status update, stats, options."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_complaint_service, get_current_actor
from app.application.complaint_queries import complaint_options, filter_complaints, summarize
from app.application.complaint_service import ComplaintService
from app.domain.exceptions import ComplaintNotFoundError, DomainValidationError
from app.domain.models.actor import Actor
from app.domain.schemas.complaint import (
    ComplaintCreateRequest,
    ComplaintFilters,
    ComplaintOptionsResponse,
    ComplaintResponse,
    ComplaintStats,
    StatusUpdateRequest,
)
from app.security.exceptions import AuthorizationError

router = APIRouter()


@router.get("/", response_model=List[ComplaintResponse])
async def list_complaints(
    actor: Annotated[Actor, Depends(get_current_actor)],
    filters: Annotated[ComplaintFilters, Query()],
    service: Annotated[ComplaintService, Depends(get_complaint_service)],
):
    """Students see their own complaints, admins see all; newest first, then filtered."""
    await service.list(actor)
    return filter_complaints(service.complaints, filters)


@router.post("/", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED)
async def create_complaint(
    body: ComplaintCreateRequest,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[ComplaintService, Depends(get_complaint_service)],
):
    """Submit a complaint as the signed-in actor. New complaints start as pending."""
    try:
        return await service.create(actor, body.to_draft())
    except DomainValidationError as e:
        return JSONResponse(status_code=422, content={"detail": e.message})


@router.patch("/{complaint_id}/status", response_model=ComplaintResponse)
async def update_complaint_status(
    complaint_id: str,
    body: StatusUpdateRequest,
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[ComplaintService, Depends(get_complaint_service)],
):
    """Admin only. Returns the complaint as seen in the reloaded list."""
    try:
        await service.update_status(actor, complaint_id, body.status, body.admin_reply)
    except AuthorizationError as e:
        return JSONResponse(status_code=403, content={"detail": e.message})
    except ComplaintNotFoundError as e:
        return JSONResponse(status_code=404, content={"detail": e.message})

    complaint = service.find(complaint_id)
    if complaint is None:
        # Update committed but the reload failed
        return JSONResponse(
            status_code=200,
            content={"id": complaint_id, "status": body.status.value},
        )
    return complaint


@router.get("/stats", response_model=ComplaintStats)
async def complaint_stats(
    actor: Annotated[Actor, Depends(get_current_actor)],
    service: Annotated[ComplaintService, Depends(get_complaint_service)],
):
    """Dashboard counters over the actor's visible complaints."""
    await service.list(actor)
    return summarize(service.complaints)


@router.get("/options", response_model=ComplaintOptionsResponse)
async def options():
    """Category, priority and status tags with labels and colors."""
    return complaint_options()
