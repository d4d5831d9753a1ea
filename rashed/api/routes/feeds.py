"""
Activity, approval and log endpoints for the Rashed API.

These are the read-mostly feeds of the dashboard. Approvals can also be
moved between pending, approved and rejected.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...core.dependencies import (
    get_activity_service,
    get_approval_repository,
    get_current_session,
    get_log_repository,
)
from ...core.repositories import ApprovalRepository, LogRepository
from ...core.repositories.activity_repository import DEFAULT_ACTIVITY_LIMIT
from ...core.services import ActivityService
from ..auth.sessions import SessionData
from ..schemas import (
    ActivityResponse,
    ApprovalResponse,
    ApprovalStatus,
    ApprovalStatusUpdate,
    CountResponse,
    LogResponse,
)

router = APIRouter(tags=["feeds"])


@router.get("/activities", response_model=List[ActivityResponse])
async def list_activities(
    limit: int = Query(DEFAULT_ACTIVITY_LIMIT, ge=1, le=500),
    session: SessionData = Depends(get_current_session),
    activities: ActivityService = Depends(get_activity_service),
) -> List[ActivityResponse]:
    """Latest activities, newest first."""
    rows = await activities.latest(limit=limit)
    return [ActivityResponse.model_validate(row) for row in rows]


@router.get("/approvals", response_model=List[ApprovalResponse])
async def list_approvals(
    status: Optional[str] = None,
    session: SessionData = Depends(get_current_session),
    approvals: ApprovalRepository = Depends(get_approval_repository),
) -> List[ApprovalResponse]:
    rows = await approvals.list_approvals(status=status)
    return [ApprovalResponse.model_validate(row) for row in rows]


@router.get("/approvals/count", response_model=CountResponse)
async def count_approvals(
    status: Optional[str] = None,
    session: SessionData = Depends(get_current_session),
    approvals: ApprovalRepository = Depends(get_approval_repository),
) -> CountResponse:
    """Approvals with ``status``; a missing or blank status means pending."""
    return CountResponse(count=await approvals.count_by_status(status or "pending"))


async def _set_approval_status(
    approval_id: int,
    status: ApprovalStatus,
    approvals: ApprovalRepository,
    activities: ActivityService,
) -> ApprovalResponse:
    approval = await approvals.update_status(approval_id, status)
    await activities.record(
        "approval_updated",
        f'Approval "{approval.title}" was {status}',
        metadata={"approvalType": approval.type, "status": status},
    )
    return ApprovalResponse.model_validate(approval)


@router.patch("/approvals/{approval_id}/status", response_model=ApprovalResponse)
async def update_approval_status(
    approval_id: int,
    body: ApprovalStatusUpdate,
    session: SessionData = Depends(get_current_session),
    approvals: ApprovalRepository = Depends(get_approval_repository),
    activities: ActivityService = Depends(get_activity_service),
) -> ApprovalResponse:
    return await _set_approval_status(approval_id, body.status, approvals, activities)


@router.post("/approvals/{approval_id}/approve", response_model=ApprovalResponse)
async def approve(
    approval_id: int,
    session: SessionData = Depends(get_current_session),
    approvals: ApprovalRepository = Depends(get_approval_repository),
    activities: ActivityService = Depends(get_activity_service),
) -> ApprovalResponse:
    return await _set_approval_status(approval_id, "approved", approvals, activities)


@router.post("/approvals/{approval_id}/reject", response_model=ApprovalResponse)
async def reject(
    approval_id: int,
    session: SessionData = Depends(get_current_session),
    approvals: ApprovalRepository = Depends(get_approval_repository),
    activities: ActivityService = Depends(get_activity_service),
) -> ApprovalResponse:
    return await _set_approval_status(approval_id, "rejected", approvals, activities)


@router.get("/logs", response_model=List[LogResponse])
async def list_logs(
    session: SessionData = Depends(get_current_session),
    logs: LogRepository = Depends(get_log_repository),
) -> List[LogResponse]:
    """System logs, newest first."""
    rows = await logs.list_logs()
    return [LogResponse.model_validate(row) for row in rows]
