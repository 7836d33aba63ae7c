"""
Report (dispute) endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hostelhub.api.deps import ADMIN_ROLES, get_clock, get_db, require_roles
from hostelhub.api.responses import respond
from hostelhub.models.base.enums import ReportStatus, UserRole
from hostelhub.models.user.user import User
from hostelhub.schemas.report.report import ReportCreate, ReportResolve, ReportResponse
from hostelhub.services.report import ReportService
from hostelhub.utils.datetime_utils import Clock

router = APIRouter(prefix="/reports", tags=["Reports"])


def get_report_service(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> ReportService:
    return ReportService(db, clock)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_report(
    payload: ReportCreate,
    current_user: User = Depends(require_roles(UserRole.STUDENT)),
    service: ReportService = Depends(get_report_service),
):
    return respond(
        service.create_report(current_user.id, payload),
        ReportResponse,
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/my")
def get_my_reports(
    current_user: User = Depends(require_roles(UserRole.STUDENT, allow_terminated=True)),
    service: ReportService = Depends(get_report_service),
):
    return respond(service.get_my_reports(current_user.id), ReportResponse)


@router.get("")
def list_reports(
    status_filter: Optional[ReportStatus] = Query(default=None, alias="status"),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
    service: ReportService = Depends(get_report_service),
):
    return respond(service.get_all_reports(status_filter), ReportResponse)


@router.post("/{report_id}/resolve")
def resolve_report(
    report_id: str,
    payload: ReportResolve,
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
    service: ReportService = Depends(get_report_service),
):
    return respond(service.resolve_report(report_id, current_user.id, payload), ReportResponse)
