from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.verify_scan_use_case import VerifyScanUseCase
from src.service.ticketing.app.query.list_recent_scans_use_case import ListRecentScansUseCase
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    require_gate_staff,
)
from src.service.ticketing.driving_adapter.schema.scan_schema import (
    RecentScanResponse,
    ScanVerifyRequest,
    ScanVerifyResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/verify', status_code=status.HTTP_200_OK)
@Logger.io
async def verify_scan(
    request: ScanVerifyRequest,
    current_user: UserEntity = Depends(require_gate_staff),
    use_case: VerifyScanUseCase = Depends(VerifyScanUseCase.depends),
) -> ScanVerifyResponse:
    """Rejections are answered with 200 and `success: false`; only bad input fails the request."""
    with tracer.start_as_current_span('controller.verify_scan') as span:
        span.set_attribute('event.id', request.event_id)
        span.set_attribute('scanner.id', current_user.id)

        outcome = await use_case.execute(
            ticket_code=request.ticket_code,
            event_id=request.event_id,
            scanner_user_id=current_user.id,
            gate_name=request.gate_name,
            device_info=request.device_info,
        )

        span.set_attribute('scan.result', outcome.scan_result.value)
        return ScanVerifyResponse.from_outcome(outcome)


@router.get('/recent/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def list_recent_scans(
    event_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=200),
    current_user: UserEntity = Depends(require_gate_staff),
    use_case: ListRecentScansUseCase = Depends(ListRecentScansUseCase.depends),
) -> List[RecentScanResponse]:
    scans = await use_case.execute(event_id=event_id, limit=limit)
    return [RecentScanResponse.from_view(view) for view in scans]
