import logging
import time
import uuid
from fastapi import APIRouter, HTTPException
from typing import Dict, Optional

from app.config import settings
from app.engine.innings_controller import InningsController, SwingResult
from app.engine.innings import InningsSnapshot
from app.engine.errors import (
    InningsCompleteError, DeliveryInFlightError, ConfigurationLockedError,
    InvalidConfigurationError,
)
from app.api.schemas import (
    CreateInningsRequest, CreateInningsResponse, ConfigureRequest, TimedRequest,
    InningsStateResponse, DeliveryResponse, OutcomeResponse, SwingResultResponse,
    DeleteInningsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/innings", tags=["Timing Innings"])

# In-memory store for active innings, keyed by innings id
active_innings: Dict[str, InningsController] = {}
# Server clock (ms) of the last request touching each innings
last_activity: Dict[str, float] = {}


def server_now() -> float:
    """Server monotonic clock in ms"""
    return time.monotonic() * 1000


def _resolve_now(request: Optional[TimedRequest]) -> float:
    if request is None or request.now is None:
        return server_now()
    return request.now


def _get_controller(innings_id: str) -> InningsController:
    controller = active_innings.get(innings_id)
    if controller is None:
        raise HTTPException(status_code=404, detail="Innings not found")
    last_activity[innings_id] = server_now()
    return controller


def _drop_innings(innings_id: str) -> None:
    del active_innings[innings_id]
    last_activity.pop(innings_id, None)


def _evict_stale_innings() -> None:
    """Free slots held by finished innings, then by innings idle past the timeout"""
    finished = [i for i, c in active_innings.items() if c.snapshot().is_complete]
    for innings_id in finished:
        _drop_innings(innings_id)

    idle = []
    if len(active_innings) >= settings.MAX_ACTIVE_INNINGS:
        cutoff = server_now() - settings.INNINGS_IDLE_TIMEOUT_S * 1000
        idle = [i for i in active_innings if last_activity.get(i, 0.0) < cutoff]
        for innings_id in idle:
            _drop_innings(innings_id)
    if finished or idle:
        logger.info("Evicted %d finished and %d idle innings", len(finished), len(idle))


def _state_response(snapshot: InningsSnapshot) -> InningsStateResponse:
    return InningsStateResponse(
        **snapshot.to_dict(),
        next_delivery_delay_ms=settings.NEXT_DELIVERY_DELAY_MS,
    )


def _swing_response(result: SwingResult) -> SwingResultResponse:
    outcome = OutcomeResponse(**result.outcome.to_dict()) if result.outcome else None
    return SwingResultResponse(
        resolved=result.resolved,
        outcome=outcome,
        state=_state_response(result.state),
    )


@router.post("", response_model=CreateInningsResponse)
def create_innings(request: Optional[CreateInningsRequest] = None):
    if len(active_innings) >= settings.MAX_ACTIVE_INNINGS:
        _evict_stale_innings()
    if len(active_innings) >= settings.MAX_ACTIVE_INNINGS:
        raise HTTPException(status_code=429, detail="Too many active innings")

    request = request or CreateInningsRequest()
    controller = InningsController(
        total_overs=request.total_overs or settings.DEFAULT_TOTAL_OVERS,
        max_wickets=request.max_wickets or settings.DEFAULT_MAX_WICKETS,
    )
    innings_id = uuid.uuid4().hex
    active_innings[innings_id] = controller
    last_activity[innings_id] = server_now()
    logger.info("Innings %s created (%d active)", innings_id, len(active_innings))

    return CreateInningsResponse(
        innings_id=innings_id,
        first_delivery_delay_ms=settings.FIRST_DELIVERY_DELAY_MS,
        state=_state_response(controller.snapshot()),
    )


@router.get("/{innings_id}/state", response_model=InningsStateResponse)
def get_innings_state(innings_id: str):
    return _state_response(_get_controller(innings_id).snapshot())


@router.post("/{innings_id}/configure", response_model=InningsStateResponse)
def configure_innings(innings_id: str, request: ConfigureRequest):
    controller = _get_controller(innings_id)
    try:
        snapshot = controller.configure(request.total_overs, request.max_wickets)
    except ConfigurationLockedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _state_response(snapshot)


@router.post("/{innings_id}/deliveries", response_model=DeliveryResponse)
def request_delivery(innings_id: str, request: Optional[TimedRequest] = None):
    controller = _get_controller(innings_id)
    try:
        delivery = controller.request_delivery(_resolve_now(request))
    except (InningsCompleteError, DeliveryInFlightError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return DeliveryResponse(**delivery.to_dict())


@router.post("/{innings_id}/swing", response_model=SwingResultResponse)
def register_swing(innings_id: str, request: Optional[TimedRequest] = None):
    controller = _get_controller(innings_id)
    return _swing_response(controller.register_swing(_resolve_now(request)))


@router.post("/{innings_id}/timeout", response_model=SwingResultResponse)
def resolve_timeout(innings_id: str, request: Optional[TimedRequest] = None):
    controller = _get_controller(innings_id)
    return _swing_response(controller.resolve_timeout(_resolve_now(request)))


@router.post("/{innings_id}/reset", response_model=InningsStateResponse)
def reset_innings(innings_id: str):
    return _state_response(_get_controller(innings_id).reset())


@router.delete("/{innings_id}", response_model=DeleteInningsResponse)
def delete_innings(innings_id: str):
    _get_controller(innings_id)
    _drop_innings(innings_id)
    logger.info("Innings %s deleted (%d active)", innings_id, len(active_innings))
    return DeleteInningsResponse(deleted=True)
