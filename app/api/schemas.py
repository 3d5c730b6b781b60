"""
Pydantic schemas for API request/response models
"""
from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class InningsPhaseEnum(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class OutcomeToneEnum(str, Enum):
    BOUNDARY = "boundary"
    RUNS = "runs"
    WICKET = "wicket"
    DOT = "dot"


# Requests
class CreateInningsRequest(BaseModel):
    total_overs: Optional[int] = Field(default=None, ge=1)
    max_wickets: Optional[int] = Field(default=None, ge=1)


class ConfigureRequest(BaseModel):
    total_overs: int = Field(ge=1)
    max_wickets: int = Field(ge=1)


class TimedRequest(BaseModel):
    # Client timestamp in ms; server clock when omitted
    now: Optional[float] = Field(default=None, allow_inf_nan=False)


# Responses
class InningsStateResponse(BaseModel):
    score: int
    wickets: int
    balls_bowled: int
    total_balls: int
    total_overs: int
    balls_per_over: int
    max_wickets: int
    phase: InningsPhaseEnum
    last_outcome: Optional[str] = None
    last_commentary: Optional[str] = None
    delivery_in_flight: bool
    overs_display: str
    current_over: int
    ball_in_over: int
    balls_left: int
    next_delivery_delay_ms: int


class CreateInningsResponse(BaseModel):
    innings_id: str
    first_delivery_delay_ms: int
    state: InningsStateResponse


class DeliveryResponse(BaseModel):
    travel_duration_ms: int
    expected_arrival_timestamp: float
    hint: str


class OutcomeResponse(BaseModel):
    label: str
    runs: int
    is_wicket: bool
    commentary: str
    tone: OutcomeToneEnum


class SwingResultResponse(BaseModel):
    resolved: bool
    outcome: Optional[OutcomeResponse] = None
    state: InningsStateResponse


class DeleteInningsResponse(BaseModel):
    deleted: bool
