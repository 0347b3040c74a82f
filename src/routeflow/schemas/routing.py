"""Routing request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import DeliveryStatus


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class StopInput(BaseModel):
    id: Optional[str] = Field(default=None, description="Stop identifier. Generated when omitted.")
    address: str = ""
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    notes: str = ""
    status: DeliveryStatus = DeliveryStatus.PENDING


class RoutingRequest(BaseModel):
    name: Optional[str] = Field(default=None, description="Friendly name for the route.")
    start: CoordinateModel = Field(..., description="Where the driver departs from.")
    start_time: Optional[datetime] = Field(
        default=None,
        description="Planned departure time. Defaults to the current UTC time.",
    )
    stops: List[StopInput]
    average_speed_meters_per_second: Optional[float] = Field(default=None, gt=0.0)
    dwell_seconds: Optional[float] = Field(default=None, ge=0.0)


class OptimizedStopModel(BaseModel):
    id: str
    address: str
    latitude: float
    longitude: float
    notes: str
    status: DeliveryStatus
    sequence_number: int
    estimated_arrival_time: Optional[datetime]
    distance_from_prev_m: float


class RouteSummaryModel(BaseModel):
    total_stops: int
    total_distance_m: float
    total_duration_s: float
    formatted_distance: str
    formatted_duration: str
    original_distance_m: float
    distance_saved_m: float
    time_saved_s: float
    passes: int
    swaps: int
    converged: bool


class RoutingResponse(BaseModel):
    route_id: str
    name: str
    start: CoordinateModel
    start_time: datetime
    summary: RouteSummaryModel
    stops: List[OptimizedStopModel]
    metadata: dict
