# vehicle_registry/schemas/vehicle_log.py
from pydantic import BaseModel, Field
from datetime import date as Date, datetime
from typing import Literal, Optional
from vehicle_registry.schemas.driver import DriverOut, LICENSE_ID_PATTERN
from vehicle_registry.schemas.vehicle import VehicleOut

LogType = Literal["entry", "exit"]


class VehicleLogCreate(BaseModel):
    vehicle_number: str = Field(..., min_length=1, max_length=20)
    driver_license_id: str = Field(..., min_length=6, max_length=20, pattern=LICENSE_ID_PATTERN)
    log_type: LogType
    mileage_in_kilometers: float = Field(..., ge=0, allow_inf_nan=False)

    class Config:
        extra = "forbid"
        str_strip_whitespace = True


class VehicleLogUpdate(BaseModel):
    log_type: LogType
    mileage_in_kilometers: float = Field(..., ge=0, allow_inf_nan=False)

    class Config:
        extra = "forbid"


class VehicleLogOut(BaseModel):
    id: int
    vehicle: VehicleOut
    driver: DriverOut
    log_type: LogType
    mileage_in_kilometers: float
    timestamp: datetime


class VehicleLogFilter(BaseModel):
    """Optional listing filters, combined with AND. Unset fields match every row."""
    vehicle_number: Optional[str] = None
    driver_license_id: Optional[str] = None
    date: Optional[Date] = None  # calendar date, time of day ignored
