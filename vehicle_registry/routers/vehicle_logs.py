# vehicle_registry/routers/vehicle_logs.py
"""Vehicle entry/exit logs: record, list, correct and remove log events."""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, status
from vehicle_registry.config import settings
from vehicle_registry.dependencies import get_vehicle_log_service
from vehicle_registry.errors import NotFoundError
from vehicle_registry.schemas.vehicle_log import (
    VehicleLogCreate,
    VehicleLogFilter,
    VehicleLogOut,
    VehicleLogUpdate,
)
from vehicle_registry.services.vehicle_log_service import VehicleLogService

router = APIRouter()


@router.post("/vehicle-logs", response_model=VehicleLogOut, status_code=status.HTTP_201_CREATED,
             summary="Record a vehicle entry or exit")
def create_vehicle_log(body: VehicleLogCreate, service: VehicleLogService = Depends(get_vehicle_log_service)):
    """
    Fails with 404 if the vehicle or driver is unknown, and with 422 if the
    mileage decreases (other than a reset to 0) or the log type repeats the
    vehicle's last one.
    """
    return service.create(body)


@router.get("/vehicle-logs", response_model=list[VehicleLogOut], summary="List vehicle logs, newest first")
def list_vehicle_logs(
    limit: int = settings.DEFAULT_PAGE_LIMIT,
    page: int = 1,
    vehicle_number: Optional[str] = None,
    driver_license_id: Optional[str] = None,
    date: Optional[date] = None,
    service: VehicleLogService = Depends(get_vehicle_log_service),
):
    """Filters combine with AND. `date` matches the calendar day of the log."""
    filters = VehicleLogFilter(vehicle_number=vehicle_number, driver_license_id=driver_license_id, date=date)
    return service.read_all(limit, page, filters)


@router.get("/vehicle-logs/{log_id}", response_model=VehicleLogOut, summary="Get a vehicle log by ID")
def read_vehicle_log(log_id: int, service: VehicleLogService = Depends(get_vehicle_log_service)):
    log = service.read(log_id)
    if log is None:
        raise NotFoundError(f"Vehicle Log ID not found: {log_id}")
    return log


@router.put("/vehicle-logs/{log_id}", response_model=VehicleLogOut, summary="Correct a log's type and mileage")
def update_vehicle_log(log_id: int, body: VehicleLogUpdate,
                       service: VehicleLogService = Depends(get_vehicle_log_service)):
    log = service.update(log_id, body)
    if log is None:
        raise NotFoundError(f"Vehicle Log ID not found: {log_id}")
    return log


@router.delete("/vehicle-logs/{log_id}", summary="Remove a vehicle log")
def delete_vehicle_log(log_id: int, service: VehicleLogService = Depends(get_vehicle_log_service)):
    if not service.delete(log_id):
        raise NotFoundError(f"Vehicle Log ID not found: {log_id}")
    return {"message": f"Vehicle log with ID {log_id} deleted successfully."}
