# vehicle_registry/routers/drivers.py
"""Driver directory: CRUD for drivers keyed by license ID."""

from fastapi import APIRouter, Depends, status
from vehicle_registry.config import settings
from vehicle_registry.dependencies import get_driver_service
from vehicle_registry.errors import NotFoundError
from vehicle_registry.schemas.driver import DriverCreate, DriverOut, DriverUpdate
from vehicle_registry.services.driver_service import DriverService

router = APIRouter()


@router.post("/drivers", response_model=DriverOut, status_code=status.HTTP_201_CREATED,
             summary="Register a new driver")
def create_driver(body: DriverCreate, service: DriverService = Depends(get_driver_service)):
    return service.create(body)


@router.get("/drivers", response_model=list[DriverOut], summary="List drivers, newest first")
def list_drivers(limit: int = settings.DEFAULT_PAGE_LIMIT, page: int = 1,
                 service: DriverService = Depends(get_driver_service)):
    return service.read_all(limit, page)


@router.get("/drivers/{license_id}", response_model=DriverOut, summary="Get a driver by license ID")
def read_driver(license_id: str, service: DriverService = Depends(get_driver_service)):
    driver = service.read(license_id)
    if driver is None:
        raise NotFoundError(f"Driver license ID not found: {license_id}")
    return driver


@router.put("/drivers/{license_id}", response_model=DriverOut, summary="Update a driver's names")
def update_driver(license_id: str, body: DriverUpdate, service: DriverService = Depends(get_driver_service)):
    driver = service.update(license_id, body)
    if driver is None:
        raise NotFoundError(f"Driver license ID not found: {license_id}")
    return driver


@router.delete("/drivers/{license_id}", summary="Remove a driver")
def delete_driver(license_id: str, service: DriverService = Depends(get_driver_service)):
    if not service.delete(license_id):
        raise NotFoundError(f"Driver license ID not found: {license_id}")
    return {"message": f"Driver with license ID {license_id} deleted successfully."}
