# vehicle_registry/routers/vehicles.py
"""Vehicle directory: CRUD for registered vehicles keyed by number."""

from fastapi import APIRouter, Depends, status
from vehicle_registry.config import settings
from vehicle_registry.dependencies import get_vehicle_service
from vehicle_registry.errors import NotFoundError
from vehicle_registry.schemas.vehicle import VehicleCreate, VehicleOut, VehicleUpdate
from vehicle_registry.services.vehicle_service import VehicleService

router = APIRouter()


@router.post("/vehicles", response_model=VehicleOut, status_code=status.HTTP_201_CREATED,
             summary="Register a new vehicle")
def create_vehicle(body: VehicleCreate, service: VehicleService = Depends(get_vehicle_service)):
    return service.create(body)


@router.get("/vehicles", response_model=list[VehicleOut], summary="List vehicles, newest first")
def list_vehicles(limit: int = settings.DEFAULT_PAGE_LIMIT, page: int = 1,
                  service: VehicleService = Depends(get_vehicle_service)):
    return service.read_all(limit, page)


@router.get("/vehicles/{number}", response_model=VehicleOut, summary="Get a vehicle by number")
def read_vehicle(number: str, service: VehicleService = Depends(get_vehicle_service)):
    vehicle = service.read(number)
    if vehicle is None:
        raise NotFoundError(f"Vehicle number not found: {number}")
    return vehicle


@router.put("/vehicles/{number}", response_model=VehicleOut, summary="Update brand and model")
def update_vehicle(number: str, body: VehicleUpdate, service: VehicleService = Depends(get_vehicle_service)):
    vehicle = service.update(number, body)
    if vehicle is None:
        raise NotFoundError(f"Vehicle number not found: {number}")
    return vehicle


@router.delete("/vehicles/{number}", summary="Remove a vehicle")
def delete_vehicle(number: str, service: VehicleService = Depends(get_vehicle_service)):
    if not service.delete(number):
        raise NotFoundError(f"Vehicle number not found: {number}")
    return {"message": f"Vehicle with number {number} deleted successfully."}
