# vehicle_registry/dependencies.py
"""
Service wiring for the routers.
Services get the session factory through their constructor; tests swap
these providers with app.dependency_overrides to run against another database.
"""

from sqlalchemy.orm import sessionmaker
from vehicle_registry.database import SessionLocal
from vehicle_registry.services.driver_service import DriverService
from vehicle_registry.services.vehicle_log_service import VehicleLogService
from vehicle_registry.services.vehicle_service import VehicleService


def build_services(session_factory: sessionmaker) -> dict:
    vehicle_service = VehicleService(session_factory)
    driver_service = DriverService(session_factory)
    return {
        "vehicles": vehicle_service,
        "drivers": driver_service,
        "vehicle_logs": VehicleLogService(session_factory, vehicle_service, driver_service),
    }


_services = build_services(SessionLocal)


def get_vehicle_service() -> VehicleService:
    return _services["vehicles"]


def get_driver_service() -> DriverService:
    return _services["drivers"]


def get_vehicle_log_service() -> VehicleLogService:
    return _services["vehicle_logs"]
