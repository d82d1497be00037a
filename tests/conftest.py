# tests/conftest.py
"""
Shared fixtures. Every test gets a fresh in-memory SQLite database; the
application engine is pointed at SQLite too so importing the app never
needs a PostgreSQL server.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from vehicle_registry.database import create_tables, enable_sqlite_foreign_keys
from vehicle_registry.models.driver import Driver
from vehicle_registry.models.vehicle import Vehicle
from vehicle_registry.models.vehicle_log import VehicleLog
from vehicle_registry.services.driver_service import DriverService
from vehicle_registry.services.vehicle_log_service import VehicleLogService
from vehicle_registry.services.vehicle_service import VehicleService


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,   # one shared connection keeps the in-memory DB alive
    )
    enable_sqlite_foreign_keys(engine)
    create_tables(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def vehicle_service(session_factory):
    return VehicleService(session_factory)


@pytest.fixture
def driver_service(session_factory):
    return DriverService(session_factory)


@pytest.fixture
def log_service(session_factory, vehicle_service, driver_service):
    return VehicleLogService(session_factory, vehicle_service, driver_service)


@pytest.fixture
def seeded(session_factory):
    """Two vehicles and two drivers: VIN-123/V1 and DL-000001/DL-000002."""
    db = session_factory()
    db.add_all([
        Vehicle(number="VIN-123", brand="Hyundai", model="Elantra"),
        Vehicle(number="V1", brand="Mazda", model="CX-5"),
        Driver(license_id="DL-000001", first_name="John", surname="Doe"),
        Driver(license_id="DL-000002", first_name="Joe", surname="Smith", second_surname="Perez"),
    ])
    db.commit()
    db.close()
    return session_factory


@pytest.fixture
def add_log(session_factory):
    """Insert a log row directly, bypassing the create rules (test data only)."""
    def _add(vehicle_number, license_id, log_type, mileage, timestamp: datetime) -> int:
        db = session_factory()
        vehicle = db.query(Vehicle).filter(Vehicle.number == vehicle_number).one()
        driver = db.query(Driver).filter(Driver.license_id == license_id).one()
        log = VehicleLog(vehicle_id=vehicle.id, driver_id=driver.id, event_type=log_type,
                         mileage=mileage, event_timestamp=timestamp)
        db.add(log)
        db.commit()
        log_id = log.id
        db.close()
        return log_id
    return _add


@pytest.fixture
def count_logs(session_factory):
    def _count() -> int:
        db = session_factory()
        try:
            return db.query(VehicleLog).count()
        finally:
            db.close()
    return _count
