# vehicle_registry/services/vehicle_log_read_model.py
"""
Denormalized read model for vehicle logs.
Every log row is joined with its vehicle and driver (one each, enforced by
the foreign keys) and projected into a VehicleLogOut.
"""

from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Query, Session, contains_eager
from vehicle_registry.models.driver import Driver
from vehicle_registry.models.vehicle import Vehicle
from vehicle_registry.models.vehicle_log import VehicleLog
from vehicle_registry.schemas.driver import DriverOut
from vehicle_registry.schemas.vehicle import VehicleOut
from vehicle_registry.schemas.vehicle_log import VehicleLogFilter, VehicleLogOut


def joined_logs(db: Session) -> Query:
    """Base query: log INNER JOIN vehicle INNER JOIN driver, relations loaded from the join."""
    return (
        db.query(VehicleLog)
        .join(VehicleLog.vehicle)
        .join(VehicleLog.driver)
        .options(contains_eager(VehicleLog.vehicle), contains_eager(VehicleLog.driver))
    )


def newest_first(q: Query) -> Query:
    # id breaks ties between logs stamped in the same instant
    return q.order_by(VehicleLog.event_timestamp.desc(), VehicleLog.id.desc())


def apply_filter(q: Query, filters: VehicleLogFilter) -> Query:
    if filters.vehicle_number:
        q = q.filter(Vehicle.number == filters.vehicle_number)
    if filters.driver_license_id:
        q = q.filter(Driver.license_id == filters.driver_license_id)
    if filters.date:
        q = q.filter(func.date(VehicleLog.event_timestamp) == filters.date)
    return q


def to_vehicle_log_out(log: VehicleLog) -> VehicleLogOut:
    return VehicleLogOut(
        id=log.id,
        vehicle=VehicleOut.model_validate(log.vehicle),
        driver=DriverOut.model_validate(log.driver),
        log_type=log.event_type,
        mileage_in_kilometers=log.mileage,
        timestamp=log.event_timestamp,
    )


def find_log(db: Session, log_id: int) -> Optional[VehicleLogOut]:
    log = joined_logs(db).filter(VehicleLog.id == log_id).first()
    return to_vehicle_log_out(log) if log else None


def find_logs(db: Session, limit: int, offset: int, filters: VehicleLogFilter) -> list[VehicleLogOut]:
    q = newest_first(apply_filter(joined_logs(db), filters))
    return [to_vehicle_log_out(log) for log in q.limit(limit).offset(offset).all()]
