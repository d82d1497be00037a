# vehicle_registry/services/vehicle_service.py
"""
Vehicle directory: CRUD over registered vehicles keyed by number.

The module-level lookups take an open session so other services can run
them inside their own transaction (see vehicle_log_service.create).
VehicleService methods each use a session of their own.
"""

from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from vehicle_registry.errors import DuplicateError, InternalError, message_of
from vehicle_registry.models.vehicle import Vehicle
from vehicle_registry.schemas.vehicle import VehicleCreate, VehicleOut, VehicleUpdate
from vehicle_registry.utils.logger import get_logger, log_internal_reason

logger = get_logger(__name__)

DUPLICATE_VEHICLE_DETAIL = "A vehicle with this number already exists."


def lookup_vehicle_by_number(db: Session, number: str, for_update: bool = False) -> Optional[Vehicle]:
    """Find a vehicle by number. Returns None if not found.

    With `for_update`, the row stays locked until the caller's transaction ends.
    """
    q = db.query(Vehicle).filter(Vehicle.number == number)
    if for_update:
        q = q.with_for_update()
    return q.first()


def vehicle_exists(db: Session, number: str) -> bool:
    """Check if a vehicle number is registered."""
    return lookup_vehicle_by_number(db, number) is not None


class VehicleService:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, body: VehicleCreate) -> VehicleOut:
        context = message_of("Fail to create vehicle", body.model_dump())
        db = self._session_factory()
        try:
            if vehicle_exists(db, body.number):
                raise DuplicateError(context, DUPLICATE_VEHICLE_DETAIL)
            vehicle = Vehicle(number=body.number, brand=body.brand, model=body.model)
            db.add(vehicle)
            db.commit()
            logger.info(f"[Vehicle] Registered {vehicle.number}")
            return VehicleOut.model_validate(vehicle)
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same number
            db.rollback()
            log_internal_reason(logger, context.message, e)
            raise DuplicateError(context, DUPLICATE_VEHICLE_DETAIL) from e
        except SQLAlchemyError as e:
            db.rollback()
            log_internal_reason(logger, context.message, e)
            raise InternalError(context) from e
        finally:
            db.close()

    def exists(self, number: str) -> bool:
        db = self._session_factory()
        try:
            return vehicle_exists(db, number)
        except SQLAlchemyError as e:
            message = f"Fail to check vehicle with number {number}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()

    def read(self, number: str) -> Optional[VehicleOut]:
        db = self._session_factory()
        try:
            vehicle = lookup_vehicle_by_number(db, number)
            return VehicleOut.model_validate(vehicle) if vehicle else None
        except SQLAlchemyError as e:
            message = f"Fail to read vehicle with number {number}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()

    def read_all(self, limit: int, page: int) -> list[VehicleOut]:
        limit = max(limit, 0)
        page = max(page, 1)
        db = self._session_factory()
        try:
            vehicles = (
                db.query(Vehicle)
                .order_by(Vehicle.id.desc())
                .limit(limit)
                .offset((page - 1) * limit)
                .all()
            )
            return [VehicleOut.model_validate(v) for v in vehicles]
        except SQLAlchemyError as e:
            message = f"Failed to retrieve vehicles for page {page} with limit {limit}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()

    def update(self, number: str, body: VehicleUpdate) -> Optional[VehicleOut]:
        db = self._session_factory()
        try:
            vehicle = lookup_vehicle_by_number(db, number)
            if not vehicle:
                return None
            vehicle.brand = body.brand
            vehicle.model = body.model
            db.commit()
            return VehicleOut.model_validate(vehicle)
        except SQLAlchemyError as e:
            db.rollback()
            message = f"Fail to update vehicle {body.model_dump()} with number {number}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()

    def delete(self, number: str) -> bool:
        db = self._session_factory()
        try:
            deleted = db.query(Vehicle).filter(Vehicle.number == number).delete()
            db.commit()
            return deleted == 1
        except SQLAlchemyError as e:
            db.rollback()
            message = f"Fail to delete vehicle with number {number}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()
