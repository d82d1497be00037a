# vehicle_registry/services/driver_service.py
"""
Driver directory: CRUD over drivers keyed by license ID.
Same shape as vehicle_service.
"""

from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from vehicle_registry.errors import DuplicateError, InternalError, message_of
from vehicle_registry.models.driver import Driver
from vehicle_registry.schemas.driver import DriverCreate, DriverOut, DriverUpdate
from vehicle_registry.utils.logger import get_logger, log_internal_reason

logger = get_logger(__name__)

DUPLICATE_DRIVER_DETAIL = "A driver with this license ID already exists."


def lookup_driver_by_license_id(db: Session, license_id: str) -> Optional[Driver]:
    """Find a driver by license ID. Returns None if not found."""
    return db.query(Driver).filter(Driver.license_id == license_id).first()


def driver_exists(db: Session, license_id: str) -> bool:
    return lookup_driver_by_license_id(db, license_id) is not None


class DriverService:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, body: DriverCreate) -> DriverOut:
        context = message_of("Fail to create driver", body.model_dump())
        db = self._session_factory()
        try:
            if driver_exists(db, body.license_id):
                raise DuplicateError(context, DUPLICATE_DRIVER_DETAIL)
            driver = Driver(**body.model_dump())
            db.add(driver)
            db.commit()
            logger.info(f"[Driver] Registered {driver.license_id}")
            return DriverOut.model_validate(driver)
        except IntegrityError as e:
            db.rollback()
            log_internal_reason(logger, context.message, e)
            raise DuplicateError(context, DUPLICATE_DRIVER_DETAIL) from e
        except SQLAlchemyError as e:
            db.rollback()
            log_internal_reason(logger, context.message, e)
            raise InternalError(context) from e
        finally:
            db.close()

    def exists(self, license_id: str) -> bool:
        db = self._session_factory()
        try:
            return driver_exists(db, license_id)
        except SQLAlchemyError as e:
            message = f"Fail to check driver with license ID {license_id}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()

    def read(self, license_id: str) -> Optional[DriverOut]:
        db = self._session_factory()
        try:
            driver = lookup_driver_by_license_id(db, license_id)
            return DriverOut.model_validate(driver) if driver else None
        except SQLAlchemyError as e:
            message = f"Fail to read driver with license ID {license_id}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()

    def read_all(self, limit: int, page: int) -> list[DriverOut]:
        limit = max(limit, 0)
        page = max(page, 1)
        db = self._session_factory()
        try:
            drivers = (
                db.query(Driver)
                .order_by(Driver.id.desc())
                .limit(limit)
                .offset((page - 1) * limit)
                .all()
            )
            return [DriverOut.model_validate(d) for d in drivers]
        except SQLAlchemyError as e:
            message = f"Failed to retrieve drivers for page {page} with limit {limit}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()

    def update(self, license_id: str, body: DriverUpdate) -> Optional[DriverOut]:
        db = self._session_factory()
        try:
            driver = lookup_driver_by_license_id(db, license_id)
            if not driver:
                return None
            for key, value in body.model_dump().items():
                setattr(driver, key, value)
            db.commit()
            return DriverOut.model_validate(driver)
        except SQLAlchemyError as e:
            db.rollback()
            message = f"Fail to update driver {body.model_dump()} with license ID {license_id}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()

    def delete(self, license_id: str) -> bool:
        db = self._session_factory()
        try:
            deleted = db.query(Driver).filter(Driver.license_id == license_id).delete()
            db.commit()
            return deleted == 1
        except SQLAlchemyError as e:
            db.rollback()
            message = f"Fail to delete driver with license ID {license_id}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()
