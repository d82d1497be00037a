# vehicle_registry/services/vehicle_log_service.py
"""
Vehicle entry/exit logs: the only write path for vehicle_log rows.

create() runs one transaction on one pooled session:
  1. lock the vehicle row (serializes concurrent logs for the same vehicle)
  2. resolve the driver
  3. check mileage and entry/exit order against the vehicle's last log
  4. insert with the database's current timestamp, then commit
and only then reads the vehicle and driver back through their directories
to build the response.

Rules, checked per vehicle against its most recent log:
  - mileage: 0 (odometer reset) or >= the last recorded mileage
  - log type: must differ from the last log type (entry -> exit -> entry ...)
A vehicle without logs accepts any log type and any mileage >= 0.
"""

from typing import Optional
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from vehicle_registry.errors import (
    AppError,
    IncorrectValueError,
    InternalError,
    ReferenceNotFoundError,
    message_of,
)
from vehicle_registry.models.vehicle_log import VehicleLog
from vehicle_registry.schemas.vehicle_log import (
    VehicleLogCreate,
    VehicleLogFilter,
    VehicleLogOut,
    VehicleLogUpdate,
)
from vehicle_registry.services.driver_service import DriverService, lookup_driver_by_license_id
from vehicle_registry.services.vehicle_log_read_model import find_log, find_logs, newest_first
from vehicle_registry.services.vehicle_service import VehicleService, lookup_vehicle_by_number
from vehicle_registry.utils.logger import get_logger, log_internal_reason

logger = get_logger(__name__)

VEHICLE_NOT_FOUND_DETAIL = "A vehicle with this number was not found."
DRIVER_NOT_FOUND_DETAIL = "A driver with this license ID was not found."


def _format_km(value) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def last_log_of(db: Session, vehicle_id: int) -> Optional[VehicleLog]:
    """The vehicle's most recent log, or None if it has never been logged."""
    q = db.query(VehicleLog).filter(VehicleLog.vehicle_id == vehicle_id)
    return newest_first(q).first()


def check_mileage(last_log: Optional[VehicleLog], mileage: float) -> Optional[str]:
    """Returns why `mileage` is rejected, or None if it is valid."""
    if last_log is None or mileage == 0 or mileage >= last_log.mileage:
        return None
    return (
        f"Provided vehicle mileage {_format_km(mileage)} is invalid. "
        f"Last recorded mileage: {_format_km(last_log.mileage)}. "
        "Vehicle mileage can only be greater than or equals to the last mileage "
        "recorded (i.e., increasing) or zero (i.e., reset)."
    )


def check_log_type(last_log: Optional[VehicleLog], log_type: str) -> Optional[str]:
    """Returns why `log_type` is rejected, or None if it is valid."""
    if last_log is None or log_type != last_log.event_type:
        return None
    return (
        f'Provided log type "{log_type}" is invalid. '
        f'Last recorded log: "{last_log.event_type}". '
        "Log type cannot be the same of the last vehicle log."
    )


class VehicleLogService:
    def __init__(
        self,
        session_factory: sessionmaker,
        vehicle_service: VehicleService,
        driver_service: DriverService,
    ):
        self._session_factory = session_factory
        self._vehicle_service = vehicle_service
        self._driver_service = driver_service

    def create(self, body: VehicleLogCreate) -> VehicleLogOut:
        context = message_of("Fail to create vehicle log", body.model_dump())
        db = self._session_factory()
        try:
            vehicle = lookup_vehicle_by_number(db, body.vehicle_number, for_update=True)
            if vehicle is None:
                raise ReferenceNotFoundError(context, VEHICLE_NOT_FOUND_DETAIL)

            driver = lookup_driver_by_license_id(db, body.driver_license_id)
            if driver is None:
                raise ReferenceNotFoundError(context, DRIVER_NOT_FOUND_DETAIL)

            last_log = last_log_of(db, vehicle.id)
            rejection = (
                check_mileage(last_log, body.mileage_in_kilometers)
                or check_log_type(last_log, body.log_type)
            )
            if rejection:
                raise IncorrectValueError(context, rejection)

            log = VehicleLog(
                vehicle_id=vehicle.id,
                driver_id=driver.id,
                event_type=body.log_type,
                mileage=body.mileage_in_kilometers,
                event_timestamp=func.now(),
            )
            db.add(log)
            db.flush()
            db.refresh(log)  # load the id and timestamp assigned by the database
            log_id, timestamp = log.id, log.event_timestamp
            db.commit()
        except AppError as e:
            db.rollback()
            logger.warning(f"[VehicleLog] {context.message} | {e.kind}: {e.detail}")
            raise
        except SQLAlchemyError as e:
            db.rollback()
            log_internal_reason(logger, context.message, e)
            raise InternalError(context) from e
        finally:
            db.close()

        logger.info(
            f"[VehicleLog] #{log_id} {body.log_type} | vehicle={body.vehicle_number} "
            f"driver={body.driver_license_id} mileage={_format_km(body.mileage_in_kilometers)}"
        )
        return self._hydrate(context, log_id, timestamp, body)

    def _hydrate(self, context, log_id: int, timestamp, body: VehicleLogCreate) -> VehicleLogOut:
        # The log is committed at this point; failures here are never rolled back
        vehicle = self._vehicle_service.read(body.vehicle_number)
        if vehicle is None:
            log_internal_reason(logger, context.message, "Fail to read vehicle after registering this vehicle log.")
            raise InternalError(context)

        driver = self._driver_service.read(body.driver_license_id)
        if driver is None:
            log_internal_reason(logger, context.message, "Fail to read driver after registering this vehicle log.")
            raise InternalError(context)

        return VehicleLogOut(
            id=log_id,
            vehicle=vehicle,
            driver=driver,
            log_type=body.log_type,
            mileage_in_kilometers=body.mileage_in_kilometers,
            timestamp=timestamp,
        )

    def read(self, log_id: int) -> Optional[VehicleLogOut]:
        db = self._session_factory()
        try:
            return find_log(db, log_id)
        except SQLAlchemyError as e:
            message = f"Fail to read vehicle log with ID {log_id}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()

    def read_all(self, limit: int, page: int, filters: Optional[VehicleLogFilter] = None) -> list[VehicleLogOut]:
        limit = max(limit, 0)
        page = max(page, 1)
        offset = (page - 1) * limit
        db = self._session_factory()
        try:
            return find_logs(db, limit, offset, filters or VehicleLogFilter())
        except SQLAlchemyError as e:
            message = f"Failed to retrieve vehicle logs for page {page} with limit {limit}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()

    def update(self, log_id: int, body: VehicleLogUpdate) -> Optional[VehicleLogOut]:
        """
        Overwrite the log type and mileage of an existing log.
        The create-time mileage and entry/exit rules are not re-checked here.
        """
        db = self._session_factory()
        try:
            log = db.query(VehicleLog).filter(VehicleLog.id == log_id).first()
            if log is None:
                return None
            log.event_type = body.log_type
            log.mileage = body.mileage_in_kilometers
            db.commit()
            return find_log(db, log_id)
        except SQLAlchemyError as e:
            db.rollback()
            message = f"Fail to update vehicle log with ID {log_id}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()

    def delete(self, log_id: int) -> bool:
        db = self._session_factory()
        try:
            deleted = db.query(VehicleLog).filter(VehicleLog.id == log_id).delete()
            db.commit()
            return deleted == 1
        except SQLAlchemyError as e:
            db.rollback()
            message = f"Fail to delete vehicle log with ID {log_id}."
            log_internal_reason(logger, message, e)
            raise InternalError(message) from e
        finally:
            db.close()
