# vehicle_registry/models/vehicle_log.py
"""
Vehicle entry/exit log table.
Rows are written only by VehicleLogService.create, which validates mileage
and entry/exit alternation per vehicle before inserting.
event_timestamp is assigned by the database at insert time.
"""

from sqlalchemy import Column, Integer, Float, DateTime, Enum, ForeignKey, Index
from sqlalchemy.orm import relationship
from vehicle_registry.database import Base

LOG_TYPES = ("entry", "exit")


class VehicleLog(Base):
    __tablename__ = "vehicle_log"
    __table_args__ = (
        Index("ix_vehicle_log_vehicle_timestamp", "vehicle_id", "event_timestamp"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicle.id"), nullable=False)
    driver_id = Column(Integer, ForeignKey("driver.id"), nullable=False)
    event_type = Column(Enum(*LOG_TYPES, name="vehicle_log_type"), nullable=False)
    mileage = Column(Float, nullable=False)       # kilometers
    event_timestamp = Column(DateTime(timezone=True), nullable=False, index=True)

    vehicle = relationship("Vehicle")
    driver = relationship("Driver")

    def __repr__(self):
        return f"<VehicleLog {self.id} vehicle_id={self.vehicle_id} type={self.event_type} mileage={self.mileage}>"
