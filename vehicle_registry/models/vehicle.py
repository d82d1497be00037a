# vehicle_registry/models/vehicle.py
"""
Registered vehicles table.
Vehicles are identified by their unique number (e.g. VIN or plate).
Referenced by vehicle_log; deleting a referenced vehicle is refused by the FK.
"""

from sqlalchemy import Column, Integer, String
from vehicle_registry.database import Base


class Vehicle(Base):
    __tablename__ = "vehicle"

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(String(20), unique=True, nullable=False, index=True)
    brand = Column(String(50), nullable=False)
    model = Column(String(50), nullable=False)

    def __repr__(self):
        return f"<Vehicle {self.number} brand={self.brand} model={self.model}>"
