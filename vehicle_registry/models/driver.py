# vehicle_registry/models/driver.py
"""
Drivers table.
A driver is identified by license ID, with first name and surname plus
optional second name and second surname.
"""

from sqlalchemy import Column, Integer, String
from vehicle_registry.database import Base


class Driver(Base):
    __tablename__ = "driver"

    id = Column(Integer, primary_key=True, autoincrement=True)
    license_id = Column(String(20), unique=True, nullable=False, index=True)
    first_name = Column(String(30), nullable=False)
    surname = Column(String(30), nullable=False)
    second_name = Column(String(30))
    second_surname = Column(String(30))

    def __repr__(self):
        return f"<Driver {self.license_id} name={self.first_name} {self.surname}>"
