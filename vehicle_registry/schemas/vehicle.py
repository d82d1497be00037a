# vehicle_registry/schemas/vehicle.py
from pydantic import BaseModel, Field


class VehicleCreate(BaseModel):
    number: str = Field(..., min_length=1, max_length=20)
    brand: str = Field(..., min_length=1, max_length=50)      # e.g. Toyota, Ford
    model: str = Field(..., min_length=1, max_length=50)      # e.g. Camry, Mustang

    class Config:
        extra = "forbid"
        str_strip_whitespace = True


class VehicleUpdate(BaseModel):
    brand: str = Field(..., min_length=1, max_length=50)
    model: str = Field(..., min_length=1, max_length=50)

    class Config:
        extra = "forbid"
        str_strip_whitespace = True


class VehicleOut(BaseModel):
    number: str
    brand: str
    model: str

    class Config:
        from_attributes = True
