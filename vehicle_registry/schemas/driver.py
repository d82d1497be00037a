# vehicle_registry/schemas/driver.py
from pydantic import BaseModel, Field
from typing import Optional

# Letters, numbers and hyphens only
LICENSE_ID_PATTERN = r"^[A-Za-z0-9-]+$"


class DriverCreate(BaseModel):
    license_id: str = Field(..., min_length=6, max_length=20, pattern=LICENSE_ID_PATTERN)
    first_name: str = Field(..., min_length=1, max_length=30)
    surname: str = Field(..., min_length=1, max_length=30)
    second_name: Optional[str] = Field(None, min_length=1, max_length=30)
    second_surname: Optional[str] = Field(None, min_length=1, max_length=30)

    class Config:
        extra = "forbid"
        str_strip_whitespace = True


class DriverUpdate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=30)
    surname: str = Field(..., min_length=1, max_length=30)
    second_name: Optional[str] = Field(None, min_length=1, max_length=30)
    second_surname: Optional[str] = Field(None, min_length=1, max_length=30)

    class Config:
        extra = "forbid"
        str_strip_whitespace = True


class DriverOut(BaseModel):
    license_id: str
    first_name: str
    surname: str
    second_name: Optional[str] = None
    second_surname: Optional[str] = None

    class Config:
        from_attributes = True
