# Vehicle Registry: database models
# Import all models here for SQLAlchemy discovery

from vehicle_registry.models.vehicle import Vehicle           # noqa
from vehicle_registry.models.driver import Driver             # noqa
from vehicle_registry.models.vehicle_log import VehicleLog    # noqa
