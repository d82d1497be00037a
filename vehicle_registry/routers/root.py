# vehicle_registry/routers/root.py
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def index():
    return "Vehicle Registry Server"
