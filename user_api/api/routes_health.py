# File: user_api/api/routes_health.py

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz", summary="Health check")
def healthz():
    return {"status": "ok"}
