from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from paygate.health.service import health_config_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/config")
def health_config(request: Request):
    return JSONResponse(health_config_info(request))
