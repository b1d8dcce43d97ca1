"""
Status endpoints for the running updater.
"""
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..schemas.status import HealthResponse, ServiceInfo, StatusResponse

router = APIRouter()


@router.get("/test", response_model=ServiceInfo)
def test_endpoint(request: Request):
    """Simple liveness endpoint."""
    return ServiceInfo(
        service=request.app.state.settings.NAME,
        status="ok",
        message="hello from band oracle updater",
    )


@router.get("/health", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
def health_check(request: Request):
    """Reports whether the update loop task is still running."""
    task = getattr(request.app.state, "loop_task", None)
    if task is not None and not task.done():
        return HealthResponse(status="healthy", update_loop="running")

    body = HealthResponse(status="degraded", update_loop="stopped")
    return JSONResponse(status_code=503, content=body.model_dump())


@router.get("/status", response_model=StatusResponse)
def get_status(request: Request):
    settings = request.app.state.settings
    client = request.app.state.client
    return StatusResponse(
        name=settings.NAME,
        version=settings.VERSION,
        signer_address=client.address,
        contract_addresses=list(settings.BAND_CONTRACT_ADDRESSES),
        update_interval_seconds=settings.UPDATE_INTERVAL_SECONDS,
        update_method=settings.UPDATE_METHOD,
    )
