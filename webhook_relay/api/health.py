"""FastAPI router for the health check."""

import datetime
import time

import fastapi
from webhook_relay.schemas import responses as responses_lib

APIRouter = fastapi.APIRouter
HealthResponse = responses_lib.HealthResponse

_STARTED_AT = time.monotonic()

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health() -> HealthResponse:
  """Reports liveness and process uptime."""
  return HealthResponse(
      status="ok",
      uptime=time.monotonic() - _STARTED_AT,
      timestamp=datetime.datetime.now(datetime.timezone.utc).isoformat(),
  )
