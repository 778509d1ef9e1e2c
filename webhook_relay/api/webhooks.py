"""FastAPI router receiving the Calendly and Typeform webhooks."""

from typing import Any

import fastapi
from fastapi import responses
from webhook_relay.api import dependencies
from webhook_relay.config import Settings
from webhook_relay.handlers import calendly_handler
from webhook_relay.handlers import typeform_handler
from webhook_relay.schemas import responses as responses_lib
from webhook_relay.services import crm_service as crm_service_lib

APIRouter = fastapi.APIRouter
Body = fastapi.Body
Depends = fastapi.Depends
JSONResponse = responses.JSONResponse
WebhookResult = responses_lib.WebhookResult
CRMService = crm_service_lib.LeadConnectorCRMService


router = APIRouter(prefix="/webhook", tags=["Webhooks"])


def _to_response(result: WebhookResult) -> JSONResponse:
  return JSONResponse(
      status_code=result.status_code, content=result.response.to_body()
  )


@router.post("/calendly")
async def calendly_webhook_endpoint(
    body: Any = Body(...),
    crm_service: CRMService = Depends(dependencies.get_crm_service),
    config: Settings = Depends(dependencies.get_settings),
) -> JSONResponse:
  """Receives Calendly booking events."""
  result = await calendly_handler.handle_calendly_webhook(
      body, crm_service, config
  )
  return _to_response(result)


@router.post("/typeform")
async def typeform_webhook_endpoint(
    body: Any = Body(...),
    crm_service: CRMService = Depends(dependencies.get_crm_service),
    config: Settings = Depends(dependencies.get_settings),
) -> JSONResponse:
  """Receives Typeform survey submissions."""
  result = await typeform_handler.handle_typeform_webhook(
      body, crm_service, config
  )
  return _to_response(result)
