"""FastAPI dependencies shared by the routers."""

import fastapi
from webhook_relay.config import Settings
from webhook_relay.services import crm_service as crm_service_lib

Request = fastapi.Request
CRMService = crm_service_lib.LeadConnectorCRMService


def get_settings(request: Request) -> Settings:
  """Returns the settings loaded at startup."""
  return request.app.state.settings


def get_crm_service(request: Request) -> CRMService:
  """Returns the CRM client created at startup."""
  return request.app.state.crm_service
