"""Main application for the CRM Webhook Relay."""

from contextlib import asynccontextmanager

import logging
import sys
from google.cloud.logging_v2.handlers import StructuredLogHandler
import dotenv
import fastapi
from webhook_relay.api import health
from webhook_relay.api import webhooks
from webhook_relay.config import settings
from webhook_relay.services import crm_service as crm_service_lib

load_dotenv = dotenv.load_dotenv
FastAPI = fastapi.FastAPI
LeadConnectorCRMService = crm_service_lib.LeadConnectorCRMService

load_dotenv()


def setup_async_logging():
  """Configures a single structured logger writing JSON lines to stdout."""
  root_logger = logging.getLogger()
  root_logger.handlers.clear()
  root_logger.setLevel(logging.INFO)
  handler = StructuredLogHandler(stream=sys.stdout)
  root_logger.addHandler(handler)


# --- Logging and App Setup ---
setup_async_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
  logging.info("FastAPI server starting up on port %s...", settings.PORT)
  settings.log_summary()
  app.state.settings = settings
  app.state.crm_service = LeadConnectorCRMService(settings)
  logging.info("ROUTES: POST /webhook/calendly -> Calendly webhooks")
  logging.info("ROUTES: POST /webhook/typeform -> Typeform webhooks")
  logging.info("ROUTES: GET  /health           -> Health check")
  yield
  logging.info("FastAPI server shutting down.")


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.include_router(webhooks.router)
app.include_router(health.router)


@app.get("/")
async def root():
  logging.info("Root path '/' accessed.")
  return {"message": f"{settings.APP_NAME} is running."}


if __name__ == "__main__":
  import uvicorn  # pylint: disable=g-import-not-at-top

  uvicorn.run(
      "webhook_relay.main:app",
      host="0.0.0.0",
      port=settings.PORT,
  )
