"""Pytest fixtures for webhook relay tests."""

import json
from typing import Any
from unittest.mock import AsyncMock

import pytest

from webhook_relay.config import Settings
from webhook_relay.services.crm_service import LeadConnectorCRMService


class FakeResponse:
  """Stands in for aiohttp.ClientResponse."""

  def __init__(self, status: int = 200, data: Any = None):
    self.status = status
    if data is None:
      self._text = ""
    elif isinstance(data, str):
      self._text = data
    else:
      self._text = json.dumps(data)

  async def text(self) -> str:
    return self._text


class FakeSession:
  """Stands in for aiohttp.ClientSession and records every request."""

  def __init__(self, factory: "FakeSessionFactory", headers: dict[str, str]):
    self.factory = factory
    self.headers = headers

  async def __aenter__(self) -> "FakeSession":
    return self

  async def __aexit__(self, *exc_info) -> None:
    return None

  async def request(self, method, url, params=None, json=None):
    self.factory.requests.append(
        {
            "method": method,
            "url": url,
            "params": params,
            "json": json,
            "headers": self.headers,
        }
    )
    if not self.factory.responses:
      raise AssertionError(f"Unexpected request: {method} {url}")
    response = self.factory.responses.pop(0)
    if isinstance(response, Exception):
      raise response
    return response


class FakeSessionFactory:
  """Callable passed as ``session_factory``; replies with queued responses."""

  def __init__(self, *responses):
    self.responses = list(responses)
    self.requests: list[dict[str, Any]] = []

  def __call__(self, headers=None) -> FakeSession:
    return FakeSession(self, headers or {})


@pytest.fixture
def settings() -> Settings:
  """Settings with every CRM variable set."""
  return Settings(
      _env_file=None,
      GHL_API_KEY="test-key",
      GHL_BASE_URL="https://crm.example.com",
      GHL_LOCATION_ID="loc-1",
      GHL_PIPELINE_SALES="pipeline-sales",
      GHL_STAGE_NEW_BOOKING="stage-new-booking",
  )


@pytest.fixture
def crm_service() -> AsyncMock:
  """CRM double whose lookups find nothing until told otherwise."""
  service = AsyncMock(spec=LeadConnectorCRMService)
  service.find_contact_by_email.return_value = None
  service.find_contact_by_phone.return_value = None
  service.find_opportunity_for_contact.return_value = None
  service.update_opportunity_stage.return_value = {"succeeded": True}
  service.update_contact_custom_field.return_value = {"succeeded": True}
  return service


@pytest.fixture
def invitee_created_event() -> dict[str, Any]:
  """Calendly 'invitee.created' delivery with a phone number."""
  return {
      "event": "invitee.created",
      "payload": {
          "email": "jane.doe@example.com",
          "name": "Jane Doe",
          "text_reminder_number": "+33612345678",
          "scheduled_event": {"name": "Discovery call"},
      },
  }


@pytest.fixture
def typeform_submission() -> dict[str, Any]:
  """Typeform delivery with an email answer."""
  return {
      "event_id": "01HX",
      "event_type": "form_response",
      "form_response": {
          "form_id": "abc",
          "definition": {
              "fields": [
                  {"id": "f_email", "title": "Your email"},
                  {"id": "f_plan", "title": "Which plan?"},
                  {"id": "f_agree", "title": "Agree?"},
              ]
          },
          "answers": [
              {
                  "type": "email",
                  "field": {"id": "f_email", "type": "email"},
                  "email": "jane.doe@example.com",
              },
              {
                  "type": "choice",
                  "field": {"id": "f_plan", "type": "multiple_choice"},
                  "choice": {"label": "Pro"},
              },
              {
                  "type": "boolean",
                  "field": {"id": "f_agree", "type": "yes_no"},
                  "boolean": False,
              },
          ],
      },
  }
