"""LeadConnector (HighLevel) CRM service.

Thin async wrappers around the CRM REST API. Each method issues a single
HTTP call; nothing is retried or cached.
"""

import json
import logging
from typing import Any, Callable

import aiohttp
from webhook_relay.config import Settings
from webhook_relay.schemas import crm as crm_lib

Contact = crm_lib.Contact
Opportunity = crm_lib.Opportunity

# Opportunities fetched per contact; only the first one is used.
OPPORTUNITY_PAGE_SIZE = 20


class CRMRequestError(Exception):
  """Raised when the CRM answers with an error status."""

  def __init__(self, status: int, data: Any = None):
    super().__init__(f"Request failed with status code {status}")
    self.status = status
    self.data = data


class LeadConnectorCRMService:
  """Looks up and updates contacts and opportunities in the CRM."""

  def __init__(
      self,
      config: Settings,
      session_factory: Callable[..., aiohttp.ClientSession] = (
          aiohttp.ClientSession
      ),
  ):
    self.config = config
    self.base_url = config.GHL_BASE_URL.rstrip("/")
    self.headers = {
        "Authorization": f"Bearer {config.GHL_API_KEY}",
        "Version": config.GHL_API_VERSION,
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    self._session_factory = session_factory
    logging.info("CRM_SERVICE: Client initialized for %s.", self.base_url)

  async def _request(
      self,
      method: str,
      path: str,
      params: dict[str, str] | None = None,
      body: dict[str, Any] | None = None,
  ) -> Any:
    """Sends one request and returns the decoded response body.

    Args:
      method: HTTP method.
      path: Path below the configured base URL.
      params: Query parameters. Entries whose value is None are dropped.
      body: JSON body, if any.

    Returns:
      The decoded JSON body, or the raw text when it is not JSON.

    Raises:
      CRMRequestError: The CRM answered with a 4xx/5xx status.
      aiohttp.ClientError: The request could not be completed.
    """
    url = f"{self.base_url}{path}"
    if params is not None:
      params = {k: v for k, v in params.items() if v is not None}
    async with self._session_factory(headers=self.headers) as session:
      response = await session.request(method, url, params=params, json=body)
      data = await _read_body(response)
    if response.status >= 400:
      logging.error(
          "CRM_SERVICE: %s %s failed with status %s: %s",
          method,
          path,
          response.status,
          data,
      )
      raise CRMRequestError(response.status, data)
    return data

  async def _find_contact(self, **query: str) -> Contact | None:
    data = await self._request(
        "GET",
        "/contacts/search/duplicate",
        params={"locationId": self.config.GHL_LOCATION_ID, **query},
    )
    contact = data.get("contact") if isinstance(data, dict) else None
    if not contact:
      return None
    return Contact.model_validate(contact)

  async def find_contact_by_email(self, email: str) -> Contact | None:
    """Returns the contact registered with this email, if any."""
    logging.info("CRM_SERVICE: Looking up contact by email %s.", email)
    return await self._find_contact(email=email)

  async def find_contact_by_phone(self, phone: str) -> Contact | None:
    """Returns the contact registered with this phone number, if any."""
    logging.info("CRM_SERVICE: Looking up contact by phone %s.", phone)
    return await self._find_contact(number=phone)

  async def find_opportunity_for_contact(
      self, contact_id: str
  ) -> Opportunity | None:
    """Returns the first opportunity of a contact across all pipelines."""
    logging.info("CRM_SERVICE: Searching opportunities of %s.", contact_id)
    data = await self._request(
        "GET",
        "/opportunities/search",
        params={
            "location_id": self.config.GHL_LOCATION_ID,
            "contact_id": contact_id,
            "limit": str(OPPORTUNITY_PAGE_SIZE),
        },
    )
    opportunities = (
        data.get("opportunities") if isinstance(data, dict) else None
    ) or []
    if not opportunities:
      return None
    return Opportunity.model_validate(opportunities[0])

  async def update_opportunity_stage(self, opportunity_id: str) -> Any:
    """Moves an opportunity to the configured sales pipeline and stage."""
    logging.info(
        "CRM_SERVICE: Moving opportunity %s to pipeline %s, stage %s.",
        opportunity_id,
        self.config.GHL_PIPELINE_SALES,
        self.config.GHL_STAGE_NEW_BOOKING,
    )
    return await self._request(
        "PUT",
        f"/opportunities/{opportunity_id}",
        body={
            "pipelineId": self.config.GHL_PIPELINE_SALES,
            "pipelineStageId": self.config.GHL_STAGE_NEW_BOOKING,
        },
    )

  async def update_contact_custom_field(
      self, contact_id: str, field_id: str, value: str
  ) -> Any:
    """Writes a single custom-field value on a contact."""
    logging.info(
        "CRM_SERVICE: Updating custom field %s on contact %s.",
        field_id,
        contact_id,
    )
    return await self._request(
        "PUT",
        f"/contacts/{contact_id}",
        body={"customFields": [{"id": field_id, "field_value": value}]},
    )


async def _read_body(response: aiohttp.ClientResponse) -> Any:
  text = await response.text()
  if not text:
    return None
  try:
    return json.loads(text)
  except ValueError:
    return text
