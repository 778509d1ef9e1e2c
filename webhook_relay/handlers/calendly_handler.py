"""Handles Calendly booking webhooks.

A booking moves the invitee's opportunity in the CRM to the configured
"new booking" stage of the sales pipeline.
"""

import logging
from typing import Any

from webhook_relay.config import Settings
from webhook_relay.schemas import calendly as calendly_lib
from webhook_relay.schemas import crm as crm_lib
from webhook_relay.schemas import responses as responses_lib
from webhook_relay.services import crm_service as crm_service_lib

CalendlyWebhook = calendly_lib.CalendlyWebhook
CalendlyInvitee = calendly_lib.CalendlyInvitee
Contact = crm_lib.Contact
WebhookResponse = responses_lib.WebhookResponse
WebhookResult = responses_lib.WebhookResult
CRMService = crm_service_lib.LeadConnectorCRMService


async def resolve_contact(
    crm_service: CRMService, email: str | None, phone: str | None
) -> Contact | None:
  """Finds the CRM contact by email, then by phone if the email misses.

  Args:
    crm_service: The CRM client.
    email: The invitee's email address.
    phone: The invitee's phone number, if given.

  Returns:
    The matching contact, or None if neither lookup matched.
  """
  contact = None
  if email:
    contact = await crm_service.find_contact_by_email(email)
  if contact is None and phone:
    logging.info(
        "CALENDLY_WEBHOOK: Contact not found by email, trying phone %s.", phone
    )
    contact = await crm_service.find_contact_by_phone(phone)
  return contact


async def handle_calendly_webhook(
    body: Any, crm_service: CRMService, config: Settings
) -> WebhookResult:
  """Processes one Calendly webhook delivery.

  Args:
    body: The decoded JSON body of the delivery.
    crm_service: The CRM client.
    config: Application settings.

  Returns:
    The status code and body to answer the sender with.
  """
  try:
    webhook = CalendlyWebhook.model_validate(
        body if isinstance(body, dict) else {}
    )
    logging.info("CALENDLY_WEBHOOK: Received event %s.", webhook.event)
    if not webhook.is_invitee_created:
      logging.info(
          "CALENDLY_WEBHOOK: Ignored (event type: %s).", webhook.event
      )
      return WebhookResult(response=WebhookResponse(status="ignored"))

    invitee = CalendlyInvitee.model_validate(webhook.payload)
    email = invitee.email
    logging.info(
        "CALENDLY_WEBHOOK: New booking: %s (%s) - %s",
        invitee.name,
        email,
        invitee.event_type_name,
    )

    contact = await resolve_contact(crm_service, email, invitee.phone)
    if contact is None:
      logging.warning("CALENDLY_WEBHOOK: No CRM contact for %s.", email)
      return WebhookResult(
          response=WebhookResponse(
              status="contact_not_found",
              email=email,
              message="No CRM contact found for this email or phone number.",
          )
      )
    logging.info(
        "CALENDLY_WEBHOOK: Contact found: %s (%s)",
        contact.id,
        contact.display_name,
    )

    opportunity = await crm_service.find_opportunity_for_contact(contact.id)
    if opportunity is None:
      logging.warning(
          "CALENDLY_WEBHOOK: No opportunity for contact %s.", contact.id
      )
      return WebhookResult(
          response=WebhookResponse(
              status="opportunity_not_found",
              contact_id=contact.id,
              message="Contact found but it has no opportunity in any pipeline.",
          )
      )
    logging.info(
        "CALENDLY_WEBHOOK: Opportunity found: %s (current stage: %s)",
        opportunity.id,
        opportunity.pipeline_stage_id,
    )

    await crm_service.update_opportunity_stage(opportunity.id)
    logging.info(
        "CALENDLY_WEBHOOK: Opportunity %s moved to %s.",
        opportunity.id,
        config.NEW_BOOKING_STAGE_LABEL,
    )
    return WebhookResult(
        response=WebhookResponse(
            status="success",
            contact_id=contact.id,
            opportunity_id=opportunity.id,
            new_stage=config.NEW_BOOKING_STAGE_LABEL,
        )
    )
  except Exception as e:  # pylint: disable=broad-exception-caught
    logging.error(
        "CALENDLY_WEBHOOK: Error: %s", getattr(e, "data", None) or e
    )
    return WebhookResult(
        status_code=500,
        response=WebhookResponse(status="error", message=str(e)),
    )
