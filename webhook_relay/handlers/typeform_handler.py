"""Handles Typeform survey webhooks.

The submitted answers are written, as one text block, into a custom field
of the CRM contact matching the email given in the survey.
"""

import logging
from typing import Any

from webhook_relay.config import Settings
from webhook_relay.core import utils
from webhook_relay.schemas import responses as responses_lib
from webhook_relay.schemas import typeform as typeform_lib
from webhook_relay.services import crm_service as crm_service_lib

TypeformWebhook = typeform_lib.TypeformWebhook
WebhookResponse = responses_lib.WebhookResponse
WebhookResult = responses_lib.WebhookResult
CRMService = crm_service_lib.LeadConnectorCRMService


async def handle_typeform_webhook(
    body: Any, crm_service: CRMService, config: Settings
) -> WebhookResult:
  """Processes one Typeform webhook delivery."""
  logging.info("TYPEFORM_WEBHOOK: Received submission.")

  try:
    form_response = TypeformWebhook.model_validate(
        body if isinstance(body, dict) else {}
    ).form_response
    if form_response is None:
      logging.warning("TYPEFORM_WEBHOOK: Invalid payload, no form_response.")
      return WebhookResult(
          response=WebhookResponse(
              status="ignored", message="No form_response in payload."
          )
      )

    email = utils.extract_email(form_response.answers)
    if not email:
      logging.warning("TYPEFORM_WEBHOOK: No email among the answers.")
      return WebhookResult(
          response=WebhookResponse(
              status="error", message="No email among the answers."
          )
      )
    logging.info("TYPEFORM_WEBHOOK: Email: %s", email)

    formatted_answers = utils.format_typeform_answers(
        form_response.answers,
        form_response.fields,
        yes_label=config.TYPEFORM_YES_LABEL,
        no_label=config.TYPEFORM_NO_LABEL,
    )
    logging.info("TYPEFORM_WEBHOOK: Formatted answers:\n%s", formatted_answers)

    contact = await crm_service.find_contact_by_email(email)
    if contact is None:
      logging.warning("TYPEFORM_WEBHOOK: No CRM contact for %s.", email)
      return WebhookResult(
          response=WebhookResponse(
              status="contact_not_found",
              email=email,
              message="No CRM contact found for this email.",
          )
      )
    logging.info(
        "TYPEFORM_WEBHOOK: Contact found: %s (%s)",
        contact.id,
        contact.display_name,
    )

    await crm_service.update_contact_custom_field(
        contact.id, config.GHL_SURVEY_FIELD_ID, formatted_answers
    )
    logging.info("TYPEFORM_WEBHOOK: Survey responses saved on %s.", contact.id)
    return WebhookResult(
        response=WebhookResponse(
            status="success",
            contact_id=contact.id,
            email=email,
            message="Survey responses updated.",
        )
    )
  except Exception as e:  # pylint: disable=broad-exception-caught
    logging.error(
        "TYPEFORM_WEBHOOK: Error: %s", getattr(e, "data", None) or e
    )
    return WebhookResult(
        status_code=500,
        response=WebhookResponse(status="error", message=str(e)),
    )
