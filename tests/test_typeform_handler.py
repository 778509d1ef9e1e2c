"""Tests for the Typeform survey handler."""

import asyncio

from webhook_relay.handlers import typeform_handler
from webhook_relay.schemas.crm import Contact
from webhook_relay.services.crm_service import CRMRequestError


def _handle(body, crm_service, settings):
  return asyncio.run(
      typeform_handler.handle_typeform_webhook(body, crm_service, settings)
  )


class TestTypeformHandler:
  """Tests for handle_typeform_webhook."""

  def test_missing_form_response_is_ignored(
      self, crm_service, settings
  ) -> None:
    result = _handle({"event_type": "form_response"}, crm_service, settings)
    assert result.status_code == 200
    assert result.status == "ignored"
    crm_service.find_contact_by_email.assert_not_called()

  def test_missing_email_is_error_without_crm_calls(
      self, typeform_submission, crm_service, settings
  ) -> None:
    answers = typeform_submission["form_response"]["answers"]
    typeform_submission["form_response"]["answers"] = [
        a for a in answers if a["type"] != "email"
    ]
    result = _handle(typeform_submission, crm_service, settings)
    assert result.status_code == 200
    assert result.status == "error"
    crm_service.find_contact_by_email.assert_not_called()
    crm_service.update_contact_custom_field.assert_not_called()

  def test_contact_not_found(
      self, typeform_submission, crm_service, settings
  ) -> None:
    result = _handle(typeform_submission, crm_service, settings)
    body = result.response.to_body()
    assert result.status_code == 200
    assert body["status"] == "contact_not_found"
    assert body["email"] == "jane.doe@example.com"
    crm_service.update_contact_custom_field.assert_not_called()

  def test_success_writes_formatted_answers(
      self, typeform_submission, crm_service, settings
  ) -> None:
    crm_service.find_contact_by_email.return_value = Contact(id="c-1")
    result = _handle(typeform_submission, crm_service, settings)
    crm_service.find_contact_by_email.assert_awaited_once_with(
        "jane.doe@example.com"
    )
    crm_service.update_contact_custom_field.assert_awaited_once_with(
        "c-1",
        "23DDSocchLFEzrtFgAoB",
        "Your email: jane.doe@example.com\nWhich plan?: Pro\nAgree?: Non",
    )
    body = result.response.to_body()
    assert result.status_code == 200
    assert body["status"] == "success"
    assert body["contactId"] == "c-1"
    assert body["email"] == "jane.doe@example.com"

  def test_crm_error_returns_500_with_message(
      self, typeform_submission, crm_service, settings
  ) -> None:
    crm_service.find_contact_by_email.return_value = Contact(id="c-1")
    crm_service.update_contact_custom_field.side_effect = CRMRequestError(
        422, {"message": "Unknown custom field"}
    )
    result = _handle(typeform_submission, crm_service, settings)
    assert result.status_code == 500
    assert result.response.to_body() == {
        "status": "error",
        "message": "Request failed with status code 422",
    }

  def test_malformed_answers_return_500(self, crm_service, settings) -> None:
    body = {"form_response": {"answers": [{"type": "email"}]}}
    result = _handle(body, crm_service, settings)
    assert result.status_code == 500
    crm_service.find_contact_by_email.assert_not_called()

  def test_null_answers_count_as_no_email(self, crm_service, settings) -> None:
    body = {"form_response": {"answers": None}}
    result = _handle(body, crm_service, settings)
    assert result.status_code == 200
    assert result.status == "error"
    crm_service.find_contact_by_email.assert_not_called()

  def test_null_definition_fields_use_field_ids(
      self, typeform_submission, crm_service, settings
  ) -> None:
    typeform_submission["form_response"]["definition"]["fields"] = None
    crm_service.find_contact_by_email.return_value = Contact(id="c-1")
    result = _handle(typeform_submission, crm_service, settings)
    assert result.status_code == 200
    assert result.status == "success"
    crm_service.update_contact_custom_field.assert_awaited_once_with(
        "c-1",
        "23DDSocchLFEzrtFgAoB",
        "f_email: jane.doe@example.com\nf_plan: Pro\nf_agree: Non",
    )

  def test_non_object_body_is_ignored(self, crm_service, settings) -> None:
    result = _handle(["not", "an", "object"], crm_service, settings)
    assert result.status_code == 200
    assert result.status == "ignored"
