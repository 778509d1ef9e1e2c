"""Pydantic schemas for Calendly webhook payloads."""

from typing import Any

import pydantic

Field = pydantic.Field
BaseModel = pydantic.BaseModel
ConfigDict = pydantic.ConfigDict

INVITEE_CREATED = "invitee.created"


class CalendlyWebhook(BaseModel):
  """Envelope of every Calendly webhook delivery."""

  model_config = ConfigDict(extra="ignore")

  event: Any = Field(
      None, description="Calendly event name, e.g. 'invitee.created'."
  )
  payload: Any = Field(
      None, description="Event-specific payload, read once the event is known."
  )

  @property
  def is_invitee_created(self) -> bool:
    return self.event == INVITEE_CREATED


class ScheduledEvent(BaseModel):
  """The scheduled event an invitee booked."""

  model_config = ConfigDict(extra="ignore")

  name: str | None = None


class CalendlyInvitee(BaseModel):
  """Payload of an 'invitee.created' event."""

  model_config = ConfigDict(extra="ignore")

  email: str | None = Field(None, description="The invitee's email address.")
  name: str | None = Field(None, description="The invitee's full name.")
  text_reminder_number: str | None = Field(
      None, description="Phone number given for SMS reminders, if any."
  )
  scheduled_event: ScheduledEvent | None = None

  @property
  def phone(self) -> str | None:
    return self.text_reminder_number or None

  @property
  def event_type_name(self) -> str:
    if self.scheduled_event and self.scheduled_event.name:
      return self.scheduled_event.name
    return "unknown"
