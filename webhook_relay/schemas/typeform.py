"""Pydantic schemas for Typeform webhook payloads."""

from typing import Any

import pydantic

Field = pydantic.Field
BaseModel = pydantic.BaseModel
ConfigDict = pydantic.ConfigDict
field_validator = pydantic.field_validator


class FieldRef(BaseModel):
  """Reference from an answer to the question it answers."""

  model_config = ConfigDict(extra="ignore")

  id: str
  type: str | None = None
  ref: str | None = None


class Choice(BaseModel):
  model_config = ConfigDict(extra="ignore")

  label: str | None = None


class FormAnswer(BaseModel):
  """One answer of a submission.

  Typeform keys the value by the answer type (``{"type": "text", "text":
  "..."}``). Types without a dedicated attribute keep their value as an
  extra field.
  """

  model_config = ConfigDict(extra="allow")

  type: str
  field: FieldRef
  choice: Choice | None = None
  text: str | None = None
  email: str | None = None
  phone_number: str | None = None
  boolean: bool | None = None
  number: int | float | None = None

  @field_validator("number")
  @classmethod
  def integral_number_as_int(cls, value: int | float | None):
    if isinstance(value, float) and value.is_integer():
      return int(value)
    return value

  def raw_value(self) -> Any:
    """Returns the value stored under the key named by ``type``."""
    if self.type in type(self).model_fields:
      return getattr(self, self.type)
    return (self.model_extra or {}).get(self.type)


class FormField(BaseModel):
  """A question as listed in the form definition."""

  model_config = ConfigDict(extra="ignore")

  id: str
  title: str | None = None


class FormDefinition(BaseModel):
  model_config = ConfigDict(extra="ignore")

  fields: list[FormField] = Field(default_factory=list)

  @field_validator("fields", mode="before")
  @classmethod
  def null_fields_as_empty(cls, value: Any) -> Any:
    return [] if value is None else value


class FormResponse(BaseModel):
  """A single form submission."""

  model_config = ConfigDict(extra="ignore")

  form_id: str | None = None
  token: str | None = None
  answers: list[FormAnswer] = Field(default_factory=list)
  definition: FormDefinition | None = None

  @field_validator("answers", mode="before")
  @classmethod
  def null_answers_as_empty(cls, value: Any) -> Any:
    return [] if value is None else value

  @property
  def fields(self) -> list[FormField]:
    return self.definition.fields if self.definition else []


class TypeformWebhook(BaseModel):
  """Envelope of a Typeform webhook delivery."""

  model_config = ConfigDict(extra="ignore")

  event_id: str | None = None
  event_type: str | None = None
  form_response: FormResponse | None = None
