"""Response bodies returned to webhook senders."""

import pydantic

Field = pydantic.Field
BaseModel = pydantic.BaseModel
ConfigDict = pydantic.ConfigDict


class WebhookResponse(BaseModel):
  """JSON body of a webhook reply. Unset keys are left out of the body."""

  model_config = ConfigDict(populate_by_name=True)

  status: str
  contact_id: str | None = Field(None, alias="contactId")
  opportunity_id: str | None = Field(None, alias="opportunityId")
  email: str | None = None
  new_stage: str | None = Field(None, alias="newStage")
  message: str | None = None

  def to_body(self) -> dict[str, str]:
    return self.model_dump(by_alias=True, exclude_none=True)


class WebhookResult(BaseModel):
  """Outcome of a webhook handler: HTTP status code plus body."""

  status_code: int = 200
  response: WebhookResponse

  @property
  def status(self) -> str:
    return self.response.status


class HealthResponse(BaseModel):
  """Body of the health check."""

  status: str = "ok"
  uptime: float
  timestamp: str
