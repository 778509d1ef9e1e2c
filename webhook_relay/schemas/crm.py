"""Pydantic schemas for CRM (LeadConnector) records."""

import pydantic

Field = pydantic.Field
BaseModel = pydantic.BaseModel
ConfigDict = pydantic.ConfigDict


class Contact(BaseModel):
  """A CRM contact. Only looked up, never created, by the relay."""

  model_config = ConfigDict(extra="ignore", populate_by_name=True)

  id: str
  first_name: str | None = Field(None, alias="firstName")
  last_name: str | None = Field(None, alias="lastName")

  @property
  def display_name(self) -> str:
    return f"{self.first_name or ''} {self.last_name or ''}"


class Opportunity(BaseModel):
  """A sales-pipeline record attached to a contact."""

  model_config = ConfigDict(extra="ignore", populate_by_name=True)

  id: str
  pipeline_id: str | None = Field(None, alias="pipelineId")
  pipeline_stage_id: str | None = Field(None, alias="pipelineStageId")
