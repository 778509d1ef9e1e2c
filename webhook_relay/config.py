"""Settings for the CRM Webhook Relay."""

import logging

import pydantic_settings

SettingsConfigDict = pydantic_settings.SettingsConfigDict
BaseSettings = pydantic_settings.BaseSettings

# Values without which the relay cannot talk to the CRM. Missing ones are
# reported at startup but do not stop the process.
REQUIRED_VARIABLES = (
    'GHL_API_KEY',
    'GHL_LOCATION_ID',
    'GHL_PIPELINE_SALES',
    'GHL_STAGE_NEW_BOOKING',
)


class Settings(BaseSettings):
  """Settings for the CRM Webhook Relay."""

  model_config = SettingsConfigDict(
      env_file='.env', env_file_encoding='utf-8', extra='ignore', frozen=True
  )
  APP_NAME: str = 'CRM Webhook Relay'
  PORT: int = 3000

  # CRM (LeadConnector / HighLevel)
  GHL_API_KEY: str | None = None
  GHL_BASE_URL: str = 'https://services.leadconnectorhq.com'
  GHL_API_VERSION: str = '2021-07-28'
  GHL_LOCATION_ID: str | None = None
  GHL_PIPELINE_SALES: str | None = None
  GHL_STAGE_NEW_BOOKING: str | None = None
  NEW_BOOKING_STAGE_LABEL: str = 'New Booking'

  # Custom field receiving the formatted survey answers.
  GHL_SURVEY_FIELD_ID: str = '23DDSocchLFEzrtFgAoB'

  # Typeform boolean rendering
  TYPEFORM_YES_LABEL: str = 'Oui'
  TYPEFORM_NO_LABEL: str = 'Non'

  def missing_variables(self) -> list[str]:
    """Returns the names of required variables that are unset or empty."""
    return [name for name in REQUIRED_VARIABLES if not getattr(self, name)]

  def log_summary(self) -> None:
    """Logs missing variables as warnings and the non-secret configuration."""
    for name in self.missing_variables():
      logging.warning('CONFIG: Missing variable: %s', name)
    logging.info(
        'CONFIG: base_url=%s location_id=%s pipeline_sales=%s'
        ' stage_new_booking=%s',
        self.GHL_BASE_URL,
        self.GHL_LOCATION_ID,
        self.GHL_PIPELINE_SALES,
        self.GHL_STAGE_NEW_BOOKING,
    )


settings = Settings()
