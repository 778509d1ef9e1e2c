"""Helper functions for working with Typeform answers."""

import json
from typing import Any, Iterable, Sequence

from webhook_relay.schemas import typeform as typeform_lib

FormAnswer = typeform_lib.FormAnswer
FormField = typeform_lib.FormField

DEFAULT_YES_LABEL = "Oui"
DEFAULT_NO_LABEL = "Non"


def extract_email(answers: Iterable[FormAnswer]) -> str | None:
  """Returns the value of the first answer of type "email".

  Args:
    answers: The answers of a submission, in order.

  Returns:
    The email address, or None when no email answer exists.
  """
  for answer in answers:
    if answer.type == "email":
      return answer.email
  return None


def render_answer_value(
    answer: FormAnswer,
    yes_label: str = DEFAULT_YES_LABEL,
    no_label: str = DEFAULT_NO_LABEL,
) -> Any:
  """Renders one answer value according to its type.

  Args:
    answer: The answer to render.
    yes_label: Text used for a true boolean answer.
    no_label: Text used for a false boolean answer.

  Returns:
    The value to show after the question title.
  """
  if answer.type == "choice":
    return answer.choice.label
  if answer.type in ("text", "email", "phone_number", "number"):
    return answer.raw_value()
  if answer.type == "boolean":
    return yes_label if answer.boolean else no_label
  value = answer.raw_value()
  return json.dumps(
      "" if value is None else value, ensure_ascii=False, separators=(",", ":")
  )


def format_typeform_answers(
    answers: Sequence[FormAnswer],
    fields: Sequence[FormField],
    yes_label: str = DEFAULT_YES_LABEL,
    no_label: str = DEFAULT_NO_LABEL,
) -> str:
  """Formats answers as newline-separated "Title: value" lines.

  Args:
    answers: The answers of a submission, in order.
    fields: The form definition fields, used to resolve question titles.
    yes_label: Text used for a true boolean answer.
    no_label: Text used for a false boolean answer.

  Returns:
    The formatted text block. Questions without a title in the definition
    are shown under their field id.
  """
  titles = {field.id: field.title for field in fields}
  lines = []
  for answer in answers:
    title = titles.get(answer.field.id) or answer.field.id
    value = render_answer_value(answer, yes_label, no_label)
    lines.append(f"{title}: {'' if value is None else value}")
  return "\n".join(lines)
