"""Generated models shared across APIs."""

from collections.abc import Sequence

from esmodels.runtime import STRING, ObjectModel, api_field, list_field, model_codec


class ErrorCause(ObjectModel):
    """Cause and details about a request failure."""

    type: str = api_field(STRING, required=True)
    reason: str | None = api_field(STRING)
    stack_trace: str | None = api_field(STRING)
    caused_by: "ErrorCause | None" = api_field(model_codec(lambda: ErrorCause))
    root_cause: "Sequence[ErrorCause]" = list_field(model_codec(lambda: ErrorCause))
    suppressed: "Sequence[ErrorCause]" = list_field(model_codec(lambda: ErrorCause))
