"""
Queue message model for the IronMQ client.

A message is a value: a body plus optional delivery options. It validates
itself on construction and renders the minimal wire shape sent in a push
request. Server-side defaults (60 second timeout, 7 day expiry) apply to any
option left unset and are never filled in here.
"""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError

MAX_EXPIRES_IN = 2592000  # 30 days


class Message(BaseModel):
    """One queue item and its delivery options."""

    body: str = Field(..., min_length=1, description="Message data")
    timeout: Optional[int] = Field(
        None,
        ge=0,
        description="Seconds before a reserved message goes back on the queue",
    )
    delay: Optional[int] = Field(
        None, ge=0, description="Seconds before the message becomes available"
    )
    expires_in: Optional[int] = Field(
        None,
        gt=0,
        le=MAX_EXPIRES_IN,
        description="Seconds to keep the message on the queue",
    )

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e

    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> "Message":
        try:
            return super().model_validate(obj, **kwargs)
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e

    @classmethod
    def create(
        cls, body_or_fields: Union["Message", str, Mapping[str, Any]]
    ) -> "Message":
        """
        Create a message from a body string or a mapping of fields.

        Args:
            body_or_fields: The message body, or a mapping with ``body`` and
                optional ``timeout``, ``delay`` and ``expires_in``

        Returns:
            A validated message

        Raises:
            ValidationError: if the body is missing or empty, or an option is
                out of range
        """
        if isinstance(body_or_fields, Message):
            return body_or_fields
        if isinstance(body_or_fields, str):
            fields: Mapping[str, Any] = {"body": body_or_fields}
        elif isinstance(body_or_fields, Mapping):
            fields = body_or_fields
        else:
            raise ValidationError(
                "Message must be a string or a mapping of fields",
                error_context={"type": type(body_or_fields).__name__},
            )

        return cls.model_validate({str(key): value for key, value in fields.items()})

    def to_wire(self) -> Dict[str, Any]:
        """Return the wire shape: ``body`` plus every option explicitly set."""
        return self.model_dump(exclude_none=True)


def _to_validation_error(error: PydanticValidationError) -> ValidationError:
    errors = [
        f"{'.'.join(str(part) for part in err['loc']) or 'message'}: {err['msg']}"
        for err in error.errors()
    ]
    return ValidationError(
        _summarize(error), error_context={"validation_errors": errors}
    )


def _summarize(error: PydanticValidationError) -> str:
    fields = {str(err["loc"][0]) for err in error.errors() if err["loc"]}
    if "body" in fields:
        return "Please specify a body"
    if "expires_in" in fields:
        return f"expires_in must be between 1 and {MAX_EXPIRES_IN} seconds"
    return f"Invalid message: {', '.join(sorted(fields)) or 'unknown field'}"
