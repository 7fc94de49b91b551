"""Submitted-data forms: validate raw field values and collect errors per field."""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError

from app.core.errors import FormValidationError
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN

FormT = TypeVar("FormT", bound=BaseModel)


class AccountForm(BaseModel):
    """Signup fields."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    plain_password: str = Field(
        ..., alias="plainPassword", min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )
    username: str | None = Field(default=None, min_length=1, max_length=255)
    subscription_name: str | None = Field(
        default=None, alias="subscriptionName", min_length=1, max_length=255
    )


class PasswordResetForm(BaseModel):
    """New password submitted together with a confirmation token."""

    model_config = ConfigDict(populate_by_name=True)

    plain_password: str = Field(
        ..., alias="plainPassword", min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )


def _errors_by_field(error: ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "form"
        errors.setdefault(field, []).append(item["msg"])
    return errors


def submit_form(form_cls: type[FormT], data: Mapping[str, Any] | None) -> FormT:
    """Validate data against form_cls; raise FormValidationError with a field -> messages map."""
    try:
        return form_cls.model_validate(dict(data or {}))
    except ValidationError as e:
        raise FormValidationError(_errors_by_field(e)) from e
