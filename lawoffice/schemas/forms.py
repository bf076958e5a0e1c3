from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from lawoffice.core.messages import msg

F = TypeVar("F", bound="FormSchema")


def normalize_form(form: Mapping[str, Any]) -> Dict[str, Any]:
    """HTML field names use hyphens (``first-name``); schemas use underscores.

    Strings are stripped and blanks become None so ``required`` means non-empty.
    """
    out: Dict[str, Any] = {}
    for key, value in form.items():
        if isinstance(value, str):
            value = value.strip()
            if value == "":
                value = None
        out[key.replace("-", "_")] = value
    return out


class FormSchema(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    # field name -> message key used when the field is missing/blank
    required_messages: ClassVar[Dict[str, str]] = {}

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return normalize_form(data)
        return data

    @classmethod
    def parse(cls: Type[F], form: Mapping[str, Any]) -> Tuple[Optional[F], Dict[str, List[str]]]:
        try:
            return cls.model_validate(form), {}
        except ValidationError as exc:
            return None, cls.field_errors(exc)

    @classmethod
    def field_errors(cls, exc: ValidationError) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else "_form"
            if err["type"] == "missing" or err.get("input") is None:
                text = msg(cls.required_messages.get(field, "field.required"))
            else:
                text = msg("field.invalid")
            errors.setdefault(field, [])
            if text not in errors[field]:
                errors[field].append(text)
        return errors


def first_error(errors: Dict[str, List[str]]) -> str:
    for messages in errors.values():
        if messages:
            return messages[0]
    return msg("error.validation")


def changed_fields(model: BaseModel) -> Dict[str, Any]:
    """Only the fields the form actually carried (for partial updates)."""
    return model.model_dump(exclude_unset=True)
