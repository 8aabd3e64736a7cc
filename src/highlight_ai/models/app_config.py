"""Configuration model for highlight-ai."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_BASE_URL = "http://localhost:1234/v1"
DEFAULT_MODEL_NAME = "qwen/qwen3-4b-2507"

_DEFAULTS = {
    "base_url": DEFAULT_BASE_URL,
    "model_name": DEFAULT_MODEL_NAME,
}


class AppConfig(BaseModel):
    """Inference endpoint configuration.

    Persisted by alias, so the on-disk record reads
    ``{"baseURL": ..., "modelName": ...}``. Missing, blank or non-string
    values are replaced by the built-in defaults.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base_url: str = Field(default=DEFAULT_BASE_URL, alias="baseURL")
    model_name: str = Field(default=DEFAULT_MODEL_NAME, alias="modelName")

    @field_validator("base_url", "model_name", mode="before")
    @classmethod
    def _default_when_blank(cls, value: Any, info: ValidationInfo) -> Any:
        if not isinstance(value, str) or not value.strip():
            return _DEFAULTS[info.field_name]
        return value

    def to_record(self) -> dict[str, str]:
        """Return the persisted key/value record."""
        return self.model_dump(by_alias=True)
