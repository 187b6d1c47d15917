"""Pydantic models and result types for Secret listing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from secret_lister.utils.errors import ListOperationError, enhance_list_error


@dataclass(frozen=True)
class SecretListing:
    """A successful list call: Secret names in API response order."""

    namespace: str
    names: list[str]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ListFailure:
    """A failed list call."""

    namespace: str
    error: ListOperationError

    @property
    def ok(self) -> bool:
        return False


ListSecretsResult = SecretListing | ListFailure


class ErrorDetail(BaseModel):
    """Error description returned alongside a null SecretsList."""

    error: str
    error_code: str
    suggestion: str


class ListSecretsResponse(BaseModel):
    """Wire shape of the listing response.

    Only Secret names ever appear here, never data or other object fields.
    """

    model_config = ConfigDict(populate_by_name=True)

    secrets_list: list[str] | None = Field(default=None, alias="SecretsList")
    error: ErrorDetail | None = None

    @classmethod
    def from_result(cls, result: ListSecretsResult, masked: bool = False) -> ListSecretsResponse:
        """Build the response for a listing result.

        With ``masked`` set a failure carries no error detail, which is what
        callers of the legacy contract expect.
        """
        if isinstance(result, SecretListing):
            return cls(secrets_list=list(result.names))
        if masked:
            return cls()
        return cls(error=ErrorDetail(**enhance_list_error(result.error).to_dict()))

    def to_payload(self) -> dict[str, Any]:
        """Serialize with wire field names, dropping ``error`` when unset."""
        payload: dict[str, Any] = {"SecretsList": self.secrets_list}
        if self.error is not None:
            payload["error"] = self.error.model_dump()
        return payload
