"""Api Payload — the JSON object written by every JSON endpoint.

Invariants:
    - Only non-empty fields are serialized (no null, no "")
    - Output is compact JSON (no whitespace between tokens)
    - Serialization failures surface as PayloadEncodingError, never raw pydantic errors

Design Decisions:
    - Empty-string defaults + exclude_defaults: "unset" and "empty" collapse
      into one omitted state
"""

from pydantic import BaseModel, ConfigDict
from pydantic_core import PydanticSerializationError

from probe_api.core.errors import PayloadEncodingError


class ApiPayload(BaseModel):
    """Status/greeting/probe payload."""
    model_config = ConfigDict(frozen=True)

    status: str = ""
    message: str = ""
    feature: str = ""
    version: str = ""
    time: str = ""

    def to_json(self) -> str:
        try:
            return self.model_dump_json(exclude_defaults=True)
        except (PydanticSerializationError, ValueError, TypeError) as exc:
            raise PayloadEncodingError(str(exc)) from exc
