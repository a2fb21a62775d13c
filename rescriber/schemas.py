from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RedactionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., examples=["call me at 555-123-4567"])


class RedactionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    redacted_text: Optional[str] = Field(None, alias="redacted", examples=["call me at [PHONE]"])
