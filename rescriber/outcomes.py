"""
Outcome of a single redaction round trip.

The client resolves every call into exactly one of these values; nothing
else crosses from the client to the coordinator.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class FailureKind(str, Enum):
    """Why a redaction round trip did not produce redacted text."""
    INVALID_INPUT = "invalid_input"
    NETWORK_TIMEOUT = "network_timeout"
    NETWORK_ERROR = "network_error"
    HTTP_ERROR = "http_error"
    EMPTY_BODY = "empty_body"
    PARSE_ERROR = "parse_error"
    INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True)
class Success:
    """The service returned usable redacted text."""
    redacted_text: str

    @property
    def ok(self) -> bool:
        return True

    @property
    def label(self) -> str:
        return "success"


@dataclass(frozen=True)
class Failure:
    """
    The round trip failed.

    Attributes:
        kind: Failure classification
        message: Short human-readable description (never contains the message text)
    """
    kind: FailureKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    @property
    def label(self) -> str:
        return self.kind.value


RequestOutcome = Union[Success, Failure]
