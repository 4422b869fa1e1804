from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

# --- Enums ---
class ErrorKind(str, Enum):
    CLIENT_INPUT = "CLIENT_INPUT"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    SERVER_CONFIGURATION = "SERVER_CONFIGURATION"
    UPSTREAM_TRANSPORT = "UPSTREAM_TRANSPORT"
    UPSTREAM_SEMANTIC = "UPSTREAM_SEMANTIC"
    INTERNAL = "INTERNAL"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

_STATUS_CODES = {
    ErrorKind.CLIENT_INPUT: 400,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.SERVER_CONFIGURATION: 500,
    ErrorKind.UPSTREAM_TRANSPORT: 502,
    ErrorKind.UPSTREAM_SEMANTIC: 502,
    ErrorKind.INTERNAL: 500,
}


# --- Results ---
@dataclass(frozen=True)
class ProxyResult:
    """One HTTP response: status plus JSON body (None means an empty body)."""
    status_code: int
    body: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ProxyError:
    """Tagged failure returned by a pipeline step instead of raising."""
    kind: ErrorKind
    error: str
    details: Any = None
    message: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        if self.message is not None:
            body["message"] = self.message
        return body

    def to_result(self) -> ProxyResult:
        return ProxyResult(status_code=self.kind.status_code, body=self.to_body())
