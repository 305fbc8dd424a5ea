from .exceptions import TransportError, ApiCallError, TransportConfigError
from .lyzr_client import LyzrAgentClient

__all__ = ["TransportError", "ApiCallError", "TransportConfigError", "LyzrAgentClient"]
