"""
AI server subpackage.

Client side of the windowed batch prediction service: wire schemas,
transport, request governance, session handling and the facade used by
the host loop.
"""

from .config_manager import ClientConfig, load_config, save_config
from .errors import AIServerError, ResponseParseError, TransportError
from .governor import RequestGovernor
from .interface import AIServerInterface
from .prediction_client import PredictionClient
from .schemas import BatchWindowedResponse, build_batch_payload, parse_batch_response
from .session_manager import SessionManager, new_session_id

__all__ = [
    "AIServerInterface",
    "AIServerError",
    "BatchWindowedResponse",
    "ClientConfig",
    "PredictionClient",
    "RequestGovernor",
    "ResponseParseError",
    "SessionManager",
    "TransportError",
    "build_batch_payload",
    "load_config",
    "new_session_id",
    "parse_batch_response",
    "save_config",
]
