from .logfire_config import get_logger, safe_span, setup_logfire
from .settings import ClientConfig

__all__ = ["ClientConfig", "get_logger", "safe_span", "setup_logfire"]
