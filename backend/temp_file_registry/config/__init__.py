from .logging_config import configure_logging
from .settings import RegistryConfig

__all__ = ["RegistryConfig", "configure_logging"]
