from .settings import Config, config, configure_logging

__all__ = ["Config", "config", "configure_logging"]
