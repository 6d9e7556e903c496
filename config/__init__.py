"""
Configuration Package
"""
from config.settings import settings
from config.constants import *
from config.logging_config import LoggingConfig, setup_logging

__all__ = [
    "settings",
    "LoggingConfig",
    "setup_logging"
]

# Version info
__version__ = "1.0.0"
