# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Popyx."""
import logging

logger: logging.Logger = logging.getLogger("popyx")
