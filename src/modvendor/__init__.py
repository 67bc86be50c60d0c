"""
This file exposes the main interface of modvendor.
"""

from .modvendor_config import ModvendorConfig
from .modvendor_exceptions import (
    ConfigurationError,
    InvalidSpecifierError,
    ModvendorException,
    ToolInvocationError,
    ToolTimeoutError,
)
from .modvendor_logger import ModvendorLogger
from .specifier_paths import module_specifier_to_path, sanitize_segment
from .vendor import vendor_urls, vendor_urls_sync
from .vendor_models import VendoredEntry, VendorReport, VendorRequest
from .vendor_runner import VendorOrchestrator, VendorState

__all__ = [
    "ConfigurationError",
    "InvalidSpecifierError",
    "ModvendorConfig",
    "ModvendorException",
    "ModvendorLogger",
    "ToolInvocationError",
    "ToolTimeoutError",
    "VendoredEntry",
    "VendorOrchestrator",
    "VendorReport",
    "VendorRequest",
    "VendorState",
    "module_specifier_to_path",
    "sanitize_segment",
    "vendor_urls",
    "vendor_urls_sync",
]
