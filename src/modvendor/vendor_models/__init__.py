"""
Vendoring data models.

This package provides Pydantic data models for the input of a vendoring run
and the report it produces.
"""

from .vendor_request import (
    VendorRequest,
    VendoredEntry,
    VendorReport,
)

__all__ = [
    "VendorRequest",
    "VendoredEntry",
    "VendorReport",
]
