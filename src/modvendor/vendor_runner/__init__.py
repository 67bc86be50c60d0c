"""
Vendor runner.

This package handles:
1. Checking which module specifiers are already vendored
2. Running the external vendoring tool for the rest
3. Reporting tool failures
4. Removing the stale import map after a completed run
"""

from .filesystem import FileSystem, LocalFileSystem
from .orchestrator import VendorOrchestrator, VendorState, next_state
from .process_runner import AsyncioProcessRunner, ProcessResult, ProcessRunner

__all__ = [
    "AsyncioProcessRunner",
    "FileSystem",
    "LocalFileSystem",
    "ProcessResult",
    "ProcessRunner",
    "VendorOrchestrator",
    "VendorState",
    "next_state",
]
