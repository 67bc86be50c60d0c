"""
Pydantic data models describing a vendoring run.

A VendorRequest is built once per run from caller input. VendoredEntry and
VendorReport are recomputed on every run; the output directory itself is the
only durable state.
"""

import os
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


def default_output_dir() -> str:
    return os.path.join(os.getcwd(), "vendor")


class VendorRequest(BaseModel):
    """
    An ordered list of module specifiers and the directory to vendor them into.
    """

    model_config = ConfigDict(frozen=True)

    specifiers: List[str] = Field(default_factory=list, description="Module specifiers, processed in order")
    output_dir: str = Field(default_factory=default_output_dir, description="Directory that receives vendored modules")

    @field_validator("output_dir")
    @classmethod
    def _absolute_output_dir(cls, value: str) -> str:
        return os.path.abspath(value)


class VendoredEntry(BaseModel):
    """
    A module specifier paired with its mapped path and whether it was found on disk.
    """

    model_config = ConfigDict(frozen=True)

    specifier: str
    relative_path: str
    target_path: str
    present: bool = False


class VendorReport(BaseModel):
    """
    Outcome of a completed vendoring run.
    """

    output_dir: str
    vendored: List[str] = Field(default_factory=list, description="Specifiers the tool was invoked for")
    skipped: List[str] = Field(default_factory=list, description="Specifiers already present on disk")
    import_map_removed: bool = False

    def summary(self) -> Dict[str, int]:
        """
        Get a summary of the run.

        Returns:
            Dictionary with counts of vendored, skipped and total specifiers
        """
        return {
            "vendored": len(self.vendored),
            "skipped": len(self.skipped),
            "total": len(self.vendored) + len(self.skipped),
        }
