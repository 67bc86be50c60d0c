"""
Vendor orchestrator implementation.

Drives the external vendoring tool over an ordered list of module specifiers,
using the output directory as an implicit cache.
"""

import asyncio
import logging
import os
import stat
from enum import Enum
from typing import List, Optional

from modvendor.modvendor_config import ModvendorConfig
from modvendor.modvendor_exceptions import ToolInvocationError, ToolTimeoutError
from modvendor.modvendor_logger import ModvendorLogger
from modvendor.specifier_paths import file_url_directory, module_specifier_to_path
from modvendor.vendor_models import VendoredEntry, VendorReport, VendorRequest
from modvendor.vendor_runner.filesystem import FileSystem, LocalFileSystem
from modvendor.vendor_runner.process_runner import (
    AsyncioProcessRunner,
    ProcessResult,
    ProcessRunner,
)


class VendorState(Enum):
    """States a single specifier moves through."""

    CHECK = "check"
    INVOKE = "invoke"
    SKIP = "skip"
    ABORT = "abort"
    DONE = "done"


TERMINAL_STATES = frozenset([VendorState.ABORT, VendorState.DONE])


def next_state(
    state: VendorState,
    present: Optional[bool] = None,
    returncode: Optional[int] = None,
) -> VendorState:
    """
    Transition function of the per-specifier state machine.

    CHECK -> SKIP | INVOKE, INVOKE -> DONE | ABORT, SKIP -> DONE.

    Args:
        state: Current state
        present: Result of the existence check, required when leaving CHECK
        returncode: Exit status of the tool, required when leaving INVOKE
    """
    if state is VendorState.CHECK:
        if present is None:
            raise ValueError("Leaving CHECK requires the existence check result")
        return VendorState.SKIP if present else VendorState.INVOKE

    if state is VendorState.INVOKE:
        if returncode is None:
            raise ValueError("Leaving INVOKE requires the tool exit status")
        return VendorState.DONE if returncode == 0 else VendorState.ABORT

    if state is VendorState.SKIP:
        return VendorState.DONE

    raise ValueError(f"No transition out of terminal state {state.name}")


class VendorOrchestrator:
    """
    Vendors module specifiers one at a time with the external tool.

    Specifiers whose mapped file already exists are skipped, so re-running the
    same request only fetches what is still missing. The first tool failure
    aborts the run.
    """

    def __init__(
        self,
        config: Optional[ModvendorConfig] = None,
        logger: Optional[ModvendorLogger] = None,
        process_runner: Optional[ProcessRunner] = None,
        filesystem: Optional[FileSystem] = None,
        base_url: Optional[str] = None,
    ):
        """
        Initialize the vendor orchestrator.

        Args:
            config: Tool name, import map name and timeout. Defaults apply when omitted.
            logger: Logger for progress and error messages
            process_runner: Launches the vendoring tool
            filesystem: Filesystem access for the cache check and cleanup
            base_url: Base that relative specifiers resolve against (cwd by default).
                The tool runs in the directory behind a ``file:`` base.
        """
        self.config = config or ModvendorConfig()
        self.logger = logger or ModvendorLogger()
        self.process_runner = process_runner or AsyncioProcessRunner()
        self.filesystem = filesystem or LocalFileSystem()
        self.base_url = base_url

    def build_command(self, specifier: str, output_dir: str) -> List[str]:
        return [
            self.config.tool,
            "vendor",
            specifier,
            "--output",
            output_dir,
            # The output directory already exists after the first specifier
            "--force",
            # Keeps the generated import map out of the project's own config
            "--no-config",
        ]

    async def check(self, specifier: str, output_dir: str) -> VendoredEntry:
        """
        Check whether a specifier has already been vendored.

        Raises:
            OSError: Any filesystem error other than the target being absent
        """
        relative_path = module_specifier_to_path(specifier, self.base_url)
        target_path = os.path.join(output_dir, relative_path)

        try:
            st = await self.filesystem.stat(target_path)
        except FileNotFoundError:
            present = False
        else:
            present = stat.S_ISREG(st.st_mode)
            if stat.S_ISDIR(st.st_mode):
                self.logger.log(
                    f"Expected a file for {specifier} but found a directory at {target_path}; "
                    f"it is treated as not vendored",
                    logging.WARNING,
                )

        return VendoredEntry(
            specifier=specifier,
            relative_path=relative_path,
            target_path=target_path,
            present=present,
        )

    async def invoke(self, entry: VendoredEntry, output_dir: str) -> ProcessResult:
        """
        Run the vendoring tool for one entry.

        Returns:
            The tool's result. A non-zero exit status is returned, not raised.

        Raises:
            ToolTimeoutError: If the configured timeout elapsed
        """
        await self.filesystem.ensure_dir(output_dir)

        cmd = self.build_command(entry.specifier, output_dir)
        self.logger.log(f"Vendoring {entry.specifier} into {entry.target_path}", logging.INFO)

        try:
            return await self.process_runner.run(
                cmd,
                timeout=self.config.tool_timeout,
                # The tool resolves relative specifiers against its own working directory
                cwd=file_url_directory(self.base_url),
            )
        except asyncio.TimeoutError as e:
            self.logger.log(
                f"Vendoring {entry.specifier} timed out after {self.config.tool_timeout}s",
                logging.ERROR,
            )
            raise ToolTimeoutError(entry.specifier, self.config.tool_timeout, "", cmd) from e

    async def vendor_specifier(self, specifier: str, output_dir: str) -> List[VendorState]:
        """
        Drive one specifier through the state machine.

        Returns:
            The states visited, ending with DONE

        Raises:
            ToolInvocationError: If the tool exited with a non-zero status
        """
        state = VendorState.CHECK
        visited = [state]
        entry: Optional[VendoredEntry] = None

        while state not in TERMINAL_STATES:
            if state is VendorState.CHECK:
                entry = await self.check(specifier, output_dir)
                state = next_state(state, present=entry.present)
            elif state is VendorState.SKIP:
                self.logger.log(f"{specifier} already vendored at {entry.target_path}", logging.DEBUG)
                state = next_state(state)
            elif state is VendorState.INVOKE:
                result = await self.invoke(entry, output_dir)
                state = next_state(state, returncode=result.returncode)
            visited.append(state)

        if state is VendorState.ABORT:
            error = ToolInvocationError(
                specifier=specifier,
                returncode=result.returncode,
                stderr=result.stderr,
                command=self.build_command(specifier, output_dir),
            )
            self.logger.log(
                f"Failed to vendor {specifier}: tool exited with status {result.returncode}",
                logging.ERROR,
            )
            raise error

        return visited

    async def cleanup(self, output_dir: str) -> bool:
        """
        Remove the import map the tool leaves at the output directory root.

        Every run with ``--force`` overwrites it, so it only ever describes the
        last specifier and is removed to avoid confusion.

        Returns:
            True if an import map was removed, False if there was none
        """
        import_map_path = os.path.join(output_dir, self.config.import_map_name)
        removed = await self.filesystem.remove_if_exists(import_map_path)
        if removed:
            self.logger.log(f"Removed stale import map {import_map_path}", logging.DEBUG)
        return removed

    async def run(self, request: VendorRequest) -> VendorReport:
        """
        Vendor every specifier of the request, in order.

        Cleanup only runs when every specifier completed.

        Raises:
            ToolInvocationError: On the first tool failure; later specifiers are not attempted
            OSError: On filesystem failures other than a missing file
        """
        report = VendorReport(output_dir=request.output_dir)

        for specifier in request.specifiers:
            visited = await self.vendor_specifier(specifier, request.output_dir)
            if VendorState.INVOKE in visited:
                report.vendored.append(specifier)
            else:
                report.skipped.append(specifier)

        report.import_map_removed = await self.cleanup(request.output_dir)

        summary = report.summary()
        self.logger.log(
            f"Vendor summary: {summary['vendored']} vendored, "
            f"{summary['skipped']} already present, into {request.output_dir}",
            logging.INFO,
        )
        return report
