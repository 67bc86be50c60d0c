"""
MCP (Model Context Protocol) runner for modvendor.

This module exposes vendoring through the Model Context Protocol using the
fastmcp framework. It reads a `vendor.toml` file in the workspace root to
determine which tool to run and where to put vendored modules.

Workflow:
- If vendor.toml exists at startup, it is loaded immediately
- If it is missing, the defaults are used and every tool re-checks for the
  file at call time, so a config written later is still picked up
"""

import json
import logging
import os
from typing import List, Optional

from fastmcp import FastMCP

from modvendor.modvendor_config import VENDOR_TOML_NAME, VENDOR_TOML_SCHEMA, ModvendorConfig
from modvendor.modvendor_exceptions import ModvendorException
from modvendor.modvendor_logger import ModvendorLogger
from modvendor.specifier_paths import directory_file_url, module_specifier_to_path
from modvendor.vendor_models import VendorRequest
from modvendor.vendor_runner import FileSystem, ProcessRunner, VendorOrchestrator


class VendorMCPRunner:
    """
    MCP runner that exposes vendoring as MCP tools using fastmcp.

    Example usage:
    ```python
    runner = VendorMCPRunner("/path/to/workspace")
    server = runner.create_mcp_server()
    server.run()
    ```
    """

    def __init__(
        self,
        workspace_root: Optional[str] = None,
        process_runner: Optional[ProcessRunner] = None,
        filesystem: Optional[FileSystem] = None,
    ):
        """
        Initialize the MCP runner.

        Args:
            workspace_root: Root directory of the workspace. If None, uses current directory.
            process_runner: Launches the vendoring tool
            filesystem: Filesystem access
        """
        self.workspace_root = workspace_root or os.getcwd()
        self.logger = ModvendorLogger()
        self.process_runner = process_runner
        self.filesystem = filesystem
        self.config: ModvendorConfig = ModvendorConfig.load_defaults(self.workspace_root)
        self._config_from_file = False

        # Try to load configuration at initialization if it exists
        self._try_load_config()

    def _config_file_exists(self) -> bool:
        return os.path.exists(os.path.join(self.workspace_root, VENDOR_TOML_NAME))

    def _try_load_config(self) -> None:
        """
        Attempt to load vendor.toml, but don't fail if it is missing or invalid.

        An invalid file is reported again when a tool is called.
        """
        try:
            self._ensure_configured()
        except ModvendorException as e:
            self.logger.log(
                f"Failed to load {VENDOR_TOML_NAME} from {self.workspace_root}: {str(e)}", logging.ERROR
            )

    def _ensure_configured(self) -> None:
        """
        Load vendor.toml if it appeared after startup.

        Raises:
            ModvendorException: If the file exists but is invalid
        """
        if self._config_from_file or not self._config_file_exists():
            return

        self.config = ModvendorConfig.load(self.workspace_root)
        self._config_from_file = True
        self.logger.log(
            f"Loaded vendor configuration from {os.path.join(self.workspace_root, VENDOR_TOML_NAME)}",
            logging.INFO,
        )

    def _orchestrator(self) -> VendorOrchestrator:
        return VendorOrchestrator(
            config=self.config,
            logger=self.logger,
            process_runner=self.process_runner,
            filesystem=self.filesystem,
            base_url=self._workspace_url(),
        )

    def _workspace_url(self) -> str:
        return directory_file_url(self.workspace_root)

    def _resolve_output_dir(self, output_dir: Optional[str]) -> str:
        if output_dir is None:
            return self.config.output_dir
        return os.path.join(self.workspace_root, output_dir)

    async def vendor(self, specifiers: List[str], output_dir: Optional[str] = None) -> str:
        """
        Vendor the specifiers and return a JSON status document.
        """
        try:
            self._ensure_configured()
            request = VendorRequest(
                specifiers=specifiers,
                output_dir=self._resolve_output_dir(output_dir),
            )
            report = await self._orchestrator().run(request)
        except (ModvendorException, OSError, ValueError) as e:
            self.logger.log(f"Vendoring failed: {str(e)}", logging.ERROR)
            return json.dumps({"status": "error", "message": str(e)})

        return json.dumps({"status": "success", "report": report.model_dump(), "summary": report.summary()})

    async def vendor_configured(self) -> str:
        """
        Vendor the specifiers listed in vendor.toml.
        """
        try:
            self._ensure_configured()
        except ModvendorException as e:
            return json.dumps({"status": "error", "message": str(e)})

        if not self.config.specifiers:
            return json.dumps({"status": "error", "message": self.get_configuration_error_message()})
        return await self.vendor(self.config.specifiers)

    def map_specifier(self, specifier: str) -> str:
        """
        Return the relative path a specifier is vendored to as a JSON document.
        """
        try:
            path = module_specifier_to_path(specifier, self._workspace_url())
        except ModvendorException as e:
            return json.dumps({"status": "error", "message": str(e)})
        return json.dumps({"status": "success", "specifier": specifier, "path": path})

    def get_configuration_error_message(self) -> str:
        """
        Get an informative error message for when no specifiers are configured.
        """
        return (
            "No module specifiers are configured.\n\n"
            f"Please create a '{VENDOR_TOML_NAME}' file in your workspace root with the following schema:\n\n"
            f"{VENDOR_TOML_SCHEMA}"
        )

    def create_mcp_server(self) -> FastMCP:
        """
        Create and configure a fastmcp server instance with the vendoring tools.
        """
        server = FastMCP("modvendor-mcp")
        self._register_tools(server)
        return server

    def _register_tools(self, server: FastMCP) -> None:
        # Tool: vendor_specifiers
        @server.tool()
        async def vendor_specifiers(specifiers: List[str], output_dir: Optional[str] = None) -> str:
            """Vendor remote module specifiers into a local directory for offline builds.

            Args:
                specifiers: Module specifiers (URLs), vendored in order
                output_dir: Output directory relative to the workspace root (optional)
            """
            return await self.vendor(specifiers, output_dir)

        # Tool: vendor_configured
        @server.tool()
        async def vendor_configured() -> str:
            """Vendor the module specifiers listed in vendor.toml."""
            return await self.vendor_configured()

        # Tool: map_specifier
        @server.tool()
        async def map_specifier(specifier: str) -> str:
            """Get the relative path a module specifier is vendored to.

            Args:
                specifier: Module specifier (URL)
            """
            return self.map_specifier(specifier)


__all__ = [
    "VendorMCPRunner",
]
