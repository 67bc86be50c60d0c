"""
Configuration parameters for modvendor.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from modvendor.modvendor_exceptions import ConfigurationError


VENDOR_TOML_NAME = "vendor.toml"

VENDOR_TOML_SCHEMA = """
# Vendoring configuration for modvendor

[vendor]
# Executable of the vendoring tool, invoked as `<tool> vendor <specifier> ...`
tool = "deno"

# Directory that receives the vendored modules, relative to the workspace root
output_dir = "vendor"

# Name of the import map the tool writes at the output directory root
import_map_name = "import_map.json"

# Seconds before a hung tool is killed (optional, no timeout by default)
# tool_timeout = 300

# Specifiers vendored by the `vendor_configured` MCP tool (optional)
specifiers = ["https://deno.land/std@0.150.0/path/mod.ts"]
"""


@dataclass
class ModvendorConfig:
    """
    Configuration parameters
    """

    tool: str = "deno"
    output_dir: str = "vendor"
    import_map_name: str = "import_map.json"
    tool_timeout: Optional[float] = None
    specifiers: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "ModvendorConfig":
        """
        Create a ModvendorConfig from a dictionary (the ``[vendor]`` table of vendor.toml).

        Raises:
            ConfigurationError: If a value has the wrong type
        """
        unknown = set(env) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown vendor configuration keys: {sorted(unknown)}")

        for key in ("tool", "output_dir", "import_map_name"):
            if key in env and (not isinstance(env[key], str) or not env[key]):
                raise ConfigurationError(f"'{key}' must be a non-empty string")

        timeout = env.get("tool_timeout")
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise ConfigurationError("'tool_timeout' must be a positive number of seconds")
            timeout = float(timeout)

        specifiers = env.get("specifiers", [])
        if not isinstance(specifiers, list) or not all(isinstance(s, str) for s in specifiers):
            raise ConfigurationError("'specifiers' must be a list of strings")

        return cls(
            tool=env.get("tool", cls.tool),
            output_dir=env.get("output_dir", cls.output_dir),
            import_map_name=env.get("import_map_name", cls.import_map_name),
            tool_timeout=timeout,
            specifiers=list(specifiers),
        )

    @classmethod
    def load_defaults(cls, workspace_root: Optional[str] = None) -> "ModvendorConfig":
        """Default configuration with ``output_dir`` resolved against the workspace root."""
        config = cls()
        config.output_dir = os.path.join(workspace_root or os.getcwd(), config.output_dir)
        return config

    @classmethod
    def load(cls, workspace_root: Optional[str] = None) -> "ModvendorConfig":
        """
        Load the configuration from ``vendor.toml`` in the workspace root.

        Returns the defaults when the file does not exist. A relative
        ``output_dir`` is resolved against the workspace root.
        """
        workspace_root = workspace_root or os.getcwd()
        toml_path = os.path.join(workspace_root, VENDOR_TOML_NAME)

        if not os.path.exists(toml_path):
            return cls.load_defaults(workspace_root)

        with open(toml_path, "rb") as f:
            try:
                toml_dict = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigurationError(f"Invalid {VENDOR_TOML_NAME} at {toml_path}: {e}") from e
        vendor_section = toml_dict.get("vendor", {})
        if not isinstance(vendor_section, dict):
            raise ConfigurationError("[vendor] must be a table")
        config = cls.from_dict(vendor_section)

        config.output_dir = os.path.join(workspace_root, config.output_dir)
        return config
