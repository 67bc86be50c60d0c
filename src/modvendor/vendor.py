"""
Entry points for vendoring module specifiers into a local directory.
"""

import asyncio
from typing import Iterable, Optional

from modvendor.modvendor_config import ModvendorConfig
from modvendor.modvendor_logger import ModvendorLogger
from modvendor.vendor_models import VendorReport, VendorRequest
from modvendor.vendor_runner import FileSystem, ProcessRunner, VendorOrchestrator


async def vendor_urls(
    specifiers: Iterable[str],
    output_dir: Optional[str] = None,
    config: Optional[ModvendorConfig] = None,
    logger: Optional[ModvendorLogger] = None,
    process_runner: Optional[ProcessRunner] = None,
    filesystem: Optional[FileSystem] = None,
) -> VendorReport:
    """
    Vendor the given module specifiers.

    Args:
        specifiers: Module specifiers, vendored in order
        output_dir: Directory to put the vendored modules in. Defaults to
            ``./vendor/`` under the current working directory.
        config: Tool configuration
        logger: Logger for progress and error messages
        process_runner: Launches the vendoring tool
        filesystem: Filesystem access

    Returns:
        Report of vendored and skipped specifiers
    """
    if output_dir is None:
        request = VendorRequest(specifiers=list(specifiers))
    else:
        request = VendorRequest(specifiers=list(specifiers), output_dir=output_dir)

    orchestrator = VendorOrchestrator(
        config=config,
        logger=logger,
        process_runner=process_runner,
        filesystem=filesystem,
    )
    return await orchestrator.run(request)


def vendor_urls_sync(
    specifiers: Iterable[str],
    output_dir: Optional[str] = None,
    config: Optional[ModvendorConfig] = None,
    logger: Optional[ModvendorLogger] = None,
    process_runner: Optional[ProcessRunner] = None,
    filesystem: Optional[FileSystem] = None,
) -> VendorReport:
    """
    Blocking version of :func:`vendor_urls`. Must not be called from a running event loop.
    """
    return asyncio.run(
        vendor_urls(
            specifiers,
            output_dir=output_dir,
            config=config,
            logger=logger,
            process_runner=process_runner,
            filesystem=filesystem,
        )
    )
