"""
Shared fixtures for the modvendor tests.
"""

import pytest

from modvendor.modvendor_config import ModvendorConfig
from modvendor.vendor_runner import VendorOrchestrator
from tests.modvendor.fakes import FakeProcessRunner


@pytest.fixture
def output_dir(tmp_path) -> str:
    return str(tmp_path / "vendor")


@pytest.fixture
def fake_runner() -> FakeProcessRunner:
    return FakeProcessRunner()


@pytest.fixture
def orchestrator(fake_runner) -> VendorOrchestrator:
    return VendorOrchestrator(config=ModvendorConfig(), process_runner=fake_runner)
