"""
Pytest configuration for the note workflow tests.

The three external collaborators (extraction service, text generator,
artifact writer) are replaced with the in-memory fakes from testing.utils,
so the flow runs end to end without network access or API keys.

Usage:
    pytest testing/
    pytest testing/test_note_flow.py -k disk_full
"""

import os
from collections.abc import Generator

import pytest

from core.config import ProcessingConfig
from core.logging import end_run, start_run
from testing.utils import FakeExtractor, FakeGenerator


@pytest.fixture(autouse=True)
def logging_run(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Rotate logs at test module boundaries.

    Each test module gets its own logging run, which triggers log rotation
    on first write to each module's log file.

    When running with pytest-xdist, each worker uses a separate log directory
    to prevent file corruption from concurrent writes.
    """
    worker_id = os.environ.get("PYTEST_XDIST_WORKER")
    if worker_id:
        os.environ["NOTES_LOG_DIR"] = f"logs/test-{worker_id}"

    # Use test module path as run identifier (e.g., "test-testing-test_flow_engine")
    test_path = request.node.nodeid.split("::")[0]
    test_name = test_path.replace("/", "-").replace(".py", "")
    start_run(f"test-{test_name}")
    yield
    end_run()


@pytest.fixture
def fake_extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def fast_processing() -> ProcessingConfig:
    """Three attempts with a tiny wait so retry paths stay quick."""
    return ProcessingConfig(max_retries=3, retry_wait=0.01, save_concurrency=5, http_timeout=5)


@pytest.fixture
def output_dir(tmp_path):
    """Create a temporary output directory for test results."""
    output = tmp_path / "notes"
    output.mkdir()
    return output


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests requiring external services",
    )
