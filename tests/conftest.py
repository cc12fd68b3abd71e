"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Whole-pipeline tests
    pytest -m live          # Tests against a running Dgraph (needs --run-live)

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import json
import os
import sys

import pytest

# Patch tenacity's sleep before any client module is imported
import tenacity.nap
tenacity.nap.sleep = lambda seconds: None

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

from fixtures import (
    INHERITANCE_XMI,
    ENUM_XMI,
    CIM_WIRES_XMI,
    CIM_INSTANCE_RDF,
    SAMPLE_CONFIG,
    MINIMAL_CONFIG,
)


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Run live tests against a Dgraph instance (CIMGRAPH_LIVE_URL)"
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Integration tests across the whole pipeline")
    config.addinivalue_line("markers", "live: Tests against a running Dgraph instance")


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless explicitly enabled."""
    if config.getoption("--run-live"):
        return

    skip_live = pytest.mark.skip(reason="Live tests disabled. Use --run-live to enable")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture(autouse=True)
def _no_dgraph_url_env(monkeypatch):
    """Keep a developer's CIMGRAPH_DGRAPH_URL out of unit tests."""
    monkeypatch.delenv("CIMGRAPH_DGRAPH_URL", raising=False)


# =============================================================================
# XMI Fixtures
# =============================================================================

@pytest.fixture
def inheritance_xmi():
    """Root class A (p1: String, p2: Integer) and B extending A with p3: Boolean."""
    return INHERITANCE_XMI


@pytest.fixture
def enum_xmi():
    """Enumeration Color referenced by a property of Lamp."""
    return ENUM_XMI


@pytest.fixture
def cim_wires_xmi():
    """A slice of the CIM wires model with abstract bases and an enum."""
    return CIM_WIRES_XMI


def _write_xmi(tmp_path, name: str, content: str) -> str:
    path = tmp_path / name
    path.write_bytes(content.encode("cp1252"))
    return str(path)


@pytest.fixture
def inheritance_xmi_file(tmp_path, inheritance_xmi):
    """INHERITANCE_XMI written to disk."""
    return _write_xmi(tmp_path, "inheritance.xmi", inheritance_xmi)


@pytest.fixture
def cim_wires_xmi_file(tmp_path, cim_wires_xmi):
    """CIM_WIRES_XMI written to disk."""
    return _write_xmi(tmp_path, "wires.xmi", cim_wires_xmi)


@pytest.fixture
def cim_instance_rdf_file(tmp_path):
    """RDF/XML instance data written to disk."""
    path = tmp_path / "instances.rdf"
    path.write_text(CIM_INSTANCE_RDF, encoding="utf-8")
    return str(path)


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return json.loads(json.dumps(SAMPLE_CONFIG))


@pytest.fixture
def minimal_config():
    """Minimal configuration dictionary."""
    return json.loads(json.dumps(MINIMAL_CONFIG))


@pytest.fixture
def temp_config_file(tmp_path, sample_config):
    """Create a temporary configuration file for testing."""
    sample_config["output"]["directory"] = str(tmp_path / "out")
    sample_config["logging"]["file"] = None
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(sample_config, indent=2))
    return str(config_file)
