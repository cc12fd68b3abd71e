"""
Dgraph client tests.

This module contains all Dgraph client-related tests:
- Configuration loading and URL precedence
- Response handling and error mapping
- Retry behavior for transient failures
- Schema apply phases

Run specific test categories:
    pytest tests/core/test_dgraph_client.py
    pytest -k "Apply" tests/core/test_dgraph_client.py
"""

import json
import os
from typing import Any, Dict
from unittest.mock import Mock, patch

import pytest
import requests

from core.platform.dgraph_client import (
    DgraphAPIError,
    DgraphClient,
    DgraphConfig,
    SchemaApplyError,
    TransientAPIError,
    _is_transient_error,
)


# =============================================================================
# Constants
# =============================================================================

DGRAPH_URL = "http://dgraph.example:8080"
HEALTHY = [{"instance": "alpha", "address": "localhost:7080", "status": "healthy"}]
ALTER_OK = {"data": {"code": "Success", "message": "Done"}}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def dgraph_config():
    """Create a DgraphConfig that retries without waiting."""
    return DgraphConfig(url=DGRAPH_URL, timeout=5, max_retries=3, retry_backoff=0)


@pytest.fixture
def dgraph_client(dgraph_config):
    """Create a DgraphClient for testing."""
    return DgraphClient(dgraph_config)


# =============================================================================
# Helper Functions
# =============================================================================

def create_mock_response(
    status_code: int,
    json_data: Any = None,
    text: str = ""
) -> Mock:
    """Create a mock requests.Response object."""
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.reason = "Reason"
    if json_data is not None:
        mock_response.text = text or json.dumps(json_data)
        mock_response.json.return_value = json_data
    else:
        mock_response.text = text
        mock_response.json.side_effect = json.JSONDecodeError("No JSON", "", 0)
    return mock_response


def create_error_response(message: str, code: str = "ErrorInvalidRequest") -> Dict[str, Any]:
    """Create an error payload as returned by the alter endpoint."""
    return {"errors": [{"message": message, "extensions": {"code": code}}]}


# =============================================================================
# CONFIGURATION TESTS
# =============================================================================

@pytest.mark.unit
class TestDgraphConfig:
    """Tests for DgraphConfig."""

    def test_defaults(self):
        """An empty configuration uses the local default URL."""
        config = DgraphConfig.from_dict({})

        assert config.url == "http://localhost:8080"
        assert config.max_retries == 3

    def test_from_dict(self, sample_config):
        """Settings are read from the dgraph section."""
        config = DgraphConfig.from_dict(sample_config)

        assert config.url == "http://dgraph.example:8080"
        assert config.timeout == 10
        assert config.retry_backoff == 0

    def test_env_overrides_config(self, sample_config, monkeypatch):
        """CIMGRAPH_DGRAPH_URL wins over the config file."""
        monkeypatch.setenv("CIMGRAPH_DGRAPH_URL", "http://env-host:8080")
        assert DgraphConfig.from_dict(sample_config).url == "http://env-host:8080"

    def test_override_wins_over_env(self, sample_config, monkeypatch):
        """An explicit override wins over the environment."""
        monkeypatch.setenv("CIMGRAPH_DGRAPH_URL", "http://env-host:8080")
        config = DgraphConfig.from_dict(sample_config, url_override="http://cli-host:9080")
        assert config.url == "http://cli-host:9080"

    def test_invalid_url(self):
        """Non-HTTP URLs are rejected."""
        with pytest.raises(ValueError, match="Invalid Dgraph URL"):
            DgraphConfig.from_dict({"dgraph": {"url": "ftp://localhost:8080"}})

    def test_invalid_numbers(self):
        """Non-numeric settings raise ValueError."""
        with pytest.raises(ValueError, match="Invalid 'dgraph' configuration"):
            DgraphConfig.from_dict({"dgraph": {"timeout": "soon"}})

    def test_section_must_be_object(self):
        """A non-object dgraph section is rejected."""
        with pytest.raises(ValueError):
            DgraphConfig.from_dict({"dgraph": "http://localhost:8080"})

    @pytest.mark.parametrize("field_name,value", [
        ("timeout", 0),
        ("max_retries", 0),
        ("retry_backoff", -1),
    ])
    def test_validate_ranges(self, field_name, value):
        """Out-of-range settings are rejected."""
        config = DgraphConfig(url=DGRAPH_URL)
        setattr(config, field_name, value)
        with pytest.raises(ValueError):
            config.validate()

    def test_client_requires_config(self):
        """The client refuses a missing or wrong config."""
        with pytest.raises(ValueError):
            DgraphClient(None)
        with pytest.raises(TypeError):
            DgraphClient({"url": DGRAPH_URL})

    def test_trailing_slash_stripped(self):
        """The base URL is normalized."""
        client = DgraphClient(DgraphConfig(url=DGRAPH_URL + "/"))
        assert client.base_url == DGRAPH_URL


# =============================================================================
# REQUEST AND RESPONSE HANDLING
# =============================================================================

@pytest.mark.unit
class TestHealthCheck:
    """Tests for check_health."""

    def test_healthy_list(self, dgraph_client):
        """A list with a healthy entry passes."""
        with patch('requests.request', return_value=create_mock_response(200, HEALTHY)) as mock_request:
            entries = dgraph_client.check_health()

        assert entries == HEALTHY
        args, kwargs = mock_request.call_args
        assert args == ('GET', f"{DGRAPH_URL}/health")
        assert kwargs["timeout"] == 5

    def test_healthy_object(self, dgraph_client):
        """Older alphas answer with a single object."""
        with patch('requests.request', return_value=create_mock_response(200, {"status": "healthy"})):
            entries = dgraph_client.check_health()

        assert entries == [{"status": "healthy"}]

    def test_unhealthy(self, dgraph_client):
        """No healthy entry raises DgraphAPIError."""
        payload = [{"instance": "alpha", "status": "unhealthy"}]
        with patch('requests.request', return_value=create_mock_response(200, payload)):
            with pytest.raises(DgraphAPIError) as exc_info:
                dgraph_client.check_health()

        assert exc_info.value.error_code == "Unhealthy"


@pytest.mark.unit
class TestResponseHandling:
    """Tests for error mapping."""

    def test_errors_payload_raises(self, dgraph_client):
        """An errors list raises even with HTTP 200."""
        response = create_mock_response(200, create_error_response("line 1: Invalid type"))
        with patch('requests.request', return_value=response):
            with pytest.raises(DgraphAPIError) as exc_info:
                dgraph_client.alter_schema("<a>: nope .\n")

        assert exc_info.value.error_code == "ErrorInvalidRequest"
        assert "Invalid type" in exc_info.value.message

    def test_client_error_not_retried(self, dgraph_client):
        """4xx responses fail immediately."""
        response = create_mock_response(400, text="bad request")
        with patch('requests.request', return_value=response) as mock_request:
            with pytest.raises(DgraphAPIError) as exc_info:
                dgraph_client.drop_all()

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "HTTPError"
        assert mock_request.call_count == 1

    def test_invalid_json_on_success(self, dgraph_client):
        """A 200 with unparseable content is an error."""
        response = create_mock_response(200, text="<html>")
        with patch('requests.request', return_value=response):
            with pytest.raises(DgraphAPIError) as exc_info:
                dgraph_client.drop_all()

        assert exc_info.value.error_code == "InvalidResponse"

    def test_other_request_exception(self, dgraph_client):
        """Non-transport request errors are not retried."""
        with patch('requests.request', side_effect=requests.exceptions.InvalidURL("bad")) as mock_request:
            with pytest.raises(DgraphAPIError) as exc_info:
                dgraph_client.check_health()

        assert exc_info.value.error_code == "RequestError"
        assert not isinstance(exc_info.value, TransientAPIError)
        assert mock_request.call_count == 1

    def test_drop_all_body(self, dgraph_client):
        """drop_all posts the drop_all operation."""
        with patch('requests.request', return_value=create_mock_response(200, ALTER_OK)) as mock_request:
            dgraph_client.drop_all()

        args, kwargs = mock_request.call_args
        assert args == ('POST', f"{DGRAPH_URL}/alter")
        assert kwargs["json"] == {"drop_all": True}

    def test_alter_body(self, dgraph_client):
        """alter_schema posts the raw schema text."""
        with patch('requests.request', return_value=create_mock_response(200, ALTER_OK)) as mock_request:
            result = dgraph_client.alter_schema("<rdf.about>: string .\n")

        assert result == ALTER_OK
        assert mock_request.call_args.kwargs["data"] == b"<rdf.about>: string .\n"


@pytest.mark.unit
class TestRetry:
    """Tests for transient failure handling."""

    def test_is_transient_error(self):
        """Only transport failures and transient statuses are retried."""
        assert _is_transient_error(TransientAPIError(503, "x", "y")) is True
        assert _is_transient_error(requests.exceptions.ConnectionError()) is True
        assert _is_transient_error(DgraphAPIError(400, "x", "y")) is False
        assert _is_transient_error(ValueError()) is False

    def test_retry_then_success(self, dgraph_client):
        """A 503 followed by success is retried transparently."""
        responses = [create_mock_response(503, text="busy"), create_mock_response(200, HEALTHY)]
        with patch('requests.request', side_effect=responses) as mock_request:
            dgraph_client.check_health()

        assert mock_request.call_count == 2

    def test_connection_error_exhausts_retries(self, dgraph_client):
        """Connection failures are retried up to max_retries, then raised."""
        with patch('requests.request', side_effect=requests.exceptions.ConnectionError("refused")) as mock_request:
            with pytest.raises(TransientAPIError) as exc_info:
                dgraph_client.check_health()

        assert mock_request.call_count == 3
        assert exc_info.value.status_code == 503

    def test_timeout_is_transient(self, dgraph_client):
        """Timeouts map to 408 and are retried."""
        with patch('requests.request', side_effect=requests.exceptions.Timeout()) as mock_request:
            with pytest.raises(TransientAPIError) as exc_info:
                dgraph_client.check_health()

        assert exc_info.value.status_code == 408
        assert mock_request.call_count == 3

    def test_max_retries_honored(self):
        """A single attempt is made when max_retries is 1."""
        client = DgraphClient(DgraphConfig(url=DGRAPH_URL, max_retries=1, retry_backoff=0))
        with patch('requests.request', return_value=create_mock_response(504)) as mock_request:
            with pytest.raises(TransientAPIError):
                client.check_health()

        assert mock_request.call_count == 1


# =============================================================================
# SCHEMA APPLY
# =============================================================================

@pytest.mark.unit
class TestApplySchema:
    """Tests for the three-phase apply."""

    def test_phase_order(self, dgraph_client):
        """Health check, drop_all and alter run in order."""
        responses = [
            create_mock_response(200, HEALTHY),
            create_mock_response(200, ALTER_OK),
            create_mock_response(200, ALTER_OK),
        ]
        with patch('requests.request', side_effect=responses) as mock_request:
            dgraph_client.apply_schema("<rdf.about>: string .\n")

        calls = mock_request.call_args_list
        assert [c.args for c in calls] == [
            ('GET', f"{DGRAPH_URL}/health"),
            ('POST', f"{DGRAPH_URL}/alter"),
            ('POST', f"{DGRAPH_URL}/alter"),
        ]
        assert calls[1].kwargs["json"] == {"drop_all": True}
        assert calls[2].kwargs["data"] == b"<rdf.about>: string .\n"

    def test_without_drop(self, dgraph_client):
        """drop_existing=False skips the wipe."""
        responses = [create_mock_response(200, HEALTHY), create_mock_response(200, ALTER_OK)]
        with patch('requests.request', side_effect=responses) as mock_request:
            dgraph_client.apply_schema("<a>: int .\n", drop_existing=False)

        assert mock_request.call_count == 2

    def test_health_failure_touches_nothing(self, dgraph_client):
        """An unreachable store fails in the health phase."""
        with patch('requests.request', side_effect=requests.exceptions.ConnectionError()) as mock_request:
            with pytest.raises(SchemaApplyError) as exc_info:
                dgraph_client.apply_schema("<a>: int .\n")

        assert exc_info.value.phase == "health"
        assert exc_info.value.store_modified is False
        assert all(c.args[0] == 'GET' for c in mock_request.call_args_list)

    def test_drop_failure(self, dgraph_client):
        """A failed wipe reports the drop_all phase."""
        responses = [create_mock_response(200, HEALTHY), create_mock_response(400, text="denied")]
        with patch('requests.request', side_effect=responses):
            with pytest.raises(SchemaApplyError) as exc_info:
                dgraph_client.apply_schema("<a>: int .\n")

        assert exc_info.value.phase == "drop_all"
        assert exc_info.value.store_modified is False
        assert exc_info.value.error_code == "SchemaApplyFailed:drop_all"

    def test_alter_failure_after_wipe(self, dgraph_client):
        """A failed alteration after the wipe reports the store as modified."""
        responses = [
            create_mock_response(200, HEALTHY),
            create_mock_response(200, ALTER_OK),
            create_mock_response(200, create_error_response("Invalid schema")),
        ]
        with patch('requests.request', side_effect=responses):
            with pytest.raises(SchemaApplyError) as exc_info:
                dgraph_client.apply_schema("<a>: nope .\n")

        error = exc_info.value
        assert error.phase == "alter"
        assert error.store_modified is True
        assert "already wiped" in error.message
        assert isinstance(error.cause, DgraphAPIError)


@pytest.mark.live
class TestLiveDgraph:
    """Tests against a running alpha at CIMGRAPH_LIVE_URL."""

    def test_health(self):
        """The configured alpha reports healthy."""
        url = os.environ.get("CIMGRAPH_LIVE_URL", "http://localhost:8080")
        client = DgraphClient(DgraphConfig(url=url))
        assert client.check_health()
