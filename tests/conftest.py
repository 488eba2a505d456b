"""
Global pytest configuration and fixtures for fast test execution.

This file mocks outbound HTTP calls so that no test ever reaches the
Boavizta API.
"""

import pytest
from unittest.mock import patch, Mock


@pytest.fixture(autouse=True)
def mock_external_apis():
    """
    Auto-use fixture that mocks all external API calls.
    Tests needing specific responses patch requests themselves.
    """
    with patch('requests.get') as mock_requests_get, \
         patch('requests.post') as mock_requests_post:

        mock_response = Mock()
        mock_response.status_code = 200
        mock_response.json.return_value = {"success": True}
        mock_response.raise_for_status.return_value = None
        mock_requests_get.return_value = mock_response
        mock_requests_post.return_value = mock_response

        yield {
            'get': mock_requests_get,
            'post': mock_requests_post
        }


@pytest.fixture
def cpu_static_params():
    """Static params describing a Boavizta CPU component."""
    return {
        "name": "Intel Xeon Gold 6138f",
        "core_units": 24,
        "location": "USA",
    }


@pytest.fixture
def observations():
    """Three ordered CPU observations of varying duration and load."""
    return [
        {"datetime": "2023-07-06T00:00", "duration": 3600, "cpu": 0.5},
        {"datetime": "2023-07-06T01:00", "duration": 7200, "cpu": 0.25},
        {"datetime": "2023-07-06T03:00", "duration": 1800, "cpu": 1.0, "region": "eu-west-1"},
    ]


# Performance optimization: disable logging during tests unless explicitly enabled
@pytest.fixture(autouse=True)
def fast_logging():
    """
    Reduce logging verbosity during tests for better performance.
    """
    import logging
    import bittensor as bt

    # Set higher log level to reduce output during tests
    logging.getLogger().setLevel(logging.WARNING)
    bt.logging.set_debug(False)

    yield

    # Restore normal logging after tests
    logging.getLogger().setLevel(logging.INFO)
