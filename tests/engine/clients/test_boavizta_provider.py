"""
Tests for BoaviztaProvider.
"""

import pytest
import requests
import unittest.mock as mock

from impactkit.engine.clients.boavizta_provider import BoaviztaProvider
from impactkit.engine.models.impact_result import ImpactResult
from impactkit.engine.models.observation import UsageInput
from impactkit.engine.utils.error_handling import (
    ConfigurationError,
    InvalidInputError,
    InvalidObservationError,
    RemoteEstimationError
)


def estimation_response(manufacture=2, use=7.2):
    response = mock.Mock()
    response.status_code = 200
    response.raise_for_status.return_value = None
    response.json.return_value = {"impacts": {"gwp": {"manufacture": manufacture}, "pe": {"use": use}}}
    return response


class TestConfigure:
    """Tests for static parameter capture."""

    def test_configure_returns_self(self, cpu_static_params):
        """Test configure returns the model for chaining."""
        provider = BoaviztaProvider()
        assert provider.configure("cpu-model", cpu_static_params) is provider
        assert provider.name == "cpu-model"

    def test_stores_copy_of_params(self, cpu_static_params):
        """Test stored params are a copy, not the caller's dict."""
        provider = BoaviztaProvider().configure("m", cpu_static_params)
        cpu_static_params["core_units"] = 1

        assert provider.shared_params["core_units"] == 24
        assert provider.location == "USA"

    def test_verbose_is_consumed(self, cpu_static_params):
        """Test verbose flag is read and stripped from stored params."""
        provider = BoaviztaProvider().configure("m", {**cpu_static_params, "verbose": True})

        assert provider.verbose is True
        assert "verbose" not in provider.shared_params

    def test_verbose_defaults_false(self, cpu_static_params):
        """Test verbose defaults to False."""
        assert BoaviztaProvider().configure("m", cpu_static_params).verbose is False

    @pytest.mark.parametrize("missing", ["name", "core_units"])
    def test_missing_required_param(self, cpu_static_params, missing):
        """Test configure fails without name or core_units."""
        del cpu_static_params[missing]

        with pytest.raises(ConfigurationError) as exc_info:
            BoaviztaProvider().configure("m", cpu_static_params)

        assert missing in str(exc_info.value)

    def test_configure_without_params(self):
        """Test configure with no static params fails on missing name."""
        with pytest.raises(ConfigurationError):
            BoaviztaProvider().configure("m")

    def test_ram_requires_units(self):
        """Test ram component requires units instead of core_units."""
        provider = BoaviztaProvider(component_type="ram")

        with pytest.raises(ConfigurationError):
            provider.configure("m", {"name": "ram", "core_units": 2})

        provider.configure("m", {"name": "ram", "units": 2})
        assert provider.metric_type == "ram"
        assert provider.model_identifier() == "org.boavizta.ram.sci"

    def test_unsupported_component(self):
        """Test unknown component types are rejected."""
        with pytest.raises(ConfigurationError):
            BoaviztaProvider(component_type="disk")

    def test_authenticate_stores_credentials(self):
        """Test credentials are stored without validation."""
        provider = BoaviztaProvider()
        provider.authenticate({"token": "anything"})
        assert provider._credentials == {"token": "anything"}


class TestFetchData:
    """Tests for the component estimation request."""

    def test_requires_configure(self):
        """Test fetch_data fails before configure."""
        with pytest.raises(ConfigurationError):
            BoaviztaProvider().fetch_data(UsageInput(1.0, 50.0))

    @mock.patch('requests.post')
    def test_request_shape(self, mock_post, cpu_static_params):
        """Test request URL, query params and body."""
        mock_post.return_value = estimation_response()
        provider = BoaviztaProvider(api_url="https://boavizta.test/").configure("m", cpu_static_params)

        result = provider.fetch_data(UsageInput(2.0, 50.0, "USA"))

        assert result == ImpactResult(e=2.0, m=2000.0)
        args, kwargs = mock_post.call_args
        assert args[0] == "https://boavizta.test/v1/component/cpu"
        assert kwargs["params"] == {"verbose": "false", "allocation": "LINEAR"}
        assert kwargs["json"] == {
            **cpu_static_params,
            "usage": {"hours_use_time": 2.0, "time_workload": 50.0, "usage_location": "USA"},
        }

    @mock.patch('requests.post')
    def test_does_not_mutate_shared_params(self, mock_post, cpu_static_params):
        """Test usage is never written into the stored params."""
        mock_post.return_value = estimation_response()
        provider = BoaviztaProvider().configure("m", cpu_static_params)

        provider.fetch_data(UsageInput(1.0, 10.0))

        assert "usage" not in provider.shared_params

    @mock.patch('requests.post')
    def test_http_error_raises(self, mock_post, cpu_static_params):
        """Test HTTP failures surface as RemoteEstimationError."""
        response = estimation_response()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("422 Unprocessable")
        mock_post.return_value = response
        provider = BoaviztaProvider().configure("m", cpu_static_params)

        with pytest.raises(RemoteEstimationError) as exc_info:
            provider.fetch_data(UsageInput(1.0, 10.0))

        assert "422" in str(exc_info.value)
        assert mock_post.call_count == 1

    @mock.patch('requests.post')
    def test_unrecognized_body_raises(self, mock_post, cpu_static_params):
        """Test an unknown response shape fails instead of yielding zeros."""
        response = estimation_response()
        response.json.return_value = {"success": True}
        mock_post.return_value = response
        provider = BoaviztaProvider().configure("m", cpu_static_params)

        with pytest.raises(RemoteEstimationError):
            provider.fetch_data(UsageInput(1.0, 10.0))


class TestCalculate:
    """Tests for whole-batch calculation."""

    @mock.patch('requests.post')
    def test_results_follow_input_order(self, mock_post, cpu_static_params, observations):
        """Test each result belongs to the observation at the same index."""
        mock_post.side_effect = [
            estimation_response(manufacture=1, use=3.6),
            estimation_response(manufacture=2, use=7.2),
            estimation_response(manufacture=3, use=10.8),
        ]
        provider = BoaviztaProvider().configure("m", cpu_static_params)

        results = provider.calculate(observations)

        assert [r.m for r in results] == [1000.0, 2000.0, 3000.0]
        sent = [c.kwargs["json"]["usage"] for c in mock_post.call_args_list]
        assert [u["hours_use_time"] for u in sent] == [1.0, 2.0, 0.5]
        assert [u["time_workload"] for u in sent] == [50.0, 25.0, 100.0]
        assert all(u["usage_location"] == "USA" for u in sent)

    def test_rejects_non_sequence(self, cpu_static_params):
        """Test calculate fails for non-sequence input."""
        provider = BoaviztaProvider().configure("m", cpu_static_params)

        with pytest.raises(InvalidInputError):
            provider.calculate({"datetime": "t", "duration": 1, "cpu": 0.1})

    def test_rejects_missing_duration(self, cpu_static_params):
        """Test calculate fails when an observation lacks duration."""
        provider = BoaviztaProvider().configure("m", cpu_static_params)

        with pytest.raises(InvalidObservationError):
            provider.calculate([{"datetime": "t", "cpu": 0.1}])


class TestSupportedLocations:

    @mock.patch('requests.get')
    def test_returns_values(self, mock_get):
        """Test supported locations are the values of the country map."""
        response = mock.Mock()
        response.raise_for_status.return_value = None
        response.json.return_value = {"France": "FRA", "Germany": "DEU"}
        mock_get.return_value = response

        locations = BoaviztaProvider(api_url="https://boavizta.test").supported_locations()

        assert sorted(locations) == ["DEU", "FRA"]
        assert mock_get.call_args.args[0] == "https://boavizta.test/v1/utils/country_code"

    @mock.patch('requests.get')
    def test_connection_error(self, mock_get):
        """Test transport failures raise RemoteEstimationError."""
        mock_get.side_effect = requests.exceptions.ConnectionError("unreachable")

        with pytest.raises(RemoteEstimationError):
            BoaviztaProvider().supported_locations()
