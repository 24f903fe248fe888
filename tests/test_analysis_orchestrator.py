"""
Unit tests for the analysis pipeline without the HTTP layer.
"""
from unittest.mock import patch

import pytest

from analyzer.config import load_settings
from analyzer.errors import AnalysisFailedError, ConfigurationError, UpstreamFormatError
from analyzer.services.analysis_orchestrator import analyze_contract
from tests.conftest import make_completion


class TestAnalyzeContract:

    def test_missing_key_never_reaches_backend(self):
        with patch('analyzer.services.llm_client.request_completion') as mock_request:
            with pytest.raises(ConfigurationError):
                analyze_contract("contract", load_settings())
        mock_request.assert_not_called()

    def test_returns_normalized_result(self, groq_key, fake_backend):
        result = analyze_contract("contract", load_settings())

        assert result.score == 85
        assert result.scoreLabel == "Safe"

    def test_format_error_passes_through(self, groq_key, fake_backend):
        fake_backend.chat.completions.create.return_value = make_completion("no json here")

        with pytest.raises(UpstreamFormatError):
            analyze_contract("contract", load_settings())

    def test_unexpected_error_wrapped_with_message(self, groq_key):
        with patch('analyzer.services.llm_client.request_completion', side_effect=OSError("socket closed")):
            with pytest.raises(AnalysisFailedError) as exc_info:
                analyze_contract("contract", load_settings())

        assert exc_info.value.to_dict() == {'error': 'Analysis failed', 'message': 'socket closed'}

    def test_failed_analysis_not_cached(self, groq_key, monkeypatch, fake_backend):
        monkeypatch.setenv('ANALYSIS_CACHE_TTL', '60')
        fake_backend.chat.completions.create.return_value = make_completion("oops")

        with pytest.raises(UpstreamFormatError):
            analyze_contract("contract", load_settings())
        with pytest.raises(UpstreamFormatError):
            analyze_contract("contract", load_settings())

        assert fake_backend.chat.completions.create.call_count == 2
