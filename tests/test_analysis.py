"""Tests for analysis result validation and the Gemini analyzer."""
import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import errors as genai_errors

from ps_enricher.analysis.gemini import GeminiAnalyzer
from ps_enricher.analysis.prompt import build_prompt
from ps_enricher.analysis.schema import (
    ANALYSIS_DEFAULTS,
    AnalysisFailure,
    AnalysisSuccess,
    Difficulty,
    ProblemAnalysis,
    apply_analysis_defaults,
    parse_analysis_payload,
)
from tests.conftest import DEFAULT_PAYLOAD


class TestApplyAnalysisDefaults:
    """Tests for the explicit defaulting step."""

    def test_defaults_table(self):
        assert ANALYSIS_DEFAULTS == {
            "tags": [],
            "tech_stack": [],
            "summary": "",
            "approach": [],
            "difficulty_level": "medium",
        }

    def test_empty_analysis_gets_all_defaults(self):
        assert apply_analysis_defaults(ProblemAnalysis()) == ANALYSIS_DEFAULTS

    def test_defaults_are_fresh_lists(self):
        values = apply_analysis_defaults(ProblemAnalysis())
        values["tags"].append("mutated")
        assert ANALYSIS_DEFAULTS["tags"] == []

    def test_provided_values_kept(self):
        analysis = ProblemAnalysis.model_validate(DEFAULT_PAYLOAD)

        values = apply_analysis_defaults(analysis)

        assert values["tags"] == DEFAULT_PAYLOAD["tags"]
        assert values["tech_stack"] == DEFAULT_PAYLOAD["techStack"]
        assert values["difficulty_level"] == "hard"

    def test_empty_list_is_kept_not_defaulted(self):
        values = apply_analysis_defaults(ProblemAnalysis(tags=[]))
        assert values["tags"] == []


class TestParseAnalysisPayload:
    """Tests for parse_analysis_payload."""

    def test_dict_payload(self):
        result = parse_analysis_payload(dict(DEFAULT_PAYLOAD))

        assert isinstance(result, AnalysisSuccess)
        assert result.ok
        assert result.analysis.difficulty_level == Difficulty.HARD
        assert result.raw == DEFAULT_PAYLOAD

    def test_json_text_payload(self):
        result = parse_analysis_payload(json.dumps(DEFAULT_PAYLOAD))
        assert result.ok
        assert result.analysis.tech_stack == ["Python", "TensorFlow", "React"]

    def test_code_fenced_json(self):
        text = "```json\n" + json.dumps({"summary": "s"}) + "\n```"
        result = parse_analysis_payload(text)
        assert result.ok
        assert result.analysis.summary == "s"

    def test_snake_case_keys_accepted(self):
        result = parse_analysis_payload({"tech_stack": ["Go"], "difficulty_level": "easy"})
        assert result.analysis.tech_stack == ["Go"]
        assert result.analysis.difficulty_level == Difficulty.EASY

    def test_difficulty_case_insensitive(self):
        result = parse_analysis_payload({"difficultyLevel": " Medium "})
        assert result.analysis.difficulty_level == Difficulty.MEDIUM

    def test_invalid_difficulty_is_failure(self):
        result = parse_analysis_payload({"difficultyLevel": "impossible"})
        assert isinstance(result, AnalysisFailure)
        assert not result.ok

    def test_wrong_field_type_is_failure(self):
        result = parse_analysis_payload({"tags": "not-a-list"})
        assert isinstance(result, AnalysisFailure)

    def test_invalid_json_is_failure(self):
        result = parse_analysis_payload("I cannot help with that.")
        assert isinstance(result, AnalysisFailure)
        assert "not valid JSON" in result.error

    def test_non_object_is_failure(self):
        result = parse_analysis_payload(["tags"])
        assert isinstance(result, AnalysisFailure)
        assert "list" in result.error


class TestPrompt:
    """Tests for the analyzer prompt."""

    def test_problem_statement_inserted(self):
        prompt = build_prompt("Title: Flood alerts")
        assert "Problem Statement: Title: Flood alerts" in prompt
        assert "not exceed 120 words" in prompt


def _mock_client(text=None, side_effect=None):
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=SimpleNamespace(text=text),
        side_effect=side_effect,
    )
    return client


class TestGeminiAnalyzer:
    """Tests for GeminiAnalyzer with a mocked google-genai client."""

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            GeminiAnalyzer(api_key=None)

    def test_successful_analysis(self):
        client = _mock_client(text=json.dumps(DEFAULT_PAYLOAD))
        analyzer = GeminiAnalyzer(client=client, model="gemini-test")

        result = asyncio.run(analyzer.analyze("Title: Crop disease"))

        assert result.ok
        assert result.analysis.tags == ["agriculture", "crop monitoring"]

        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert "Title: Crop disease" in kwargs["contents"]
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["config"].temperature == 0.7
        assert kwargs["config"].thinking_config.thinking_budget == 0

    def test_thinking_budget_can_be_left_unset(self):
        client = _mock_client(text=json.dumps(DEFAULT_PAYLOAD))
        analyzer = GeminiAnalyzer(client=client, thinking_budget=None)

        asyncio.run(analyzer.analyze("Title: x"))

        config = client.aio.models.generate_content.call_args.kwargs["config"]
        assert config.thinking_config is None

    def test_api_error_is_failure(self):
        error = genai_errors.ClientError(
            429,
            {"error": {"code": 429, "message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}},
        )
        analyzer = GeminiAnalyzer(client=_mock_client(side_effect=error))

        result = asyncio.run(analyzer.analyze("Title: x"))

        assert isinstance(result, AnalysisFailure)
        assert "Gemini API error" in result.error

    def test_empty_response_is_failure(self):
        analyzer = GeminiAnalyzer(client=_mock_client(text=None))

        result = asyncio.run(analyzer.analyze("Title: x"))

        assert isinstance(result, AnalysisFailure)
        assert result.error == "Gemini returned no content"

    def test_malformed_output_is_failure(self):
        analyzer = GeminiAnalyzer(client=_mock_client(text="Sure! Here are some tags"))

        result = asyncio.run(analyzer.analyze("Title: x"))

        assert isinstance(result, AnalysisFailure)

    def test_transport_error_propagates(self):
        analyzer = GeminiAnalyzer(client=_mock_client(side_effect=ConnectionError("no route")))

        with pytest.raises(ConnectionError):
            asyncio.run(analyzer.analyze("Title: x"))
