"""Gemini-backed problem statement analyzer."""
import logging
from typing import Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ps_enricher.analysis.prompt import RESPONSE_SCHEMA, build_prompt
from ps_enricher.analysis.schema import AnalysisFailure, AnalysisResult, parse_analysis_payload

logger = logging.getLogger(__name__)


class GeminiAnalyzer:
    """Analyzer that asks Gemini for structured problem statement metadata.

    Errors reported by the API (quota, safety blocks, bad requests) and
    unparsable output come back as AnalysisFailure. Transport errors
    propagate so the pipeline records them as processing errors.
    """

    name = "gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.5-flash-lite",
        temperature: float = 0.7,
        thinking_budget: Optional[int] = 0,
        client: Optional[genai.Client] = None,
    ):
        """
        Initialize Gemini analyzer.

        Args:
            api_key: Google AI Studio API key (ignored when client is given)
            model: Gemini model id
            temperature: Sampling temperature
            thinking_budget: Thinking token budget; None leaves the model default
            client: Pre-built client, mainly for tests
        """
        if client is None:
            if not api_key:
                raise ValueError("GOOGLE_API_KEY is not configured")
            client = genai.Client(api_key=api_key)

        self._client = client
        self.model = model
        self.temperature = temperature
        self.thinking_budget = thinking_budget

    def _build_config(self) -> types.GenerateContentConfig:
        config = types.GenerateContentConfig(
            temperature=self.temperature,
            response_mime_type="application/json",
            response_schema=RESPONSE_SCHEMA,
        )
        if self.thinking_budget is not None:
            config.thinking_config = types.ThinkingConfig(thinking_budget=self.thinking_budget)
        return config

    async def analyze(self, text: str) -> AnalysisResult:
        """Analyze one problem statement."""
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=build_prompt(text),
                config=self._build_config(),
            )
        except genai_errors.APIError as e:
            logger.error("Gemini API error: %s", e)
            return AnalysisFailure(error=f"Gemini API error: {e}")

        output = response.text
        if not output:
            # Blocked or empty candidates
            return AnalysisFailure(error="Gemini returned no content")

        result = parse_analysis_payload(output)
        if not result.ok:
            logger.warning("Unusable Gemini output: %s", result.error)
        return result

    def __repr__(self) -> str:
        return f"<GeminiAnalyzer {self.model}>"
