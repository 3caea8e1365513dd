"""Exceptions for the enrichment pipeline."""


class EnrichmentError(Exception):
    """Base exception for enrichment errors."""

    pass


class InputError(EnrichmentError):
    """Raised when the candidate list or a single candidate is malformed."""

    pass


class DuplicateRecordError(EnrichmentError):
    """Raised when inserting a problem statement whose external id already exists."""

    def __init__(self, external_id: str):
        self.external_id = external_id
        super().__init__(f"Problem statement already exists: {external_id}")


class AnalysisTimeoutError(EnrichmentError):
    """Raised when the text-analysis service does not answer in time."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Analysis timed out after {timeout:g}s")
