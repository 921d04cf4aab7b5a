"""
============================================================
  Pipeline Exceptions
============================================================
  PipelineError (base)
  ├── ConfigurationError    bad settings / unknown lexicon
  ├── InputDataError        missing or unreadable review data
  ├── EmptyVocabularyError  pruning left no terms to work with
  ├── TermScoreError        no term-score signal could be computed
  └── ArtifactError         persisted vocabulary / transformer unusable

  All of these are fatal for a run: the CLI turns them into a
  logged error and a non-zero exit status.
============================================================
"""

from typing import Any, Dict, Optional


class PipelineError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(
        self,
        message: str,
        stage: str = "",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.stage = stage
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "stage": self.stage,
            "details": self.details,
        }


class ConfigurationError(PipelineError):
    """Invalid pipeline settings."""


class InputDataError(PipelineError):
    """Review data is missing, unreadable or has no usable text."""


class EmptyVocabularyError(PipelineError):
    """Vocabulary pruning removed every term."""

    def __init__(
        self,
        message: str,
        stage: str = "vectorizer",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, stage, details)


class TermScoreError(PipelineError):
    """Neither TF-IDF, DTM nor vocabulary counts yielded term scores."""


class ArtifactError(PipelineError):
    """A persisted model artifact could not be loaded."""
