"""Exploratory TF-IDF and lexicon sentiment analysis of hotel reviews."""

from .config import PipelineConfig, VocabularySettings
from .exceptions import (
    ArtifactError,
    ConfigurationError,
    EmptyVocabularyError,
    InputDataError,
    PipelineError,
    TermScoreError,
)
from .pipeline import PipelineResult, run_pipeline

__version__ = "0.1.0"

__all__ = [
    "ArtifactError",
    "ConfigurationError",
    "EmptyVocabularyError",
    "InputDataError",
    "PipelineConfig",
    "PipelineError",
    "PipelineResult",
    "TermScoreError",
    "VocabularySettings",
    "run_pipeline",
]
