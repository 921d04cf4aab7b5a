"""
============================================================
  CONFIGURATION
============================================================
  One PipelineConfig is assembled at process start and handed
  to every stage.  Paths come from (lowest → highest priority):

      built-in defaults
      .env file            (python-dotenv)
      REVIEW_SENTIMENT_*   environment variables
      explicit overrides   (CLI flags / tests)
============================================================
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

ENV_PREFIX = "REVIEW_SENTIMENT_"

DEFAULT_DATA_FILE = Path("data") / "tripadvisor_hotel_reviews.csv"
DEFAULT_FIGURES_DIR = Path("outputs") / "figures"
DEFAULT_MODELS_DIR = Path("outputs") / "models"
DEFAULT_REPORTS_DIR = Path("reports")

LEXICON_METHODS = ("syuzhet", "bing", "afinn")


@dataclass(frozen=True)
class VocabularySettings:
    """Vocabulary pruning thresholds."""

    term_count_min: int = 5
    doc_proportion_min: float = 0.0005
    doc_proportion_max: float = 0.8

    def __post_init__(self):
        if self.term_count_min < 1:
            raise ConfigurationError(
                f"term_count_min must be >= 1, got {self.term_count_min}",
                stage="config",
            )
        for name in ("doc_proportion_min", "doc_proportion_max"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(
                    f"{name} must be within [0, 1], got {value}", stage="config"
                )
        if self.doc_proportion_min > self.doc_proportion_max:
            raise ConfigurationError(
                "doc_proportion_min cannot exceed doc_proportion_max "
                f"({self.doc_proportion_min} > {self.doc_proportion_max})",
                stage="config",
            )

    def describe(self) -> str:
        return (
            f"term_count_min={self.term_count_min}, "
            f"doc_proportion_min={self.doc_proportion_min}, "
            f"doc_proportion_max={self.doc_proportion_max}"
        )


@dataclass(frozen=True)
class PipelineConfig:
    data_path: Path
    figures_dir: Path
    models_dir: Path
    reports_dir: Path
    text_column: str = "Review"
    vocabulary: VocabularySettings = field(default_factory=VocabularySettings)
    sample_size: int = 500
    top_n_terms: int = 20
    wordcloud_max_words: int = 250
    wordcloud_min_words: int = 100
    wordcloud_size: int = 2300
    pie_lexicon: str = "bing"
    export_svg: bool = False
    show_progress: bool = True
    dpi: int = 300

    def __post_init__(self):
        for name in ("data_path", "figures_dir", "models_dir", "reports_dir"):
            object.__setattr__(self, name, Path(getattr(self, name)))

        if self.pie_lexicon not in LEXICON_METHODS:
            raise ConfigurationError(
                f"pie_lexicon must be one of {LEXICON_METHODS}, got {self.pie_lexicon!r}",
                stage="config",
            )
        for name in ("sample_size", "top_n_terms", "wordcloud_max_words",
                     "wordcloud_size", "dpi"):
            if getattr(self, name) < 1:
                raise ConfigurationError(
                    f"{name} must be a positive integer", stage="config"
                )
        if self.wordcloud_min_words > self.wordcloud_max_words:
            raise ConfigurationError(
                "wordcloud_min_words cannot exceed wordcloud_max_words",
                stage="config",
            )

    @classmethod
    def from_env(
        cls,
        project_root: Optional[Path] = None,
        env_file: Optional[Path] = None,
        **overrides: Any,
    ) -> "PipelineConfig":
        """Build a config from defaults, .env, environment, then overrides.

        Relative paths are resolved against the project root, which itself
        defaults to ``REVIEW_SENTIMENT_PROJECT_ROOT`` or the working directory.
        """
        load_dotenv(dotenv_path=env_file, override=False)

        def env(name: str) -> Optional[str]:
            value = os.environ.get(ENV_PREFIX + name)
            return value.strip() if value and value.strip() else None

        root = Path(project_root or env("PROJECT_ROOT") or Path.cwd())

        def resolve(value) -> Path:
            path = Path(value)
            return path if path.is_absolute() else root / path

        settings = {
            "data_path": env("DATA_PATH") or DEFAULT_DATA_FILE,
            "figures_dir": env("OUTPUT_FIGURES") or DEFAULT_FIGURES_DIR,
            "models_dir": env("OUTPUT_MODELS") or DEFAULT_MODELS_DIR,
            "reports_dir": env("OUTPUT_REPORTS") or DEFAULT_REPORTS_DIR,
        }
        if env("TEXT_COLUMN"):
            settings["text_column"] = env("TEXT_COLUMN")

        settings.update({k: v for k, v in overrides.items() if v is not None})
        for name in ("data_path", "figures_dir", "models_dir", "reports_dir"):
            settings[name] = resolve(settings[name])

        return cls(**settings)

    def with_overrides(self, **changes: Any) -> "PipelineConfig":
        return replace(self, **changes)

    def ensure_output_dirs(self) -> None:
        for folder in (self.figures_dir, self.models_dir, self.reports_dir):
            folder.mkdir(parents=True, exist_ok=True)
