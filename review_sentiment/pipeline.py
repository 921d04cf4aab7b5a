"""
============================================================
  EXPLORATORY SENTIMENT PIPELINE
============================================================
  Five stages, run once, in order:

    1. load & clean reviews
    2. vocabulary → DTM → TF-IDF   (+ persist artifacts)
    3. term scores                 (TF-IDF → DTM → vocab counts)
    4. lexicon scores + labels, NRC emotion totals
    5. figures + CSV snapshots
============================================================
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Mapping, Optional

import pandas as pd

from . import figures, reports
from .config import LEXICON_METHODS, PipelineConfig
from .exceptions import ConfigurationError
from .lexicons import (
    add_labels,
    default_scorers,
    emotion_matrix,
    emotion_totals,
    log_sentiment_summary,
    score_reviews,
)
from .loader import load_reviews
from .term_scores import TermScores, compute_term_scores
from .vectorizer import VectorizedCorpus, save_artifacts, vectorize_corpus

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    reviews: pd.Series
    corpus: VectorizedCorpus
    term_scores: TermScores
    sentiment: pd.DataFrame
    emotions: pd.Series
    outputs: Dict[str, Path] = field(default_factory=dict)


def run_pipeline(
    config: PipelineConfig,
    scorers: Optional[Mapping[str, Callable[[str], float]]] = None,
    emotion_fn: Optional[Callable[[str], Mapping[str, int]]] = None,
    stop_words: Optional[Iterable[str]] = None,
) -> PipelineResult:
    """Run every stage; lexicons, emotion lookup and stopwords are injectable."""
    outputs: Dict[str, Path] = {}
    if scorers is not None:
        missing = [m for m in LEXICON_METHODS if m not in scorers]
        if missing:
            raise ConfigurationError(
                f"No scorer for lexicon(s): {', '.join(missing)}",
                stage="lexicons",
                details={"scorers": sorted(scorers)},
            )

    logger.info("🔄 Loading reviews …")
    reviews = load_reviews(config.data_path, config.text_column)
    texts = reviews.tolist()

    config.ensure_output_dirs()

    logger.info("🔄 Building vocabulary, DTM and TF-IDF …")
    corpus = vectorize_corpus(texts, config.vocabulary, stop_words=stop_words)
    outputs.update(save_artifacts(corpus, config.models_dir))

    logger.info("🔄 Computing term scores …")
    term_scores = compute_term_scores(corpus.tfidf, corpus.dtm, corpus.vocabulary)
    outputs["term_scores_csv"] = reports.export_term_scores(term_scores, config.reports_dir)

    logger.info("🔄 Scoring reviews with syuzhet / bing / afinn …")
    if scorers is None:
        scorers = default_scorers()
    scores = score_reviews(texts, scorers, show_progress=config.show_progress)
    outputs["sentiment_sample_csv"] = reports.export_sentiment_sample(
        texts, scores, config.reports_dir, limit=config.sample_size
    )
    sentiment = add_labels(scores)
    log_sentiment_summary(sentiment, LEXICON_METHODS)

    logger.info("🔄 Counting NRC emotions (may take a while) …")
    emotions = emotion_totals(
        emotion_matrix(texts, emotion_fn, show_progress=config.show_progress)
    )

    logger.info("🔄 Generating charts …")
    charts = {
        "wordcloud": figures.chart_01_wordcloud(term_scores, config),
        "top_terms": figures.chart_02_top_terms(term_scores, config),
        "sentiment_hist": figures.chart_03_sentiment_histograms(sentiment, config),
        "sentiment_pie": figures.chart_04_sentiment_pie(sentiment, config),
        "emotion_counts": figures.chart_05_emotion_counts(emotions, config),
    }
    outputs.update({name: path for name, path in charts.items() if path is not None})

    logger.info("✅ Pipeline completed. Figures saved to: %s", config.figures_dir)
    logger.info("Vocabulary and TF-IDF transformer saved to: %s", config.models_dir)
    return PipelineResult(reviews, corpus, term_scores, sentiment, emotions, outputs)
