"""CSV snapshots written under the reports folder."""

import logging
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from .term_scores import TermScores

logger = logging.getLogger(__name__)

TERM_SCORES_FILE = "top_terms_tfidf_full.csv"
SENTIMENT_SAMPLE_FILE = "sentiment_sample_full.csv"


def export_term_scores(term_scores: TermScores, reports_dir: Union[str, Path]) -> Path:
    reports_dir = Path(reports_dir)
    reports_dir.mkdir(parents=True, exist_ok=True)
    out = reports_dir / TERM_SCORES_FILE
    term_scores.to_frame().to_csv(out, index=False)
    logger.info("💾 saved full top-terms table  →  %s", out)
    return out


def sentiment_sample(
    texts: Sequence[str], scores: pd.DataFrame, limit: int = 500
) -> pd.DataFrame:
    """First min(limit, corpus size) reviews with their lexicon scores."""
    n = min(limit, len(texts))
    sample = pd.DataFrame({"Review": list(texts)[:n]})
    methods = [c for c in scores.columns if not str(c).startswith("label_")]
    for method in methods:
        sample[method] = scores[method].iloc[:n].to_numpy()
    return sample


def export_sentiment_sample(
    texts: Sequence[str],
    scores: pd.DataFrame,
    reports_dir: Union[str, Path],
    limit: int = 500,
) -> Path:
    reports_dir = Path(reports_dir)
    reports_dir.mkdir(parents=True, exist_ok=True)
    out = reports_dir / SENTIMENT_SAMPLE_FILE
    sentiment_sample(texts, scores, limit).to_csv(out, index=False)
    logger.info("💾 saved sentiment sample  →  %s", out)
    return out
