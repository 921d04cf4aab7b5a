"""
============================================================
  LEXICON SENTIMENT  (syuzhet / bing / afinn)  +  NRC EMOTIONS
============================================================
  Three fixed dictionaries score every review independently:

      syuzhet   fine-grained real-valued word valences, summed
                (VADER's valence dictionary)
      bing      Hu & Liu opinion lexicon, +1 / -1 per word
      afinn     AFINN-165 integer valences, via the afinn package

  No training.  A score is turned into a label by its sign only:
      > 0  → positive      < 0  → negative      == 0 → neutral

  The NRC emotion lexicon (NRCLex) gives per-review counts for
  the eight emotions plus positive / negative, summed into
  corpus-level totals for the emotion chart.
============================================================
"""

import logging
import math
import operator
import re
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Optional

import pandas as pd
from tqdm import tqdm

from .config import LEXICON_METHODS
from .exceptions import ConfigurationError
from .nltk_resources import ensure_nltk_resource

logger = logging.getLogger(__name__)

NRC_CATEGORIES = [
    "anger", "anticipation", "disgust", "fear", "joy",
    "sadness", "surprise", "trust", "negative", "positive",
]

_WORD = re.compile(r"[a-z']+")


# ============================================================
# LABELS
# ============================================================
class SentimentLabel(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


# first matching rule wins; nothing matched → NEUTRAL
LABEL_RULES = (
    (operator.gt, SentimentLabel.POSITIVE),
    (operator.lt, SentimentLabel.NEGATIVE),
)


def label_from_score(score: float) -> SentimentLabel:
    score = float(score)
    if math.isnan(score):
        raise ValueError("cannot label a NaN sentiment score")
    for compare, label in LABEL_RULES:
        if compare(score, 0.0):
            return label
    return SentimentLabel.NEUTRAL


# ============================================================
# SCORERS
# ============================================================
def lexicon_tokens(text: str) -> List[str]:
    return _WORD.findall(text.lower())


class DictionaryScorer:
    """Sum of per-word values from a fixed word → score dictionary."""

    def __init__(self, name: str, lexicon: Mapping[str, float]):
        self.name = name
        self.lexicon = {str(k).lower(): float(v) for k, v in lexicon.items()}

    def __call__(self, text: str) -> float:
        return float(sum(self.lexicon.get(tok, 0.0) for tok in lexicon_tokens(text)))


class AfinnScorer:
    name = "afinn"

    def __init__(self):
        from afinn import Afinn

        self._afinn = Afinn(language="en")

    def __call__(self, text: str) -> float:
        return float(self._afinn.score(text))


def load_syuzhet_scorer() -> DictionaryScorer:
    from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

    return DictionaryScorer("syuzhet", SentimentIntensityAnalyzer().lexicon)


def load_bing_scorer() -> DictionaryScorer:
    ensure_nltk_resource("corpora/opinion_lexicon", "opinion_lexicon")
    from nltk.corpus import opinion_lexicon

    lexicon = {w: 1.0 for w in opinion_lexicon.positive()}
    lexicon.update({w: -1.0 for w in opinion_lexicon.negative()})
    return DictionaryScorer("bing", lexicon)


def load_afinn_scorer() -> AfinnScorer:
    return AfinnScorer()


_LOADERS = {
    "syuzhet": load_syuzhet_scorer,
    "bing": load_bing_scorer,
    "afinn": load_afinn_scorer,
}


def default_scorers(methods: Iterable[str] = LEXICON_METHODS) -> Dict[str, Callable[[str], float]]:
    scorers = {}
    for method in methods:
        if method not in _LOADERS:
            raise ConfigurationError(f"Unknown lexicon {method!r}", stage="lexicons")
        scorers[method] = _LOADERS[method]()
    return scorers


# ============================================================
# SCORING
# ============================================================
def score_reviews(
    texts: Iterable[str],
    scorers: Mapping[str, Callable[[str], float]],
    show_progress: bool = False,
) -> pd.DataFrame:
    """One row per review, one float column per lexicon."""
    texts = list(texts)
    columns = {}
    for method, scorer in scorers.items():
        iterator = tqdm(texts, desc=f"{method} scores", disable=not show_progress)
        columns[method] = [scorer(t) for t in iterator]
    return pd.DataFrame(columns, index=pd.RangeIndex(len(texts)), dtype=float)


def add_labels(scores: pd.DataFrame) -> pd.DataFrame:
    out = scores.copy()
    for method in scores.columns:
        out[f"label_{method}"] = scores[method].map(lambda s: label_from_score(s).value)
    return out


def label_counts(labels: pd.Series) -> pd.Series:
    """Label frequencies, most common first."""
    counts = labels.value_counts()
    return counts.sort_values(ascending=False, kind="mergesort").rename("count")


def score_correlations(scores: pd.DataFrame) -> pd.DataFrame:
    return scores[list(scores.columns)].corr(method="pearson")


def log_sentiment_summary(sentiment: pd.DataFrame, methods: Iterable[str]) -> None:
    methods = list(methods)
    corr = score_correlations(sentiment[methods]).round(3)
    logger.info("Correlation (%s):\n%s", ",".join(methods), corr.to_string())
    for method in methods:
        counts = label_counts(sentiment[f"label_{method}"])
        logger.info(
            "Counts (%s labels): %s",
            method,
            ", ".join(f"{k}={v:,}" for k, v in counts.items()),
        )


# ============================================================
# NRC EMOTIONS
# ============================================================
def nrc_emotion_counts(text: str) -> Dict[str, int]:
    from nrclex import NRCLex

    # NRCLex matches tokens as written against an all-lowercase lexicon
    raw = NRCLex(text.lower()).raw_emotion_scores
    return {k: int(v) for k, v in raw.items()}


def prepare_nrc() -> Callable[[str], Dict[str, int]]:
    # NRCLex tokenizes through TextBlob, which needs the punkt models
    ensure_nltk_resource("tokenizers/punkt_tab", "punkt_tab")
    return nrc_emotion_counts


def emotion_matrix(
    texts: Iterable[str],
    emotion_fn: Optional[Callable[[str], Mapping[str, int]]] = None,
    show_progress: bool = False,
) -> pd.DataFrame:
    """Documents × NRC categories count matrix (may be slow on big corpora)."""
    if emotion_fn is None:
        emotion_fn = prepare_nrc()
    texts = list(texts)
    rows = [
        emotion_fn(t)
        for t in tqdm(texts, desc="NRC emotions", disable=not show_progress)
    ]
    matrix = pd.DataFrame(rows, index=pd.RangeIndex(len(texts)))
    return matrix.reindex(columns=NRC_CATEGORIES).fillna(0).astype(int)


def emotion_totals(matrix: pd.DataFrame) -> pd.Series:
    return matrix.sum(axis=0).rename("count")
