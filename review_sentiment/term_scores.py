"""
============================================================
  TERM SCORES  (column sums over whatever matrix we are given)
============================================================
  A small chain of adapters, tried in fixed order:

      1. SparseColumnSums     scipy.sparse matrices / arrays
      2. DenseColumnSums      2-D numpy arrays, DataFrames
      3. NamedVectorScores    numeric Series / mapping keyed by term
      4. CoercedColumnSums    anything np.asarray can turn into 2-D

  The first adapter that accepts the object AND returns a
  non-empty numeric result wins.  An exception inside one
  adapter only moves the chain on to the next one; if none
  succeed, extract_term_scores() returns None.
============================================================
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd
from scipy import sparse

from .exceptions import EmptyVocabularyError, TermScoreError

logger = logging.getLogger(__name__)

# returned by extract_term_scores() when no adapter could produce scores
UNAVAILABLE = None


def _with_terms(sums: np.ndarray, terms: Optional[Sequence[str]]) -> pd.Series:
    sums = np.asarray(sums, dtype=float).ravel()
    if terms is not None and len(terms) == len(sums):
        return pd.Series(sums, index=pd.Index(list(terms), name="term"), name="score")
    return pd.Series(sums, name="score")


class ColumnSumAdapter(ABC):
    name = "base"

    @abstractmethod
    def accepts(self, obj: Any) -> bool:
        ...

    @abstractmethod
    def column_sums(self, obj: Any, terms: Optional[Sequence[str]] = None) -> pd.Series:
        ...


class SparseColumnSums(ColumnSumAdapter):
    name = "sparse"

    def accepts(self, obj):
        return sparse.issparse(obj)

    def column_sums(self, obj, terms=None):
        return _with_terms(obj.sum(axis=0), terms)


class DenseColumnSums(ColumnSumAdapter):
    name = "dense"

    def accepts(self, obj):
        if isinstance(obj, pd.DataFrame):
            return True
        return isinstance(obj, np.ndarray) and obj.ndim == 2

    def column_sums(self, obj, terms=None):
        if isinstance(obj, pd.DataFrame):
            sums = obj.to_numpy(dtype=float).sum(axis=0)
            names = terms if terms is not None else [str(c) for c in obj.columns]
            return _with_terms(sums, names)
        return _with_terms(obj.astype(float).sum(axis=0), terms)


class NamedVectorScores(ColumnSumAdapter):
    """Already per-term scores: returned unchanged, just as floats."""

    name = "named-vector"

    def accepts(self, obj):
        if isinstance(obj, pd.Series):
            return not isinstance(obj.index, pd.RangeIndex)
        return isinstance(obj, Mapping)

    def column_sums(self, obj, terms=None):
        series = pd.Series(obj, dtype=float)
        series.index = pd.Index([str(t) for t in series.index], name="term")
        return series.rename("score")


class CoercedColumnSums(ColumnSumAdapter):
    name = "coerced"

    def accepts(self, obj):
        return obj is not None

    def column_sums(self, obj, terms=None):
        matrix = np.asarray(obj, dtype=float)
        if matrix.ndim != 2:
            raise ValueError(f"coerced to {matrix.ndim}-D, need a 2-D matrix")
        return _with_terms(matrix.sum(axis=0), terms)


DEFAULT_ADAPTERS = (
    SparseColumnSums(),
    DenseColumnSums(),
    NamedVectorScores(),
    CoercedColumnSums(),
)


def extract_term_scores(
    obj: Any,
    terms: Optional[Sequence[str]] = None,
    adapters: Sequence[ColumnSumAdapter] = DEFAULT_ADAPTERS,
) -> Optional[pd.Series]:
    """Per-column sums of ``obj``, named by ``terms`` when lengths agree.

    Returns ``UNAVAILABLE`` (None) when no adapter yields a non-empty result.
    """
    for adapter in adapters:
        try:
            if not adapter.accepts(obj):
                continue
            scores = adapter.column_sums(obj, terms)
        except Exception as e:
            logger.debug("term-score adapter %r failed: %s", adapter.name, e)
            continue
        if scores is None or scores.empty:
            logger.debug("term-score adapter %r gave an empty result", adapter.name)
            continue
        return scores
    return UNAVAILABLE


# ============================================================
# CALLER: TF-IDF → DTM → vocabulary term counts
# ============================================================
@dataclass
class TermScores:
    scores: pd.Series  # sorted descending, indexed by term
    source: str        # "tfidf", "dtm" or "vocabulary"

    def __len__(self) -> int:
        return len(self.scores)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "term": [str(t) for t in self.scores.index],
            "score": self.scores.to_numpy(dtype=float),
        })

    def top(self, n: int) -> pd.DataFrame:
        return self.to_frame().head(n)


def _sorted(scores: pd.Series) -> pd.Series:
    return scores.sort_values(ascending=False, kind="mergesort")


def compute_term_scores(tfidf: Any, dtm: Any, vocabulary) -> TermScores:
    terms = vocabulary.terms if vocabulary is not None else None
    if terms is not None and len(terms) == 0:
        raise EmptyVocabularyError(
            "Cannot score terms: the vocabulary has no terms", stage="term_scores"
        )
    width = getattr(tfidf, "shape", (0, None))
    if len(width) == 2 and width[1] == 0:
        raise EmptyVocabularyError(
            "Cannot score terms: the TF-IDF matrix has zero columns",
            stage="term_scores",
        )

    scores = extract_term_scores(tfidf, terms)
    if scores is not UNAVAILABLE:
        logger.info("Using TF-IDF column sums for term scores.")
        return TermScores(_sorted(scores), "tfidf")

    scores = extract_term_scores(dtm, terms)
    if scores is not UNAVAILABLE:
        logger.info("Using DTM counts for term scores (fallback).")
        return TermScores(_sorted(scores), "dtm")

    counts = getattr(vocabulary, "term_count", None)
    if counts is not None and len(counts) > 0:
        logger.warning("⚠ Falling back to vocabulary term_count for term scores.")
        return TermScores(_sorted(counts.astype(float).rename("score")), "vocabulary")

    raise TermScoreError(
        "Cannot compute term scores from the TF-IDF matrix, the DTM or the vocabulary",
        stage="term_scores",
    )
