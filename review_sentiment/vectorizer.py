"""
============================================================
  VOCABULARY, DOCUMENT-TERM MATRIX & TF-IDF
============================================================
  1. tokenize every review (lowercase, word boundaries)
  2. count term / document frequencies, English stopwords out
  3. prune:  term_count >= term_count_min
             doc_proportion_min <= doc share <= doc_proportion_max
  4. re-count the corpus against the pruned vocabulary  → DTM
  5. fit an L2-normalised TF-IDF transformer on the DTM → TF-IDF

  The pruned vocabulary and the fitted transformer are pickled
  with joblib so later scripts can vectorize new text the same
  way without refitting.
============================================================
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import joblib
import numpy as np
import pandas as pd
from scipy import sparse
from sklearn.feature_extraction.text import CountVectorizer, TfidfTransformer

from .config import VocabularySettings
from .exceptions import ArtifactError, EmptyVocabularyError
from .nltk_resources import english_stopwords

logger = logging.getLogger(__name__)

VOCABULARY_FILE = "vocabulary.pkl"
TRANSFORMER_FILE = "tfidf_transformer.pkl"

_WORD = re.compile(r"\b\w+\b")


def tokenize(text: str) -> List[str]:
    return _WORD.findall(text.lower())


class StopwordTokenizer:
    """Picklable analyzer: tokenize, then drop stopwords."""

    def __init__(self, stop_words: Iterable[str] = ()):
        self.stop_words = frozenset(w.lower() for w in stop_words)

    def __call__(self, text: str) -> List[str]:
        return [tok for tok in tokenize(text) if tok not in self.stop_words]


@dataclass
class Vocabulary:
    """Term statistics over a corpus.

    ``stats`` has one row per term with columns ``term``, ``term_count``
    (total occurrences) and ``doc_count`` (documents containing the term),
    ordered by descending ``term_count``.  ``document_count`` is the size of
    the corpus the statistics were computed on; pruning keeps it, so pruning
    twice with the same thresholds gives the same terms.
    """

    stats: pd.DataFrame
    document_count: int
    stop_words: frozenset = frozenset()

    def __len__(self) -> int:
        return len(self.stats)

    @property
    def terms(self) -> List[str]:
        return self.stats["term"].tolist()

    @property
    def term_count(self) -> pd.Series:
        return self.stats.set_index("term")["term_count"]

    @property
    def doc_proportion(self) -> pd.Series:
        counts = self.stats.set_index("term")["doc_count"]
        if self.document_count == 0:
            return counts.astype(float)
        return counts / self.document_count

    def prune(
        self,
        term_count_min: int = 1,
        doc_proportion_min: float = 0.0,
        doc_proportion_max: float = 1.0,
    ) -> "Vocabulary":
        share = self.doc_proportion.to_numpy()
        keep = (
            (self.stats["term_count"].to_numpy() >= term_count_min)
            & (share >= doc_proportion_min)
            & (share <= doc_proportion_max)
        )
        pruned = self.stats.loc[keep].reset_index(drop=True)
        return Vocabulary(pruned, self.document_count, self.stop_words)

    def prune_with(self, settings: VocabularySettings) -> "Vocabulary":
        return self.prune(
            term_count_min=settings.term_count_min,
            doc_proportion_min=settings.doc_proportion_min,
            doc_proportion_max=settings.doc_proportion_max,
        )


@dataclass
class VectorizedCorpus:
    vocabulary: Vocabulary
    dtm: sparse.csr_matrix
    tfidf: sparse.csr_matrix
    transformer: TfidfTransformer

    @property
    def terms(self) -> List[str]:
        return self.vocabulary.terms


def build_vocabulary(
    texts: Iterable[str], stop_words: Optional[Iterable[str]] = None
) -> Vocabulary:
    texts = list(texts)
    if stop_words is None:
        stop_words = english_stopwords()
    analyzer = StopwordTokenizer(stop_words)

    counter = CountVectorizer(analyzer=analyzer)
    try:
        counts = counter.fit_transform(texts)
    except ValueError as e:
        # sklearn refuses to fit when no document yields a single token
        raise EmptyVocabularyError(
            "No terms left after tokenization and stopword removal "
            f"({len(texts)} documents)",
            details={"documents": len(texts)},
        ) from e

    stats = pd.DataFrame({
        "term": counter.get_feature_names_out(),
        "term_count": np.asarray(counts.sum(axis=0)).ravel().astype(np.int64),
        "doc_count": np.asarray((counts > 0).sum(axis=0)).ravel().astype(np.int64),
    })
    stats = stats.sort_values(
        ["term_count", "term"], ascending=[False, True], kind="mergesort"
    ).reset_index(drop=True)
    return Vocabulary(stats, len(texts), analyzer.stop_words)


def build_document_term_matrix(
    texts: Iterable[str], vocabulary: Vocabulary
) -> sparse.csr_matrix:
    if len(vocabulary) == 0:
        raise EmptyVocabularyError(
            "Cannot build a document-term matrix from an empty vocabulary; "
            "the pruning thresholds are too aggressive for this corpus",
            details={"documents": vocabulary.document_count},
        )
    counter = CountVectorizer(analyzer=tokenize, vocabulary=vocabulary.terms)
    return counter.fit_transform(list(texts)).tocsr()


def fit_tfidf(dtm: sparse.spmatrix):
    """Fit an L2-normalised TF-IDF transformer; returns (transformer, tfidf)."""
    if dtm.shape[1] == 0:
        raise EmptyVocabularyError("Document-term matrix has zero columns")
    transformer = TfidfTransformer(norm="l2")
    tfidf = transformer.fit_transform(dtm).tocsr()
    return transformer, tfidf


def vectorize_corpus(
    texts: Iterable[str],
    settings: VocabularySettings,
    stop_words: Optional[Iterable[str]] = None,
) -> VectorizedCorpus:
    texts = list(texts)

    vocab = build_vocabulary(texts, stop_words).prune_with(settings)
    logger.info("Vocabulary size after pruning: %s", f"{len(vocab):,}")
    if len(vocab) == 0:
        raise EmptyVocabularyError(
            f"Vocabulary is empty after pruning ({settings.describe()}) "
            f"on {len(texts):,} documents; relax the thresholds",
            details={"documents": len(texts), "settings": settings.describe()},
        )

    dtm = build_document_term_matrix(texts, vocab)
    logger.info("DTM dims: %d x %d", *dtm.shape)

    transformer, tfidf = fit_tfidf(dtm)
    logger.info("TF-IDF dims: %d x %d", *tfidf.shape)

    return VectorizedCorpus(vocab, dtm, tfidf, transformer)


def transform_texts(
    texts: Iterable[str], vocabulary: Vocabulary, transformer: TfidfTransformer
) -> sparse.csr_matrix:
    """TF-IDF weights for new documents using a persisted vocabulary/transformer."""
    dtm = build_document_term_matrix(texts, vocabulary)
    return transformer.transform(dtm).tocsr()


# ============================================================
# ARTIFACTS
# ============================================================
def save_artifacts(corpus: VectorizedCorpus, models_dir: Union[str, Path]) -> Dict[str, Path]:
    models_dir = Path(models_dir)
    models_dir.mkdir(parents=True, exist_ok=True)

    paths = {
        "vocabulary": models_dir / VOCABULARY_FILE,
        "tfidf_transformer": models_dir / TRANSFORMER_FILE,
    }
    joblib.dump(corpus.vocabulary, paths["vocabulary"])
    logger.info("💾 saved vocabulary  →  %s", paths["vocabulary"])
    joblib.dump(corpus.transformer, paths["tfidf_transformer"])
    logger.info("💾 saved TF-IDF transformer  →  %s", paths["tfidf_transformer"])
    return paths


def _load(path: Union[str, Path], expected: type, what: str):
    path = Path(path)
    if not path.is_file():
        raise ArtifactError(f"{what} artifact not found: {path}", stage="artifacts")
    try:
        obj = joblib.load(path)
    except Exception as e:
        raise ArtifactError(
            f"Could not load {what} from {path}: {e}", stage="artifacts"
        ) from e
    if not isinstance(obj, expected):
        raise ArtifactError(
            f"{path} holds a {type(obj).__name__}, expected {expected.__name__}",
            stage="artifacts",
        )
    return obj


def load_vocabulary(path: Union[str, Path]) -> Vocabulary:
    return _load(path, Vocabulary, "vocabulary")


def load_tfidf_transformer(path: Union[str, Path]) -> TfidfTransformer:
    return _load(path, TfidfTransformer, "TF-IDF transformer")
