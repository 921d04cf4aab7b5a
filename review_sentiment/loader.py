"""
============================================================
  LOAD & CLEAN REVIEWS
============================================================
  Reads the review CSV and returns the cleaned review text as
  a Series of non-empty strings:
    - invalid bytes are replaced, never fatal
    - embedded tabs / CR / LF collapse to a single space
    - leading / trailing whitespace trimmed
    - missing and empty reviews dropped
============================================================
"""

import logging
import re
from pathlib import Path
from typing import Union

import pandas as pd

from .exceptions import InputDataError

logger = logging.getLogger(__name__)

_CONTROL_WS = re.compile(r"[\t\r\n]+")


def clean_review(text) -> str:
    if pd.isna(text):
        return ""
    text = str(text)
    # lone surrogates and the like cannot be written back out as UTF-8
    text = text.encode("utf-8", errors="replace").decode("utf-8")
    text = _CONTROL_WS.sub(" ", text)
    return text.strip()


def clean_reviews(raw: pd.Series) -> pd.Series:
    cleaned = raw.map(clean_review)
    cleaned = cleaned[cleaned.map(len) > 0]
    return cleaned.reset_index(drop=True).astype(object)


def load_reviews(path: Union[str, Path], text_column: str = "Review") -> pd.Series:
    path = Path(path)
    if not path.is_file():
        raise InputDataError(
            f"Review data not found: {path}", stage="loader", details={"path": str(path)}
        )

    try:
        df = pd.read_csv(
            path, encoding="utf-8", encoding_errors="replace", dtype={text_column: str}
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, OSError) as e:
        raise InputDataError(
            f"Could not read review data from {path}: {e}",
            stage="loader",
            details={"path": str(path)},
        ) from e

    df.columns = df.columns.str.strip()
    logger.info("Rows: %s  Columns: %s", f"{len(df):,}", ", ".join(df.columns))

    if text_column not in df.columns:
        raise InputDataError(
            f"Text column {text_column!r} missing from {path.name}",
            stage="loader",
            details={"columns": list(df.columns)},
        )

    reviews = clean_reviews(df[text_column]).rename(text_column)
    logger.info("✔ After dropping NA/empty reviews: %s rows", f"{len(reviews):,}")

    if reviews.empty:
        raise InputDataError(
            f"No non-empty reviews in column {text_column!r}", stage="loader"
        )
    return reviews
