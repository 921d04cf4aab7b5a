"""
============================================================
  FIGURES
============================================================
  Charts produced (PNG, plus SVG when export_svg is set):
    01. wordcloud_top_terms.png           word cloud of top terms
    02. top_terms_tfidf_top20.png         top-20 term bar chart
    03. sentiment_hist_lexicons.png       score histograms + KDE
    04. sentiment_distribution_bing.png   label pie chart
    05. nrc_emotion_counts.png            NRC emotion totals

  Every figure is closed right after it is written.
============================================================
"""

import logging
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402
from scipy.stats import gaussian_kde  # noqa: E402

from .config import LEXICON_METHODS, PipelineConfig  # noqa: E402
from .exceptions import EmptyVocabularyError  # noqa: E402
from .lexicons import label_counts  # noqa: E402
from .term_scores import TermScores  # noqa: E402

try:
    from wordcloud import WordCloud
except ImportError:  # optional renderer; chart 01 is skipped without it
    WordCloud = None

logger = logging.getLogger(__name__)

COLOURS = {
    "navy": "#1B2845",
    "hist": "#377eb8",
    "kde": "#e41a1c",
    "caption": "#7f7f7f",
    "subtitle": "#4d4d4d",
    "white": "#FFFFFF",
}

SCORE_LABELS = {
    "tfidf": "TF-IDF sum",
    "dtm": "Term count",
    "vocabulary": "Term count",
}


# ============================================================
# HELPERS
# ============================================================
def setup_plot():
    plt.style.use("seaborn-v0_8-whitegrid")
    plt.rcParams.update({
        "font.family": "sans-serif",
        "font.size": 11,
        "axes.titlesize": 14,
        "axes.titleweight": "bold",
        "axes.labelsize": 11,
        "figure.facecolor": COLOURS["white"],
        "axes.facecolor": COLOURS["white"],
        "axes.spines.top": False,
        "axes.spines.right": False,
    })


def save_fig(fig, name: str, config: PipelineConfig, transparent: bool = False) -> Path:
    config.figures_dir.mkdir(parents=True, exist_ok=True)
    path = config.figures_dir / name
    try:
        fig.savefig(path, dpi=config.dpi, bbox_inches="tight", transparent=transparent)
        if config.export_svg:
            fig.savefig(path.with_suffix(".svg"), bbox_inches="tight", transparent=transparent)
    finally:
        plt.close(fig)
    logger.info("💾 saved  →  %s", path)
    return path


def _require_terms(term_scores: TermScores):
    if len(term_scores) == 0:
        raise EmptyVocabularyError(
            "No term scores to plot; the vocabulary is empty", stage="figures"
        )


def wordcloud_word_count(n_terms: int, max_words: int = 250, min_words: int = 100) -> int:
    """max(min(max_words, n), min_words), never more than the n terms available."""
    return min(n_terms, max(min(max_words, n_terms), min_words))


def sentiment_distribution(sentiment: pd.DataFrame, method: str = "bing") -> pd.DataFrame:
    counts = label_counts(sentiment[f"label_{method}"])
    dist = counts.rename_axis("label").reset_index()
    dist["percent"] = (100 * dist["count"] / dist["count"].sum()).round(1)
    return dist


# ── 01  Word cloud of the top terms
def chart_01_wordcloud(term_scores: TermScores, config: PipelineConfig) -> Optional[Path]:
    if WordCloud is None:
        logger.warning("⚠ wordcloud package not installed, skipping word cloud.")
        return None
    _require_terms(term_scores)

    n_words = wordcloud_word_count(
        len(term_scores), config.wordcloud_max_words, config.wordcloud_min_words
    )
    freqs = {
        str(term): float(score)
        for term, score in term_scores.scores.head(n_words).items()
        if score > 0
    }
    if not freqs:
        logger.warning("⚠ No positive term scores, skipping word cloud.")
        return None

    size = config.wordcloud_size
    wc = WordCloud(
        width=size, height=size, mode="RGBA", background_color=None,
        colormap="Dark2", max_words=n_words, prefer_horizontal=0.8,
        random_state=123,
    ).generate_from_frequencies(freqs)

    fig, ax = plt.subplots(figsize=(size / config.dpi, size / config.dpi))
    ax.imshow(wc, interpolation="bilinear")
    ax.axis("off")
    fig.subplots_adjust(left=0, right=1, top=1, bottom=0)
    return save_fig(fig, "wordcloud_top_terms.png", config, transparent=True)


# ── 02  Top-N terms bar chart
def chart_02_top_terms(term_scores: TermScores, config: PipelineConfig) -> Path:
    setup_plot()
    _require_terms(term_scores)
    n = config.top_n_terms
    top = term_scores.top(n).iloc[::-1]  # horizontal bar → highest at the top
    score_label = SCORE_LABELS.get(term_scores.source, "Score")

    norm = plt.Normalize(top["score"].min(), top["score"].max())
    colours = plt.cm.RdPu(0.15 + 0.7 * norm(top["score"].to_numpy()))

    fig, ax = plt.subplots(figsize=(10, 7))
    fig.suptitle(f"Top {n} Terms by {score_label} (sum across corpus)",
                 fontsize=16, fontweight="bold", color=COLOURS["navy"])
    ax.set_title("Higher values indicate more informative terms",
                 fontsize=11, fontweight="normal", color=COLOURS["subtitle"])

    bars = ax.barh(top["term"], top["score"], color=colours, edgecolor="white", height=0.7)
    for bar, val in zip(bars, top["score"]):
        ax.text(bar.get_width(), bar.get_y() + bar.get_height() / 2, f" {val:.2f}",
                va="center", fontsize=10, color=COLOURS["navy"])

    ax.set_xlabel(score_label)
    ax.set_ylabel("")
    ax.margins(x=0.15)
    fig.text(0.99, 0.005, f"Vocabulary pruned: {config.vocabulary.describe()}",
             ha="right", fontsize=9, color=COLOURS["caption"])

    plt.tight_layout(rect=(0, 0.03, 1, 1))
    return save_fig(fig, "top_terms_tfidf_top20.png", config)


# ── 03  Score distribution per lexicon (histogram + KDE)
def chart_03_sentiment_histograms(sentiment: pd.DataFrame, config: PipelineConfig) -> Path:
    setup_plot()
    fig, axes = plt.subplots(1, len(LEXICON_METHODS), figsize=(12, 6))
    fig.suptitle("Sentiment Score Distribution (Syuzhet / Bing / Afinn)",
                 fontsize=16, fontweight="bold", color=COLOURS["navy"])

    for ax, method in zip(np.atleast_1d(axes), LEXICON_METHODS):
        values = sentiment[method].dropna().to_numpy(dtype=float)
        ax.hist(values, bins=60, density=True, color=COLOURS["hist"],
                alpha=0.45, edgecolor="black", linewidth=0.4)
        # a KDE needs spread; a single repeated value has none
        if np.unique(values).size > 1:
            xs = np.linspace(values.min(), values.max(), 256)
            ax.plot(xs, gaussian_kde(values)(xs), color=COLOURS["kde"], linewidth=1.2)
        ax.set_title(method)
        ax.set_xlabel("Sentiment score")
        ax.set_ylabel("Density")

    fig.text(0.5, 0.005,
             "Scales differ per panel because lexicon ranges differ.  "
             "Thresholding: >0 = positive, <0 = negative, =0 neutral",
             ha="center", fontsize=9, color=COLOURS["caption"])
    plt.tight_layout(rect=(0, 0.03, 1, 1))
    return save_fig(fig, "sentiment_hist_lexicons.png", config)


# ── 04  Label distribution pie
def chart_04_sentiment_pie(sentiment: pd.DataFrame, config: PipelineConfig) -> Path:
    setup_plot()
    method = config.pie_lexicon
    dist = sentiment_distribution(sentiment, method)
    colours = sns.color_palette("Dark2", max(3, len(dist)))

    fig, ax = plt.subplots(figsize=(7, 7))
    wedges, _, autotexts = ax.pie(
        dist["count"], colors=colours[:len(dist)], startangle=90, counterclock=False,
        autopct="%1.1f%%", pctdistance=0.6,
        wedgeprops={"edgecolor": "white", "linewidth": 0.4},
        textprops={"fontsize": 12, "fontweight": "bold", "color": "black"},
    )
    for at in autotexts:
        at.set_bbox({"boxstyle": "round,pad=0.3", "facecolor": "white",
                     "alpha": 0.95, "edgecolor": "#333333", "linewidth": 0.25})
    ax.axis("equal")

    box = {"boxstyle": "round,pad=0.4", "facecolor": "white", "alpha": 0.95,
           "edgecolor": "#333333", "linewidth": 0.25}
    fig.suptitle(f"Sentiment Distribution ({method.title()} lexicon)",
                 fontsize=16, fontweight="bold", bbox=box)
    ax.set_title("Percentages of positive, neutral, and negative reviews",
                 fontsize=11, fontweight="normal", bbox=box)
    ax.legend(wedges, dist["label"], title="Sentiment", loc="upper center",
              bbox_to_anchor=(0.5, 0.0), ncol=len(dist), frameon=True, framealpha=0.95)

    plt.tight_layout()
    return save_fig(fig, f"sentiment_distribution_{method}.png", config)


# ── 05  NRC emotion totals
def chart_05_emotion_counts(totals: pd.Series, config: PipelineConfig) -> Path:
    setup_plot()
    emotion_df = totals.sort_values(kind="mergesort")
    colours = sns.color_palette("Paired", len(emotion_df))

    fig, ax = plt.subplots(figsize=(9, 7))
    fig.suptitle("NRC Emotion Counts", fontsize=16, fontweight="bold", color=COLOURS["navy"])
    ax.set_title("Total mentions of each NRC emotion across the corpus",
                 fontsize=11, fontweight="normal", color=COLOURS["subtitle"])

    bars = ax.barh(emotion_df.index, emotion_df.values, color=colours, edgecolor="white")
    for bar, val in zip(bars, emotion_df.values):
        ax.text(bar.get_width(), bar.get_y() + bar.get_height() / 2, f" {int(val):,}",
                va="center", fontsize=10, color=COLOURS["navy"])

    ax.set_xlabel("Total mentions")
    ax.set_ylabel("")
    ax.margins(x=0.15)
    plt.tight_layout()
    return save_fig(fig, "nrc_emotion_counts.png", config)
