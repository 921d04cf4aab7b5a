import matplotlib

matplotlib.use("Agg")

import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from review_sentiment.config import PipelineConfig, VocabularySettings  # noqa: E402
from review_sentiment.lexicons import DictionaryScorer  # noqa: E402

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "was", "is", "it", "we", "i", "to", "of", "in",
    "at", "our", "my", "very", "but", "for", "with", "this", "again",
})

HOTEL_REVIEWS = [
    "Great stay, loved it!",
    "Terrible, never again.",
    "It was fine.",
    "The room was clean and the staff were friendly.",
    "Dirty room, rude staff, terrible breakfast.",
    "Lovely pool, great breakfast, friendly staff.",
    "The location was great but the room was noisy.",
    "Clean room, comfortable bed, great location.",
]


@pytest.fixture
def stop_words():
    return STOP_WORDS


@pytest.fixture
def reviews():
    return list(HOTEL_REVIEWS)


@pytest.fixture
def bing_scorer():
    return DictionaryScorer("bing", {
        "great": 1, "loved": 1, "lovely": 1, "clean": 1, "friendly": 1,
        "comfortable": 1, "terrible": -1, "dirty": -1, "rude": -1, "noisy": -1,
    })


@pytest.fixture
def scorers(bing_scorer):
    return {
        "syuzhet": DictionaryScorer("syuzhet", {
            "great": 0.75, "loved": 0.75, "lovely": 0.75, "clean": 0.5,
            "friendly": 0.5, "terrible": -0.75, "dirty": -0.6, "rude": -0.75,
        }),
        "bing": bing_scorer,
        "afinn": DictionaryScorer("afinn", {
            "great": 3, "loved": 3, "lovely": 3, "clean": 2, "friendly": 2,
            "terrible": -3, "dirty": -2, "rude": -2, "noisy": -1,
        }),
    }


@pytest.fixture
def emotion_fn():
    lexicon = {
        "great": {"joy": 1, "positive": 1},
        "loved": {"joy": 1, "trust": 1, "positive": 1},
        "terrible": {"anger": 1, "fear": 1, "negative": 1},
        "rude": {"anger": 1, "disgust": 1, "negative": 1},
        "friendly": {"trust": 1, "positive": 1},
    }

    def counts(text):
        totals = {}
        for word in text.lower().replace(",", " ").replace(".", " ").split():
            for emotion, n in lexicon.get(word.strip("!"), {}).items():
                totals[emotion] = totals.get(emotion, 0) + n
        return totals

    return counts


@pytest.fixture
def reviews_csv(tmp_path, reviews):
    path = tmp_path / "hotel_reviews.csv"
    pd.DataFrame({"Review": reviews, "Rating": range(1, len(reviews) + 1)}).to_csv(
        path, index=False
    )
    return path


@pytest.fixture
def config(tmp_path, reviews_csv):
    return PipelineConfig(
        data_path=reviews_csv,
        figures_dir=tmp_path / "outputs" / "figures",
        models_dir=tmp_path / "outputs" / "models",
        reports_dir=tmp_path / "reports",
        vocabulary=VocabularySettings(
            term_count_min=1, doc_proportion_min=0.0, doc_proportion_max=1.0
        ),
        show_progress=False,
        wordcloud_size=200,
        dpi=50,
    )
