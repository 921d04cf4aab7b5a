import matplotlib.pyplot as plt
import pandas as pd
import pytest

from review_sentiment import figures
from review_sentiment.exceptions import EmptyVocabularyError
from review_sentiment.lexicons import NRC_CATEGORIES
from review_sentiment.term_scores import TermScores


@pytest.fixture
def term_scores():
    terms = [f"term{i}" for i in range(30)]
    return TermScores(pd.Series([30.0 - i for i in range(30)], index=terms), "tfidf")


@pytest.fixture
def sentiment():
    return pd.DataFrame({
        "syuzhet": [0.75, -0.5, 0.0, 1.25, 0.5],
        "bing": [2.0, -1.0, 0.0, 1.0, 1.0],
        "afinn": [6.0, -3.0, 0.0, 4.0, 2.0],
        "label_syuzhet": ["positive", "negative", "neutral", "positive", "positive"],
        "label_bing": ["positive", "negative", "neutral", "positive", "positive"],
        "label_afinn": ["positive", "negative", "neutral", "positive", "positive"],
    })


@pytest.mark.parametrize("n_terms, expected", [
    (1000, 250), (250, 250), (180, 180), (100, 100), (40, 40), (1, 1),
])
def test_wordcloud_word_count(n_terms, expected):
    assert figures.wordcloud_word_count(n_terms) == expected


def test_sentiment_distribution_counts_sum_to_corpus(sentiment):
    dist = figures.sentiment_distribution(sentiment, "bing")
    assert dist["count"].sum() == len(sentiment)
    assert dist["label"].iloc[0] == "positive"
    assert dist["percent"].tolist() == [60.0, 20.0, 20.0]


class TestCharts:
    def test_every_chart_is_written_and_closed(self, config, term_scores, sentiment):
        totals = pd.Series(range(len(NRC_CATEGORIES)), index=NRC_CATEGORIES)
        paths = [
            figures.chart_01_wordcloud(term_scores, config),
            figures.chart_02_top_terms(term_scores, config),
            figures.chart_03_sentiment_histograms(sentiment, config),
            figures.chart_04_sentiment_pie(sentiment, config),
            figures.chart_05_emotion_counts(totals, config),
        ]
        assert [p.name for p in paths] == [
            "wordcloud_top_terms.png",
            "top_terms_tfidf_top20.png",
            "sentiment_hist_lexicons.png",
            "sentiment_distribution_bing.png",
            "nrc_emotion_counts.png",
        ]
        for path in paths:
            assert path.parent == config.figures_dir
            assert path.stat().st_size > 0
        assert plt.get_fignums() == []

    def test_svg_copies(self, config, sentiment):
        config = config.with_overrides(export_svg=True)
        path = figures.chart_04_sentiment_pie(sentiment, config)
        assert path.with_suffix(".svg").is_file()

    def test_histogram_handles_constant_scores(self, config):
        flat = pd.DataFrame({"syuzhet": [0.0] * 4, "bing": [0.0] * 4, "afinn": [1.0] * 4})
        assert figures.chart_03_sentiment_histograms(flat, config).is_file()

    def test_empty_term_scores_refuse_to_plot(self, config):
        empty = TermScores(pd.Series([], dtype=float), "tfidf")
        with pytest.raises(EmptyVocabularyError):
            figures.chart_02_top_terms(empty, config)

    def test_missing_wordcloud_package_skips_only_that_chart(self, config, term_scores,
                                                              monkeypatch):
        monkeypatch.setattr(figures, "WordCloud", None)
        assert figures.chart_01_wordcloud(term_scores, config) is None
        assert not (config.figures_dir / "wordcloud_top_terms.png").exists()
