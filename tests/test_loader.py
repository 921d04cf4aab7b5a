import numpy as np
import pandas as pd
import pytest

from review_sentiment.exceptions import InputDataError
from review_sentiment.loader import clean_review, clean_reviews, load_reviews


class TestCleanReview:
    def test_control_characters_become_single_spaces(self):
        assert clean_review("nice\troom\r\nclean\n\nbed") == "nice room clean bed"

    def test_trims_whitespace(self):
        assert clean_review("   quiet street  ") == "quiet street"

    def test_missing_values_are_empty(self):
        assert clean_review(None) == ""
        assert clean_review(np.nan) == ""

    def test_invalid_code_points_are_replaced(self):
        assert clean_review("bad \udcff byte") == "bad ? byte"


class TestCleanReviews:
    def test_drops_empty_and_missing_rows(self):
        raw = pd.Series(["good", "", "   ", None, "\t\n", "bad"])
        cleaned = clean_reviews(raw)
        assert cleaned.tolist() == ["good", "bad"]

    def test_never_grows_and_keeps_only_non_empty(self):
        raw = pd.Series(["a", " ", "b\tc", np.nan, "  d  "])
        cleaned = clean_reviews(raw)
        assert len(cleaned) <= len(raw)
        assert all(len(t.strip()) > 0 for t in cleaned)


class TestLoadReviews:
    def test_loads_and_cleans(self, tmp_path):
        path = tmp_path / "reviews.csv"
        pd.DataFrame({"Review": ["Great\nhotel", "", "Awful"], "Rating": [5, 3, 1]}).to_csv(
            path, index=False
        )
        reviews = load_reviews(path)
        assert reviews.tolist() == ["Great hotel", "Awful"]
        assert reviews.name == "Review"

    def test_tolerates_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin.csv"
        path.write_bytes(b"Review\ncaf\xe9 was nice\nok\n")
        reviews = load_reviews(path)
        assert reviews.tolist() == ["caf\ufffd was nice", "ok"]

    def test_missing_file_is_fatal(self, tmp_path):
        with pytest.raises(InputDataError, match="not found"):
            load_reviews(tmp_path / "nope.csv")

    def test_missing_text_column_is_fatal(self, tmp_path):
        path = tmp_path / "reviews.csv"
        pd.DataFrame({"Comment": ["hi"]}).to_csv(path, index=False)
        with pytest.raises(InputDataError, match="'Review' missing"):
            load_reviews(path)

    def test_custom_text_column(self, tmp_path):
        path = tmp_path / "reviews.csv"
        pd.DataFrame({"body": ["one", "two"]}).to_csv(path, index=False)
        assert load_reviews(path, text_column="body").tolist() == ["one", "two"]

    def test_all_empty_reviews_is_fatal(self, tmp_path):
        path = tmp_path / "reviews.csv"
        pd.DataFrame({"Review": ["", " "], "Rating": [1, 2]}).to_csv(path, index=False)
        with pytest.raises(InputDataError, match="No non-empty reviews"):
            load_reviews(path)

    def test_numeric_reviews_stay_verbatim(self, tmp_path):
        path = tmp_path / "reviews.csv"
        path.write_text("Review,Rating\n5,1\n10,2\n007,3\n")
        assert load_reviews(path).tolist() == ["5", "10", "007"]
