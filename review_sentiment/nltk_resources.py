import logging

import nltk

logger = logging.getLogger(__name__)


def ensure_nltk_resource(resource_path: str, package: str) -> None:
    """Download an NLTK data package the first time it is needed.

    ``resource_path`` is what ``nltk.data.find`` looks up, e.g.
    ``"corpora/stopwords"``; ``package`` is the downloader id.
    """
    try:
        nltk.data.find(resource_path)
    except LookupError:
        logger.info("⬇ downloading NLTK resource %r", package)
        nltk.download(package, quiet=True)
        # raises LookupError again if the download failed
        nltk.data.find(resource_path)


def english_stopwords() -> frozenset:
    ensure_nltk_resource("corpora/stopwords", "stopwords")
    from nltk.corpus import stopwords

    return frozenset(stopwords.words("english"))
