"""
Command-line entry point.

    review-sentiment --data data/tripadvisor_hotel_reviews.csv --svg
    python -m review_sentiment --log-level DEBUG
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import PipelineConfig
from .exceptions import PipelineError
from .pipeline import run_pipeline

logger = logging.getLogger("review_sentiment")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="review-sentiment",
        description="Exploratory TF-IDF and lexicon sentiment analysis of hotel reviews.",
    )
    parser.add_argument("--data", dest="data_path", help="review CSV file")
    parser.add_argument("--text-column", help="column holding the review text")
    parser.add_argument("--figures-dir", help="folder for PNG/SVG figures")
    parser.add_argument("--models-dir", help="folder for vocabulary / transformer artifacts")
    parser.add_argument("--reports-dir", help="folder for CSV reports")
    parser.add_argument("--project-root", help="base for relative paths")
    parser.add_argument("--env-file", help=".env file with REVIEW_SENTIMENT_* settings")
    parser.add_argument("--svg", action="store_true", help="also write an SVG of every figure")
    parser.add_argument("--no-progress", action="store_true", help="hide progress bars")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = PipelineConfig.from_env(
            project_root=args.project_root,
            env_file=args.env_file,
            data_path=args.data_path,
            text_column=args.text_column,
            figures_dir=args.figures_dir,
            models_dir=args.models_dir,
            reports_dir=args.reports_dir,
            export_svg=args.svg,
            show_progress=not args.no_progress,
        )
        run_pipeline(config)
    except PipelineError as e:
        logger.error("❌ %s failed: %s", e.stage or "pipeline", e.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
