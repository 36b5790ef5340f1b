#!/usr/bin/env python3
"""
validate_content.py - Audit the content files before shipping them.

Loads words, passages and grammar, then reports per passage how much of its
vocabulary resolves against the word list.

Usage:
  python scripts/validate_content.py
  python scripts/validate_content.py --data-dir data --output passage_report.csv
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import pandas as pd

from shobdohub.classroom import ContentLoader, WordLibrary
from shobdohub.config import load_settings
from shobdohub.viewer import WordLookupIndex

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_passage_report(loader: ContentLoader) -> pd.DataFrame:
    """One row per passage with vocabulary resolution counts."""
    rows = []
    for passage in loader.passages:
        index = WordLookupIndex.build(passage.words, loader.words)
        unresolved = [token for token in passage.words if index.resolve(token) is None]
        rows.append({
            "passage_id": passage.id,
            "title": passage.title,
            "vocabulary": len(passage.words),
            "resolved": len(passage.words) - len(unresolved),
            "unresolved": len(unresolved),
            "unresolved_tokens": ", ".join(unresolved),
            "has_english": bool(passage.english_text),
        })

    columns = ["passage_id", "title", "vocabulary", "resolved", "unresolved", "unresolved_tokens", "has_english"]
    return pd.DataFrame(rows, columns=columns)


def print_summary(loader: ContentLoader, report: pd.DataFrame):
    library = WordLibrary(loader.words)

    print("\n" + "=" * 50)
    print("CONTENT SUMMARY")
    print("=" * 50)
    print(f"Words:     {len(library)} ({len(library.letters())} letters)")
    for difficulty, count in pd.Series([w.difficulty.value for w in loader.words]).value_counts().items():
        print(f"  {difficulty:<8} {count}")
    print(f"Passages:  {len(loader.passages)}")
    print(f"Chapters:  {len(loader.chapters)}")

    if not report.empty:
        total = int(report["vocabulary"].sum())
        missing = int(report["unresolved"].sum())
        print(f"Passage vocabulary: {total} tokens, {missing} unresolved")
        worst = report[report["unresolved"] > 0].sort_values("unresolved", ascending=False).head(5)
        for _, row in worst.iterrows():
            print(f"  Passage {row['passage_id']}: {row['unresolved_tokens']}")


def main():
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Validate ShobdoHub content files",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=settings.data_dir,
        help="Directory holding words.txt, passages.txt and grammar files"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional CSV path for the per-passage report"
    )

    args = parser.parse_args()
    logging.getLogger().setLevel(settings.log_level_value)

    logger.info(f"Loading content from {args.data_dir}...")
    loader = ContentLoader(args.data_dir)
    ok = loader.load_all()

    report = build_passage_report(loader)
    print_summary(loader, report)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        report.to_csv(args.output, index=False)
        logger.info(f"Wrote passage report to {args.output}")

    if not ok:
        logger.error(loader.error)
        sys.exit(1)


if __name__ == "__main__":
    main()
