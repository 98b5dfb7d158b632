"""Word count pipeline example

Reads lines of text, splits them into words, counts each word and
writes one ``word: count`` line per distinct word.

Usage:
    python -m dataflow_monitor.wordcount --input kinglear.txt --output counts.txt
"""

import argparse
import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

_WORD_SEPARATOR = re.compile(r"[^a-zA-Z']+")


@dataclass
class WordCounts:
    """Result of counting a stream of lines"""

    counts: Counter = field(default_factory=Counter)
    empty_lines: int = 0


def extract_words(line: str) -> list[str]:
    """Split a line into words, dropping empty tokens"""
    return [word for word in _WORD_SEPARATOR.split(line) if word]


def count_words(lines: Iterable[str]) -> WordCounts:
    result = WordCounts()
    for line in lines:
        if not line.strip():
            result.empty_lines += 1
        result.counts.update(extract_words(line))
    return result


def format_counts(counts: Counter) -> Iterator[str]:
    for word, count in counts.items():
        yield f"{word}: {count}"


def run(input_path: str, output_path: str) -> WordCounts:
    """Read -> count -> format -> write"""
    with open(input_path, "r", encoding="utf-8") as f:
        result = count_words(f)

    with open(output_path, "w", encoding="utf-8") as f:
        for line in format_counts(result.counts):
            f.write(line + "\n")

    logger.info(
        "Counted %d distinct words (%d empty lines) from %s",
        len(result.counts),
        result.empty_lines,
        input_path,
    )
    return result


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="wordcount", description="Count words in a text file")
    parser.add_argument("--input", required=True, help="Path of the file to read from")
    parser.add_argument("--output", required=True, help="Path of the file to write to")
    args = parser.parse_args(argv)

    run(args.input, args.output)


if __name__ == "__main__":
    main()
