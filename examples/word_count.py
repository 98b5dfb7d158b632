"""Word Count Example

Usage:
    python examples/word_count.py --input kinglear.txt --output counts.txt
"""

import logging

from dataflow_monitor.wordcount import main

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
