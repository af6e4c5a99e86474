#!/usr/bin/env python3
"""Print the 256-bit argument words of raw calldata, one per line."""

from pathlib import Path
import sys

SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from crunner.core.utils import split_calldata_words
from crunner.exceptions import EncodingError


def print_words(calldata: str) -> None:
    """Print the selector followed by each argument word with its index."""
    data = calldata if calldata.startswith("0x") else f"0x{calldata}"
    words = split_calldata_words(data)

    print(f"Selector: {data[:10]}")
    for index, word in enumerate(words):
        print(f"[{index}] {word} (uint={int(word, 16)})")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(f"usage: {Path(sys.argv[0]).name} <calldata>")
        sys.exit(1)
    try:
        print_words(sys.argv[1])
    except EncodingError as exc:
        print(f"❌ Error: {exc}")
        sys.exit(1)
