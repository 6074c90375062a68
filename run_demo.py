"""Convenience shim to run the Elasticsearch users demo."""

from __future__ import annotations

import sys

from src.search.runner import main as demo_main


if __name__ == "__main__":
    demo_main(sys.argv[1:])
