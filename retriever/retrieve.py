# Path: retriever/retrieve.py
"""
Retriever - Main Entry Point

Usage:
    retriever export [directory] [--exclude Type1,Type2] [-w]
    retriever fetch -t ApexClass [-n Name] [-d dir] [-u] [-p] [-x package.xml] [-w]

    python -m retriever.retrieve fetch -t ApexClass
"""

import asyncio
import sys

from retriever.cli.retrieve_cli import main
from retriever.core.logger import configure_logging


def run() -> None:
    """Console script entry: run the CLI and exit with its status."""
    configure_logging()
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\n\nRetrieval cancelled by user.")
        sys.exit(130)


if __name__ == '__main__':
    run()
