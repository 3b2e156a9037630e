# Path: retriever/cli/retrieve_cli.py
"""
Retrieve CLI Interface

Command-line interface for the two retrieval operations:

    retriever export [directory] [--exclude Type1,Type2] [-w]
    retriever fetch -t ApexClass [-n Name] [-d dir] [-u] [-p] [-x package.xml] [-w]

Examples:
    retriever fetch -t CustomObject -n Book__c -n Author__c
    retriever fetch -t Aura -n MyComponent -d /work/project/src
    retriever fetch -t AuraDefinitionBundle -t ApexClass
    retriever fetch -t StaticResource -u
    retriever fetch -t package -n MyPackage -p
    retriever fetch -x myproj/metadata/package.xml
    retriever export --exclude=Document,StaticResource org/schema
"""

import argparse
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.markup import escape

from retriever import __version__
from retriever.core.logger import get_logger
from retriever.core.errors import EmptyResultError, RetrieverError
from retriever.engine.coordinator import RetrievalCoordinator
from retriever.engine.protocol_handlers import HTTPMetadataService
from retriever.engine.query_builder import split_names
from retriever.engine.service import BaseMetadataService
from retriever.engine.result import ExportRequest, FetchRequest, RetrievalSummary
from retriever.constants import LOG_INPUT, LOG_OUTPUT

logger = get_logger(__name__, 'cli')

console = Console()
error_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with export and fetch subcommands."""
    parser = argparse.ArgumentParser(
        prog='retriever',
        description='Retrieve platform metadata into a local directory',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    export = subparsers.add_parser(
        'export',
        help='Export metadata to a local directory',
    )
    export.add_argument(
        'directory',
        nargs='?',
        type=Path,
        help='Output directory (default: configured source directory)',
    )
    export.add_argument(
        '--exclude',
        action='append',
        default=[],
        metavar='TYPE[,TYPE...]',
        help='Exclude listed metadata types from export',
    )
    export.add_argument(
        '-w', '--warnings',
        action='store_true',
        help='Display warnings about metadata that cannot be retrieved',
    )

    fetch = subparsers.add_parser(
        'fetch',
        help='Export specified artifact(s) to a local directory',
    )
    fetch.add_argument(
        '-t', '--type',
        dest='types',
        action='append',
        default=[],
        help='Type of metadata to retrieve (multiple ok if -n not used)',
    )
    fetch.add_argument(
        '-n', '--name',
        dest='names',
        action='append',
        default=[],
        help='Name of specific metadata to retrieve (must be used with -t)',
    )
    fetch.add_argument(
        '-d', '--directory',
        type=Path,
        help='Override the default target directory',
    )
    fetch.add_argument(
        '-u', '--unpack',
        action='store_true',
        help='Unpack any zipped static resources',
    )
    fetch.add_argument(
        '-p', '--preserve',
        action='store_true',
        help='Keep the retrieved package archive on disk',
    )
    fetch.add_argument(
        '-x', '--xml',
        type=Path,
        help='package.xml file describing what to fetch',
    )
    fetch.add_argument(
        '-w', '--warnings',
        action='store_true',
        help='Display warnings about metadata that cannot be retrieved',
    )

    return parser


def fetch_request_from_args(args: argparse.Namespace) -> FetchRequest:
    return FetchRequest(
        types=split_names(args.types),
        names=split_names(args.names),
        output_dir=args.directory,
        unpack=args.unpack,
        preserve_archive=args.preserve,
        package_xml=args.xml,
        show_warnings=args.warnings,
    )


def export_request_from_args(args: argparse.Namespace) -> ExportRequest:
    return ExportRequest(
        output_dir=args.directory,
        excludes=split_names(args.exclude),
        show_warnings=args.warnings,
    )


def display_problems(problems: list[str]) -> None:
    """Print service warnings to stderr."""
    for problem in problems:
        error_console.print(escape(problem), soft_wrap=True)


def request_from_args(args: argparse.Namespace) -> Union[ExportRequest, FetchRequest]:
    if args.command == 'export':
        return export_request_from_args(args)
    return fetch_request_from_args(args)


async def run_command(
    request: Union[ExportRequest, FetchRequest],
    service: BaseMetadataService
) -> RetrievalSummary:
    """
    Execute a request against a service.

    The service is closed before returning.
    """
    coordinator = RetrievalCoordinator(service)
    try:
        if isinstance(request, ExportRequest):
            return await coordinator.export_all(request)
        return await coordinator.fetch(request)
    finally:
        await coordinator.close()


async def main(
    argv: Optional[list[str]] = None,
    service: Optional[BaseMetadataService] = None
) -> int:
    """
    CLI entry point.

    Args:
        argv: Arguments (default: sys.argv[1:])
        service: Transport to use (default: HTTPMetadataService from config)

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)
    request = request_from_args(args)
    logger.info(f"{LOG_INPUT} Command: {args.command}")

    try:
        if service is None:
            service = HTTPMetadataService()
        summary = await run_command(request, service)
    except RetrieverError as e:
        if request.show_warnings and isinstance(e, EmptyResultError):
            display_problems(e.problems)
        logger.debug(f"{args.command} failed", exc_info=True)
        error_console.print(f"[bold red]ERROR:[/bold red] {escape(str(e))}", soft_wrap=True)
        return 1

    if request.show_warnings:
        display_problems(summary.problems)

    console.print(f"Exported to {escape(str(summary.root))}", soft_wrap=True, highlight=False)
    logger.info(f"{LOG_OUTPUT} {args.command} finished: {summary.root}")
    return 0


__all__ = ['main', 'build_parser', 'request_from_args', 'run_command']
