"""Main application entry point.

Runs the FastAPI server, or parses a local PDF from the command line.
Environment variables are loaded from .env file.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the FastAPI application with uvicorn."""
    import uvicorn

    from pdfparse.api.app import create_app

    app = create_app()

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting server on http://{host}:{port}")
    logger.info(f"API docs available at http://{host}:{port}/docs")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def parse_file(args: argparse.Namespace) -> int:
    """Parse a local PDF and print the output record as JSON."""
    from pydantic import ValidationError

    from pdfparse.models.schemas import ParseOptions
    from pdfparse.parsing.errors import PDFParseError
    from pdfparse.pipeline import parse_document

    path = Path(args.file)
    try:
        content = path.read_bytes()
    except OSError as e:
        print(f"Cannot read {path}: {e}", file=sys.stderr)
        return 2

    try:
        options = ParseOptions(
            text_formatting=args.formatting,
            split_by_pages=args.split_by_pages,
            include_metadata=args.include_metadata,
            page_range_start=args.start,
            page_range_end=args.end,
            max_pages=args.max_pages,
            output_property=args.output_property,
        )
    except ValidationError as e:
        print(str(e), file=sys.stderr)
        return 2

    try:
        output = parse_document(content, options, record={"fileName": path.name})
    except PDFParseError as e:
        print(str(e), file=sys.stderr)
        return 1

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfparse",
        description="Extract text from PDF files with layout-recovering formatting.",
    )
    subcommands = parser.add_subparsers(dest="command")

    subcommands.add_parser("serve", help="Run the HTTP API (default)")

    parse = subcommands.add_parser("parse", help="Parse a local PDF file")
    parse.add_argument("file", help="Path to the PDF file")
    parse.add_argument(
        "--formatting",
        "-f",
        default=None,
        help="Text formatting: raw|minimal|compact|smart|structured|visual "
        "(default: PDF_TEXT_FORMATTING or raw)",
    )
    parse.add_argument("--split-by-pages", action="store_true", help="Return a list of page texts")
    parse.add_argument("--include-metadata", action="store_true", help="Include PDF metadata")
    parse.add_argument("--start", type=int, default=1, help="First page, 1-based (default: 1)")
    parse.add_argument("--end", type=int, default=0, help="Last page (default: 0 = last page)")
    parse.add_argument("--max-pages", type=int, default=0, help="Maximum pages (default: 0 = all)")
    parse.add_argument("--output-property", default=None, help="Output key for the text")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Application entry point.

    Without a subcommand the HTTP API is started.
    """
    args = build_parser().parse_args(argv)

    if args.command == "parse":
        raise SystemExit(parse_file(args))

    run_server()


if __name__ == "__main__":
    main()
