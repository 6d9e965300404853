"""CLI entrypoint for the Listing Reconciler."""

import argparse
import json
import logging
import sys


def setup_logging():
    """Configure console and optional file logging."""
    from listing_reconciler.config import settings

    log_level = getattr(logging, settings.log_level.upper())
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(log_format))

    # File handler (if log file is configured)
    handlers = [console_handler]
    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(log_format))
        handlers.append(file_handler)

    # Configure root logger
    logging.basicConfig(level=log_level, handlers=handlers, force=True)


def _read_source(path):
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def _report(outcome, deep_link: bool):
    """Print an outcome; classified failures exit with status 1."""
    from listing_reconciler.transport import build_deep_link

    if not outcome.ok:
        print(f"✗ {outcome.message}")
        sys.exit(1)

    if deep_link:
        print(build_deep_link(outcome.record))
        return

    print(json.dumps(outcome.record.to_fields(), indent=2))
    if outcome.needs_assist:
        print("⚠️  No address or price found; fill them in before saving.", file=sys.stderr)


def cmd_page(args):
    """Extract a record from a saved listing page."""
    from listing_reconciler.extraction import ListingEngine, PageSnapshot

    html = _read_source(args.file)
    outcome = ListingEngine().extract_page(PageSnapshot(url=args.url, html=html))
    _report(outcome, args.deep_link)


def cmd_paste(args):
    """Import pasted listing JSON."""
    from listing_reconciler.extraction import ListingEngine

    outcome = ListingEngine().import_pasted(_read_source(args.file))
    _report(outcome, args.deep_link)


def cmd_url(args):
    """Recover what a listing URL encodes."""
    from listing_reconciler.extraction import ListingEngine

    outcome = ListingEngine().import_url(args.url)
    _report(outcome, args.deep_link)


def cmd_serve(args):
    """Start the extraction API."""
    import uvicorn

    from listing_reconciler.config import settings

    uvicorn.run(
        "listing_reconciler.api.app:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
    )


def build_parser():
    parser = argparse.ArgumentParser(description="Listing Reconciler")
    sub = parser.add_subparsers(dest="command")

    # page
    p_page = sub.add_parser("page", help="Extract a record from a saved listing page")
    p_page.add_argument("--url", required=True, help="URL the page was captured from")
    p_page.add_argument("file", nargs="?", default=None, help="HTML file (default: stdin)")
    p_page.add_argument("--deep-link", action="store_true", help="Print the app deep link instead of JSON")
    p_page.set_defaults(func=cmd_page)

    # paste
    p_paste = sub.add_parser("paste", help="Import pasted listing JSON")
    p_paste.add_argument("file", nargs="?", default=None, help="JSON file (default: stdin)")
    p_paste.add_argument("--deep-link", action="store_true", help="Print the app deep link instead of JSON")
    p_paste.set_defaults(func=cmd_paste)

    # url
    p_url = sub.add_parser("url", help="Recover address fields from a listing URL")
    p_url.add_argument("url", help="Listing URL")
    p_url.add_argument("--deep-link", action="store_true", help="Print the app deep link instead of JSON")
    p_url.set_defaults(func=cmd_url)

    # serve
    p_serve = sub.add_parser("serve", help="Start the extraction API")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)
    setup_logging()
    args.func(args)


if __name__ == "__main__":
    main()
