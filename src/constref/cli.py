"""Command-line interface for constref."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .dependencies import scan_dependencies
from .errors import ConstrefError
from .extractor import Extractor
from .models import Reference


def get_extractor(args: argparse.Namespace) -> Extractor:
    """Build an Extractor for the project selected by --root."""
    return Extractor.from_project(Path(args.root))


def _print_references(references: list[Reference]) -> None:
    for ref in references:
        span = ref.span
        print(
            f"  {ref.file_path}:{span.start_line}:{span.start_column}  "
            f"{ref.constant.name} -> {ref.constant.location}"
        )


def cmd_refs(args: argparse.Namespace) -> int:
    """List constant references made by files."""
    try:
        extractor = get_extractor(args)
        results = {path: extractor.references_from_file(path) for path in args.paths}

        if args.json:
            data = {
                path: [ref.to_dict() for ref in refs] for path, refs in results.items()
            }
            print(json.dumps(data, indent=2))
            return 0

        for path, refs in results.items():
            if not refs:
                print(f"No references found in {path}")
                continue
            print(f"References in {path} ({len(refs)}):")
            _print_references(refs)
            print()
        return 0

    except ConstrefError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_snippet(args: argparse.Namespace) -> int:
    """List constant references made by a code string."""
    try:
        extractor = get_extractor(args)
        source = sys.stdin.read() if args.code == "-" else args.code
        refs = extractor.references_from_string(source)

        if args.json:
            print(json.dumps([ref.to_dict() for ref in refs], indent=2))
        elif not refs:
            print("No references found")
        else:
            print(f"References ({len(refs)}):")
            _print_references(refs)
        return 0

    except ConstrefError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_namespaces(args: argparse.Namespace) -> int:
    """Show the namespace index."""
    try:
        index = get_extractor(args).index
        entries = index.entries()

        if args.json:
            data = {
                "roots": [r.to_dict() for r in index.roots],
                "namespaces": [e.to_dict() for e in entries],
            }
            print(json.dumps(data, indent=2))
            return 0

        print(f"Autoload roots ({len(index.roots)}):")
        for root in index.roots:
            namespace = root.to_dict()["namespace"]
            suffix = f"  ({namespace})" if namespace else ""
            print(f"  {root.path}{suffix}")
        print()
        print(f"Namespaces ({len(entries)}):")
        for entry in entries:
            location = entry.defining_file or "(namespace only)"
            print(f"  {entry.name:<40} {location}")
        return 0

    except ConstrefError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_deps(args: argparse.Namespace) -> int:
    """Show file-to-file dependencies of the project."""
    try:
        edges = scan_dependencies(get_extractor(args))

        if args.json:
            print(json.dumps([e.to_dict() for e in edges], indent=2))
            return 0

        if not edges:
            print("No dependencies found")
            return 0
        for edge in edges:
            print(f"{edge.source_file} -> {edge.target_file}  ({', '.join(edge.constants)})")
        return 0

    except ConstrefError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the API server."""
    try:
        import uvicorn

        root = Path(args.root).resolve()
        # Fail fast on a broken project before binding the port
        Extractor.from_project(root)
        os.environ["CONSTREF_PROJECT_ROOT"] = str(root)

        print("Starting constref API server...")
        print(f"Project: {root}")
        print(f"API docs: http://{args.host}:{args.port}/docs")
        print()

        # When reload is enabled, uvicorn requires the app as an import string
        app_target = "constref.api:app" if args.reload else None
        if app_target is None:
            from .api import app
            app_target = app

        uvicorn.run(
            app_target,
            host=args.host,
            port=args.port,
            reload=args.reload,
        )
        return 0

    except ConstrefError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="constref",
        description="Resolve Ruby constant references to the project files that define them",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--root", "-r", default=".", help="Project root (default: current directory)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # refs
    refs_parser = subparsers.add_parser("refs", help="List references made by files")
    refs_parser.add_argument("paths", nargs="+", help="Files, relative to the project root")
    refs_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # snippet
    snippet_parser = subparsers.add_parser(
        "snippet", help="List references made by a code string"
    )
    snippet_parser.add_argument("code", help="Ruby code, or '-' to read stdin")
    snippet_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # namespaces
    namespaces_parser = subparsers.add_parser(
        "namespaces", help="Show the namespace index"
    )
    namespaces_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # deps
    deps_parser = subparsers.add_parser("deps", help="Show file-to-file dependencies")
    deps_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--port", "-p", type=int, default=8000, help="Port to bind to (default: 8000)"
    )
    serve_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    return parser


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "refs": cmd_refs,
        "snippet": cmd_snippet,
        "namespaces": cmd_namespaces,
        "deps": cmd_deps,
        "serve": cmd_serve,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
