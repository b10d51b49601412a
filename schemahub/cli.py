"""
SchemaHub CLI: serve the documents or dump them once.

Usage examples:
    python -m schemahub serve --services services.json
    python -m schemahub dump --services services.json --out ./build
"""

import argparse
import dataclasses
import sys
from pathlib import Path

from schemahub.base.config import get_config, set_config, setup_logging
from schemahub.errors import SchemaHubError, handle_error
from schemahub.openapi.cache import write_snapshot


def _apply_args(args):
    """Fold command-line overrides into the global config."""
    config = get_config()
    changes = {}
    if getattr(args, "host", None):
        changes["api_host"] = args.host
    if getattr(args, "port", None):
        changes["api_port"] = args.port
    if getattr(args, "services", None):
        changes["services_file"] = Path(args.services)
    if changes:
        config = dataclasses.replace(config, **changes)
        set_config(config)
    return config


def run_serve(args) -> int:
    from schemahub.server.api import serve

    config = _apply_args(args)
    print(f"🚀 Starting SchemaHub on {config.api_host}:{config.api_port}...")
    serve(config)
    return 0


def run_dump(args) -> int:
    """Build both documents once and write them to --out."""
    from schemahub.server.state import ApplicationState

    config = _apply_args(args)
    setup_logging(config)
    try:
        state = ApplicationState.create(config=config)
        public, private = state.cache.regenerate()
        out_dir = Path(args.out)
        out_dir.mkdir(parents=True, exist_ok=True)
        public_path, private_path = write_snapshot(out_dir, public, private)
    except SchemaHubError as e:
        print(f"❌ {e}", file=sys.stderr)
        if e.details:
            print(e.to_json(), file=sys.stderr)
        return 1
    except OSError as e:
        err = handle_error(e, context="while writing documents")
        print(f"❌ {err}", file=sys.stderr)
        return 1

    print(f"✅ Public document saved to {public_path}")
    print(f"✅ Private document saved to {private_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="schemahub", description="SchemaHub OpenAPI aggregator")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Serve the aggregated documents over HTTP")
    serve.add_argument("--host", help="Interface to bind (default: SCHEMAHUB_API_HOST)")
    serve.add_argument("--port", type=int, help="Port to bind (default: SCHEMAHUB_API_PORT)")
    serve.add_argument("--services", help="JSON file with service definitions")
    serve.set_defaults(func=run_serve)

    dump = sub.add_parser("dump", help="Write openapi.json and openapi-private.json once")
    dump.add_argument("--services", help="JSON file with service definitions")
    dump.add_argument("--out", default=".", help="Output directory (default: current directory)")
    dump.set_defaults(func=run_dump)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
