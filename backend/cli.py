#!/usr/bin/env python3
"""
StartupOS command line - work with the local keyed store

Usage:
    startupos list investors
    startupos add tickets '{"subject": "Printer on fire", "priority": "HIGH"}'
    startupos update product_features 3 '{"status": "Done"}'
    startupos delete legal_docs 2
    startupos export investors -o investors
    startupos link FEATURE 2
    startupos entities GOAL
    startupos stats | reset --yes | health
    startupos serve --port 8000
"""
import argparse
import asyncio
import json
import logging
import sys

from config import create_keyed_store, get_settings
from services.blob_store import StorageError
from services.csv_export import export_to_csv
from services.local_services import LocalServices, build_local_services
from services.system_service import check_system_health, factory_reset


class CommandError(Exception):
    """Bad input on the command line (reported, exit status 1)"""


def _dump(value):
    print(json.dumps(value, indent=2, default=str))


def _parse_json(text: str) -> dict:
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise CommandError(f"Invalid JSON: {e}")
    if not isinstance(value, dict):
        raise CommandError("Expected a JSON object")
    return value


def _service(services: LocalServices, name: str):
    service = services.collection(name)
    if service is None:
        known = ", ".join(sorted(services.collections))
        raise CommandError(f"Unknown collection '{name}'. Known: {known}")
    return service


async def run(args, services: LocalServices):
    settings = get_settings()

    if args.command == "list":
        records = await _service(services, args.collection).list()
        _dump([r.to_storage() for r in records])

    elif args.command == "add":
        records = await _service(services, args.collection).add(_parse_json(args.record))
        _dump(records[-1].to_storage())

    elif args.command == "update":
        service = _service(services, args.collection)
        await service.update(args.id, _parse_json(args.patch))
        record = await service.get(args.id)
        if record is None:
            raise CommandError(f"No record '{args.id}' in {args.collection}")
        _dump(record.to_storage())

    elif args.command == "delete":
        service = _service(services, args.collection)
        before = len(await service.list())
        remaining = await service.delete(args.id)
        print(f"Deleted {before - len(remaining)} record(s) from {args.collection}")

    elif args.command == "export":
        records = await _service(services, args.collection).list()
        path = export_to_csv([r.to_storage() for r in records], args.output or args.collection)
        if path:
            print(f"Wrote {path}")

    elif args.command == "link":
        summary = await services.resolver.get_entity_summary(args.type, args.id)
        _dump(summary.to_dict() if summary else None)

    elif args.command == "entities":
        summaries = await services.resolver.get_available_entities(args.type)
        _dump([s.to_dict() for s in summaries])

    elif args.command == "stats":
        _dump(await services.store.stats())

    elif args.command == "reset":
        if not args.yes:
            raise CommandError("Refusing to reset without --yes")
        removed = await factory_reset(services.store)
        print(f"Removed {removed} keys")

    elif args.command == "health":
        _dump(await check_system_health(services.store, settings.api_url))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="startupos", description="StartupOS local data tools")
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="Print every record of a collection")
    p.add_argument("collection")

    p = sub.add_parser("add", help="Append a record (JSON object)")
    p.add_argument("collection")
    p.add_argument("record")

    p = sub.add_parser("update", help="Merge a JSON patch into one record")
    p.add_argument("collection")
    p.add_argument("id")
    p.add_argument("patch")

    p = sub.add_parser("delete", help="Remove one record")
    p.add_argument("collection")
    p.add_argument("id")

    p = sub.add_parser("export", help="Export a collection as CSV")
    p.add_argument("collection")
    p.add_argument("-o", "--output", help="File name (.csv is appended)")

    p = sub.add_parser("link", help="Summary of a linkable record")
    p.add_argument("type", help="FEATURE, IDEA or GOAL")
    p.add_argument("id")

    p = sub.add_parser("entities", help="Summaries of every record of a linkable type")
    p.add_argument("type")

    sub.add_parser("stats", help="Key count and bytes used")

    p = sub.add_parser("reset", help="Delete all local data")
    p.add_argument("--yes", action="store_true", help="Confirm the reset")

    sub.add_parser("health", help="Check the API and report local storage usage")

    p = sub.add_parser("serve", help="Run the API server")
    p.add_argument("--host", default="0.0.0.0")
    p.add_argument("--port", type=int, default=8000)

    return parser


async def _main(args) -> int:
    store = create_keyed_store()
    try:
        await run(args, build_local_services(store))
    except (CommandError, StorageError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    finally:
        await store.close()
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(name)s] %(levelname)s: %(message)s'
    )

    if args.command == "serve":
        import uvicorn
        uvicorn.run("main:app", host=args.host, port=args.port)
        return 0

    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())
