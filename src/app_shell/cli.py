import argparse
import json
import logging
import sys
from typing import Any

from src.adapters.json_store import JsonShapeStore
from src.api.deps import ShapeRulesAdapter, Settings, get_rules
from src.app_shell.config import configure_logging
from src.components.shapes import (
    CandidateShape,
    CreateShapeInput,
    GetShapeInput,
    ListShapesInput,
    run_create,
    run_get,
    run_list,
)

logger = logging.getLogger("cli")


def get_store(settings: Settings) -> JsonShapeStore:
    rules = get_rules()
    return JsonShapeStore(
        settings.data_dir / rules.storage.data_file_name,
        indent=rules.storage.json_indent,
    )


def handle_list(store: JsonShapeStore, args: argparse.Namespace) -> int:
    result = run_list(ListShapesInput(), store=store)
    for shape in result.shapes:
        print(f"{shape.name:<6} {shape.color:<8} {shape.image}")
    return 0


def handle_show(store: JsonShapeStore, args: argparse.Namespace) -> int:
    result = run_get(GetShapeInput(name=args.name), store=store)
    if result.shape is None:
        logger.error("Block %s not found.", args.name)
        return 1
    print(json.dumps(result.shape.to_dict(), indent=4, ensure_ascii=False))
    return 0


def _parse_matrix(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def handle_add(store: JsonShapeStore, args: argparse.Namespace) -> int:
    rules = get_rules()
    candidate = CandidateShape(
        name=args.name,
        color=args.color,
        description=args.description,
        image=args.image,
        matrix=_parse_matrix(args.matrix),
    )
    result = run_create(
        CreateShapeInput(candidate=candidate),
        store=store,
        rules=ShapeRulesAdapter(rules),
    )
    if result.shape is None:
        for err in result.errors:
            logger.error("%s", err.message)
        return 1
    print(json.dumps(result.shape.to_dict(), indent=4, ensure_ascii=False))
    return 0


def handle_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("src.api.main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tetromino catalog CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # list
    subparsers.add_parser("list", help="List all blocks")

    # show
    show_parser = subparsers.add_parser("show", help="Show one block by name")
    show_parser.add_argument("name", help="Block name (case-insensitive)")

    # add
    add_parser = subparsers.add_parser("add", help="Add a new block")
    add_parser.add_argument("name", help="Block name, stored upper-case")
    add_parser.add_argument("--color", required=True, help="Hex colour, e.g. #123456")
    add_parser.add_argument("--description", required=True)
    add_parser.add_argument("--image", required=True, help="Image path or URL")
    add_parser.add_argument(
        "--matrix", required=True, help="4x4 matrix as JSON, e.g. '[[0,0,0,0],...]'"
    )

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = Settings()
    configure_logging(settings.log_level)

    if args.command == "serve":
        return handle_serve(args)

    store = get_store(settings)
    if args.command == "list":
        return handle_list(store, args)
    elif args.command == "show":
        return handle_show(store, args)
    elif args.command == "add":
        return handle_add(store, args)

    return 1


if __name__ == "__main__":
    sys.exit(main())
