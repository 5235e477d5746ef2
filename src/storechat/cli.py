"""CLI entry point — ``storechat init-db`` and ``storechat ask``."""

from __future__ import annotations

# Phase 1: singleton logging, before any transitive litellm imports
from storechat.logging_config import setup_logging

setup_logging()

import argparse  # noqa: E402
import asyncio  # noqa: E402
import json  # noqa: E402
import sys  # noqa: E402

from storechat import __version__  # noqa: E402
from storechat.chat.errors import ChatError  # noqa: E402
from storechat.config import Settings, create_app_engine  # noqa: E402
from storechat.logging_config import (  # noqa: E402
    cleanup_third_party_handlers,
)

# Phase 2: Clear litellm's duplicate handlers after all imports
cleanup_third_party_handlers()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"storechat {__version__}")
        return

    if args.command == "init-db":
        _run_init_db(args)
    elif args.command == "ask":
        _run_ask(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="storechat",
        description="Support chat for an online technology store.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    init_db = sub.add_parser(
        "init-db",
        help="Create the catalog tables",
    )
    init_db.add_argument(
        "--db",
        default=None,
        help=(
            "SQLite file path override "
            "(default: from settings)"
        ),
    )

    ask = sub.add_parser(
        "ask",
        help="Send one message and print the JSON result",
    )
    ask.add_argument("message", type=str, help="User message")
    ask.add_argument(
        "--model",
        "-m",
        default=None,
        help="Model id (default: from settings)",
    )
    ask.add_argument(
        "--session",
        "-s",
        default=None,
        help="Session id to record the exchange under",
    )
    ask.add_argument(
        "--db",
        default=None,
        help=(
            "SQLite file path override "
            "(default: from settings)"
        ),
    )

    return parser


def _database_url(settings: Settings, db: str | None) -> str:
    return f"sqlite:///{db}" if db else settings.database_url


def _run_init_db(args: argparse.Namespace) -> None:
    settings = Settings()
    url = _database_url(settings, args.db)
    asyncio.run(_init_db(url))
    print(f"Tables ready: {url}")


async def _init_db(url: str) -> None:
    from storechat.services.data_service import create_tables

    engine = create_app_engine(url)
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()


def _run_ask(args: argparse.Namespace) -> None:
    settings = Settings()
    url = _database_url(settings, args.db)
    try:
        result = asyncio.run(
            _ask(settings, url, args.message, args.model, args.session)
        )
    except ChatError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps(result, ensure_ascii=False, indent=2))


async def _ask(
    settings: Settings,
    url: str,
    message: str,
    model: str | None,
    session_id: str | None,
) -> dict[str, object]:
    """Run one exchange against the catalog at ``url``."""
    from sqlalchemy.ext.asyncio import async_sessionmaker

    from storechat.repositories.catalog_repo import SqlCatalogRepository
    from storechat.services.chat_factory import build_chat_service

    engine = create_app_engine(url)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    service = build_chat_service(settings)
    try:
        async with session_factory() as session:
            result = await service.chat(
                message,
                SqlCatalogRepository(session),
                model=model,
                session_id=session_id,
            )
    finally:
        await engine.dispose()
    return result.to_dict()


if __name__ == "__main__":
    main()
