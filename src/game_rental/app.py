"""Command-line entry point."""

from __future__ import annotations

import argparse
import json
import sqlite3
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional, Sequence, TextIO

from game_rental.config import AppSettings, load_settings
from game_rental.db.connection import get_connection
from game_rental.db.migrations import apply_migrations
from game_rental.logging_config import configure_logging, get_logger
from game_rental.paths import get_config_path, get_db_path
from game_rental.repositories import (
    CustomerRepo,
    GameRepo,
    RentalRepo,
    customer_to_record,
    game_to_record,
    rental_to_record,
)
from game_rental.services.customer_service import CustomerService
from game_rental.services.errors import ServiceError
from game_rental.services.game_service import GameService
from game_rental.services.rental_service import RentalLedger
from game_rental.version import __app_name__, __version__


@dataclass
class AppServices:
    """Services wired to one database connection."""

    connection: sqlite3.Connection
    customers: CustomerService
    games: GameService
    ledger: RentalLedger


def build_services(settings: AppSettings) -> AppServices:
    connection = get_connection(settings.database_path)
    apply_migrations(connection)
    customer_repo = CustomerRepo(connection)
    game_repo = GameRepo(connection)
    return AppServices(
        connection=connection,
        customers=CustomerService(customer_repo),
        games=GameService(game_repo),
        ledger=RentalLedger(
            customer_repo,
            game_repo,
            RentalRepo(connection),
            serialize_checkout=settings.serialize_checkout,
        ),
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="game_rental",
        description=f"{__app_name__} {__version__}: controle de aluguel de jogos",
    )
    parser.add_argument("--db", help="Caminho do banco SQLite.")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="Cria ou atualiza o banco de dados.")

    customer = commands.add_parser("add-customer", help="Cadastra um cliente.")
    customer.add_argument("name")
    customer.add_argument("phone")
    customer.add_argument("cpf")

    game = commands.add_parser("add-game", help="Cadastra um jogo.")
    game.add_argument("name")
    game.add_argument("price_per_day")
    game.add_argument("stock_total")
    game.add_argument("--image")

    open_cmd = commands.add_parser("open", help="Abre um aluguel.")
    open_cmd.add_argument("customer_id")
    open_cmd.add_argument("game_id")
    open_cmd.add_argument("days_rented")

    return_cmd = commands.add_parser("return", help="Finaliza um aluguel.")
    return_cmd.add_argument("rental_id")

    delete_cmd = commands.add_parser("delete", help="Apaga um aluguel finalizado.")
    delete_cmd.add_argument("rental_id")

    commands.add_parser("list", help="Lista os aluguéis.")
    commands.add_parser("customers", help="Lista os clientes.")
    commands.add_parser("games", help="Lista os jogos.")
    return parser


def _dispatch(args: argparse.Namespace, services: AppServices) -> Any:
    if args.command == "init-db":
        return {"database": "ok"}
    if args.command == "add-customer":
        return customer_to_record(
            services.customers.create_customer(args.name, args.phone, args.cpf)
        )
    if args.command == "add-game":
        return game_to_record(
            services.games.create_game(
                args.name, args.price_per_day, args.stock_total, args.image
            )
        )
    if args.command == "open":
        return rental_to_record(
            services.ledger.open_rental(
                args.customer_id, args.game_id, args.days_rented
            )
        )
    if args.command == "return":
        return rental_to_record(services.ledger.return_rental(args.rental_id))
    if args.command == "delete":
        services.ledger.delete_rental(args.rental_id)
        return {"deleted": int(args.rental_id)}
    if args.command == "list":
        return [view.to_dict() for view in services.ledger.list_rentals()]
    if args.command == "customers":
        return [customer_to_record(c) for c in services.customers.list_customers()]
    if args.command == "games":
        return [game_to_record(g) for g in services.games.list_games()]
    raise ValueError(f"Unknown command: {args.command}")


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdout: TextIO = sys.stdout,
    stderr: TextIO = sys.stderr,
) -> int:
    """Run a single command against the configured database."""
    args = _build_parser().parse_args(argv)
    settings = load_settings(get_config_path(), get_db_path())
    if args.db:
        settings = replace(settings, database_path=Path(args.db))
    configure_logging(settings.log_level)
    logger = get_logger(__name__)
    logger.info("Running %s on %s", args.command, settings.database_path)

    services = build_services(settings)
    try:
        result = _dispatch(args, services)
    except ServiceError as exc:
        stderr.write(f"error[{exc.code}]: {exc.message}\n")
        return 1
    finally:
        services.connection.close()

    json.dump(result, stdout, ensure_ascii=False, indent=2)
    stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
