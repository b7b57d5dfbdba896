"""Seed demo customers, games and rentals."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR / "src"))

from game_rental.db.connection import get_connection  # noqa: E402
from game_rental.db.migrations import apply_migrations  # noqa: E402
from game_rental.paths import get_db_path  # noqa: E402
from game_rental.repositories import CustomerRepo, GameRepo, RentalRepo  # noqa: E402
from game_rental.services.customer_service import CustomerService  # noqa: E402
from game_rental.services.errors import StockExhaustedError  # noqa: E402
from game_rental.services.game_service import GameService  # noqa: E402
from game_rental.services.rental_service import RentalLedger  # noqa: E402

SEED_TAG = "Seed Demo"
DEFAULT_SEED = 42

FIRST_NAMES = ["Ana", "Bruno", "Carla", "Diego", "Elisa", "Fábio", "Gabriela", "Hugo"]
LAST_NAMES = ["Silva", "Souza", "Oliveira", "Costa", "Pereira", "Almeida"]


@dataclass(frozen=True)
class GameSeed:
    name: str
    price_per_day: Decimal
    stock_total: int


GAMES = [
    GameSeed(f"{SEED_TAG} Banco Imobiliário", Decimal("3.00"), 3),
    GameSeed(f"{SEED_TAG} War", Decimal("4.50"), 2),
    GameSeed(f"{SEED_TAG} Detetive", Decimal("2.50"), 4),
    GameSeed(f"{SEED_TAG} Perfil", Decimal("3.75"), 1),
    GameSeed(f"{SEED_TAG} Jogo da Vida", Decimal("5.00"), 2),
]


class _Clock:
    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed demo data for GameRental")
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Caminho do banco (padrão: banco da aplicação).",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Remove o banco atual e recria antes de inserir dados.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help="Seed para aleatoriedade.",
    )
    return parser.parse_args()


def _random_digits(rng: random.Random, size: int) -> str:
    return "".join(str(rng.randint(0, 9)) for _ in range(size))


def main() -> None:
    args = _parse_args()
    rng = random.Random(args.seed)

    db_path = args.db or get_db_path()
    if args.reset and db_path.exists():
        db_path.unlink()
        print(f"Banco removido: {db_path}")

    print(f"Usando banco de dados: {db_path}")
    connection = get_connection(db_path)
    try:
        apply_migrations(connection)
        customer_repo = CustomerRepo(connection)
        game_repo = GameRepo(connection)
        if game_repo.find_by_name(GAMES[0].name) and not args.reset:
            print("Dados de seed já encontrados. Use --reset para recriar o banco.")
            return

        games = GameService(game_repo)
        game_ids = [
            games.create_game(seed.name, seed.price_per_day, seed.stock_total).id
            for seed in GAMES
        ]

        customers = CustomerService(customer_repo)
        customer_ids = []
        for index in range(rng.randint(10, 20)):
            name = f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"
            cpf = f"{index:03d}{_random_digits(rng, 8)}"
            customer = customers.create_customer(name, f"119{_random_digits(rng, 8)}", cpf)
            customer_ids.append(customer.id)

        clock = _Clock(date.today() - timedelta(days=60))
        ledger = RentalLedger(customer_repo, game_repo, RentalRepo(connection), clock=clock)
        opened: list[int] = []
        rejected = 0
        for _ in range(rng.randint(40, 60)):
            clock.today = min(
                date.today(), clock.today + timedelta(days=rng.randint(0, 2))
            )
            if opened and rng.random() < 0.5:
                ledger.return_rental(opened.pop(rng.randrange(len(opened))))
            try:
                rental = ledger.open_rental(
                    rng.choice(customer_ids),
                    rng.choice(game_ids),
                    rng.randint(1, 7),
                )
            except StockExhaustedError:
                rejected += 1
                continue
            opened.append(rental.id)

        print(
            f"Seed concluído: {len(customer_ids)} clientes, {len(game_ids)} jogos, "
            f"{len(ledger.list_rentals())} aluguéis ({rejected} recusados por estoque)."
        )
    finally:
        connection.close()


if __name__ == "__main__":
    main()
