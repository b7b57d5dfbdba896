"""Smoke test for core business flows."""

from __future__ import annotations

import tempfile
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
import sys

ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR / "src"))

from game_rental.db.connection import get_connection  # noqa: E402
from game_rental.db.migrations import apply_migrations  # noqa: E402
from game_rental.repositories import CustomerRepo, GameRepo, RentalRepo  # noqa: E402
from game_rental.services.customer_service import CustomerService  # noqa: E402
from game_rental.services.errors import (  # noqa: E402
    AlreadyReturnedError,
    IncompleteRentalError,
    StockExhaustedError,
)
from game_rental.services.game_service import GameService  # noqa: E402
from game_rental.services.rental_service import RentalLedger  # noqa: E402


class _Clock:
    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


def main() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        db_path = Path(temp_dir) / "smoke_test.db"
        connection = get_connection(db_path)
        try:
            apply_migrations(connection)

            customer_repo = CustomerRepo(connection)
            game_repo = GameRepo(connection)
            clock = _Clock(date.today())
            ledger = RentalLedger(
                customer_repo,
                game_repo,
                RentalRepo(connection),
                clock=clock,
                serialize_checkout=True,
            )

            customer = CustomerService(customer_repo).create_customer(
                "Cliente Smoke", "11900000000", "12345678901"
            )
            game = GameService(game_repo).create_game("Jogo Smoke", "2.50", 1)

            rental = ledger.open_rental(customer.id, game.id, 3)
            assert rental.original_price == Decimal("7.50")

            try:
                ledger.open_rental(customer.id, game.id, 1)
            except StockExhaustedError:
                pass
            else:
                raise AssertionError("Estoque deveria estar esgotado.")

            try:
                ledger.delete_rental(rental.id)
            except IncompleteRentalError:
                pass
            else:
                raise AssertionError("Aluguel aberto não pode ser apagado.")

            clock.today = clock.today + timedelta(days=5)
            returned = ledger.return_rental(rental.id)
            assert returned.delay_fee == Decimal("5.00"), returned.delay_fee

            try:
                ledger.return_rental(rental.id)
            except AlreadyReturnedError:
                pass
            else:
                raise AssertionError("Aluguel já devolvido.")

            listing = [view.to_dict() for view in ledger.list_rentals()]
            assert listing[0]["customer"]["name"] == "Cliente Smoke"
            assert listing[0]["delayFee"] == "5.00"

            ledger.delete_rental(rental.id)
            assert ledger.list_rentals() == []
        finally:
            connection.close()

    print("Smoke test OK")


if __name__ == "__main__":
    main()
