import tempfile
import threading
import time
import unittest
from datetime import date
from decimal import Decimal
from pathlib import Path

from game_rental.db.connection import get_connection
from game_rental.db.migrations import apply_migrations
from game_rental.repositories import (
    CustomerRepo,
    GameRepo,
    MemoryCustomerStore,
    MemoryGameStore,
    MemoryRentalStore,
    RentalRepo,
)
from game_rental.services.errors import StockExhaustedError
from game_rental.services.rental_service import RentalLedger

WORKERS = 8


def _run_concurrently(open_once):
    """Start WORKERS threads together; return (successes, stock failures, other errors)."""
    barrier = threading.Barrier(WORKERS)
    lock = threading.Lock()
    outcome = {"ok": 0, "stock": 0, "errors": []}

    def worker():
        barrier.wait()
        try:
            open_once()
        except StockExhaustedError:
            with lock:
                outcome["stock"] += 1
        except Exception as exc:  # noqa: BLE001 - collected for the assertion
            with lock:
                outcome["errors"].append(exc)
        else:
            with lock:
                outcome["ok"] += 1

    threads = [threading.Thread(target=worker) for _ in range(WORKERS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return outcome["ok"], outcome["stock"], outcome["errors"]


class SlowCountingStore(MemoryRentalStore):
    """Widens the gap between counting open rentals and inserting one."""

    def count_open(self, game_id):
        count = super().count_open(game_id)
        time.sleep(0.01)
        return count


class MemoryCheckoutConcurrencyTests(unittest.TestCase):
    def test_last_copy_goes_to_exactly_one_caller(self):
        customers = MemoryCustomerStore()
        games = MemoryGameStore()
        rentals = SlowCountingStore(customers, games)
        customer = customers.create("Ana", "11999990000", "11111111111")
        game = games.create("Perfil", Decimal("4.00"), 1)
        ledger = RentalLedger(
            customers,
            games,
            rentals,
            clock=lambda: date(2024, 2, 1),
            serialize_checkout=True,
        )

        ok, stock, errors = _run_concurrently(
            lambda: ledger.open_rental(customer.id, game.id, 2)
        )

        self.assertEqual(errors, [])
        self.assertEqual(ok, 1)
        self.assertEqual(stock, WORKERS - 1)
        self.assertEqual(rentals.count_open(game.id), 1)


class MemoryReturnVisibilityTests(unittest.TestCase):
    def test_readers_never_see_a_half_closed_rental(self):
        customers = MemoryCustomerStore()
        games = MemoryGameStore()
        rentals = MemoryRentalStore(customers, games)
        customer = customers.create("Ana", "11999990000", "11111111111")
        game = games.create("Perfil", Decimal("4.00"), WORKERS)
        ledger = RentalLedger(
            customers, games, rentals, clock=lambda: date(2024, 2, 1)
        )
        rental_ids = [
            ledger.open_rental(customer.id, game.id, 1).id for _ in range(WORKERS)
        ]
        done = threading.Event()
        torn = []

        def reader():
            while not done.is_set():
                for rental_id in rental_ids:
                    rental = rentals.find_by_id(rental_id)
                    if rental.return_date is not None and rental.delay_fee is None:
                        torn.append(rental_id)

        thread = threading.Thread(target=reader)
        thread.start()
        try:
            for rental_id in rental_ids:
                ledger.return_rental(rental_id)
        finally:
            done.set()
            thread.join(timeout=30)

        self.assertEqual(torn, [])
        self.assertEqual(rentals.count_open(game.id), 0)


class SqliteCheckoutConcurrencyTests(unittest.TestCase):
    def setUp(self):
        self._temp_dir = tempfile.TemporaryDirectory()
        self.db_path = Path(self._temp_dir.name) / "concurrency.db"
        connection = get_connection(self.db_path)
        try:
            apply_migrations(connection)
            self.customer = CustomerRepo(connection).create(
                "Ana", "11999990000", "11111111111"
            )
            self.game = GameRepo(connection).create("Perfil", Decimal("4.00"), 1)
        finally:
            connection.close()

    def tearDown(self):
        self._temp_dir.cleanup()

    def test_last_copy_goes_to_exactly_one_connection(self):
        def open_once():
            connection = get_connection(self.db_path)
            try:
                ledger = RentalLedger(
                    CustomerRepo(connection),
                    GameRepo(connection),
                    RentalRepo(connection),
                    clock=lambda: date(2024, 2, 1),
                    serialize_checkout=True,
                )
                ledger.open_rental(self.customer.id, self.game.id, 2)
            finally:
                connection.close()

        ok, stock, errors = _run_concurrently(open_once)

        self.assertEqual(errors, [])
        self.assertEqual(ok, 1)
        self.assertEqual(stock, WORKERS - 1)
        connection = get_connection(self.db_path)
        try:
            self.assertEqual(RentalRepo(connection).count_open(self.game.id), 1)
        finally:
            connection.close()


if __name__ == "__main__":
    unittest.main()
