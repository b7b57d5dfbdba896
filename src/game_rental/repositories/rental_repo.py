"""Repository helpers for rental persistence."""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import List, Optional

from game_rental.db.connection import transaction
from game_rental.domain.models import Rental, RentalView
from game_rental.logging_config import get_logger
from game_rental.repositories.mappers import (
    rental_from_row,
    rental_to_record,
    rental_view_from_row,
)


class RentalRepo:
    """SQLite storage for rental rows.

    Statements issued through one repository are serialized by a lock, so a
    connection opened with ``check_same_thread=False`` can be shared between
    threads.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._lock = threading.RLock()
        self._logger = get_logger(self.__class__.__name__)

    @contextmanager
    def checkout_guard(self, game_id: int) -> Iterator[None]:
        """Hold the database write lock while stock is counted and a rental inserted."""
        with self._lock:
            with transaction(self._connection, immediate=True):
                self._logger.debug("Checkout guard acquired for game_id=%s", game_id)
                yield

    def insert(self, rental: Rental) -> int:
        record = rental_to_record(rental)
        with self._lock:
            try:
                with transaction(self._connection):
                    cursor = self._connection.execute(
                        """
                        INSERT INTO rentals (
                            customer_id,
                            game_id,
                            rent_date,
                            days_rented,
                            return_date,
                            original_price,
                            delay_fee
                        )
                        VALUES (?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            record["customer_id"],
                            record["game_id"],
                            record["rent_date"],
                            record["days_rented"],
                            record["return_date"],
                            record["original_price"],
                            record["delay_fee"],
                        ),
                    )
            except Exception:
                self._logger.exception("Failed to create rental")
                raise
        return int(cursor.lastrowid)

    def find_by_id(self, rental_id: int) -> Optional[Rental]:
        with self._lock:
            try:
                row = self._connection.execute(
                    "SELECT * FROM rentals WHERE id = ?",
                    (rental_id,),
                ).fetchone()
            except Exception:
                self._logger.exception("Failed to get rental id=%s", rental_id)
                raise
        return rental_from_row(row) if row else None

    def count_open(self, game_id: int) -> int:
        with self._lock:
            try:
                row = self._connection.execute(
                    """
                    SELECT COUNT(*) AS total
                    FROM rentals
                    WHERE game_id = ?
                      AND return_date IS NULL
                    """,
                    (game_id,),
                ).fetchone()
            except Exception:
                self._logger.exception(
                    "Failed to count open rentals for game_id=%s", game_id
                )
                raise
        return int(row["total"]) if row else 0

    def update_return(
        self,
        rental_id: int,
        return_date: date,
        delay_fee: Decimal,
    ) -> bool:
        """Close an open rental. Returns False when no open row matched."""
        with self._lock:
            try:
                with transaction(self._connection):
                    cursor = self._connection.execute(
                        """
                        UPDATE rentals
                        SET
                            return_date = ?,
                            delay_fee = ?
                        WHERE id = ?
                          AND return_date IS NULL
                        """,
                        (return_date.isoformat(), str(delay_fee), rental_id),
                    )
            except Exception:
                self._logger.exception("Failed to return rental id=%s", rental_id)
                raise
        return cursor.rowcount > 0

    def delete(self, rental_id: int) -> bool:
        with self._lock:
            try:
                with transaction(self._connection):
                    cursor = self._connection.execute(
                        "DELETE FROM rentals WHERE id = ?",
                        (rental_id,),
                    )
            except Exception:
                self._logger.exception("Failed to delete rental id=%s", rental_id)
                raise
        return cursor.rowcount > 0

    def list_joined(self) -> List[RentalView]:
        with self._lock:
            try:
                rows = self._connection.execute(
                    """
                    SELECT
                        r.*,
                        c.name AS customer_name,
                        g.name AS game_name
                    FROM rentals r
                    JOIN customers c ON c.id = r.customer_id
                    JOIN games g ON g.id = r.game_id
                    ORDER BY r.id
                    """
                ).fetchall()
            except Exception:
                self._logger.exception("Failed to list rentals")
                raise
        return [rental_view_from_row(row) for row in rows]
