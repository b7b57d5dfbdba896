"""Repository for the game catalog."""

from __future__ import annotations

import sqlite3
from decimal import Decimal
from typing import List, Optional

from game_rental.db.connection import transaction
from game_rental.domain.models import Game
from game_rental.logging_config import get_logger
from game_rental.repositories.mappers import game_from_row


class GameRepo:
    """Catalog operations for games."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def create(
        self,
        name: str,
        price_per_day: Decimal,
        stock_total: int,
        image: Optional[str] = None,
    ) -> Game:
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    """
                    INSERT INTO games (name, image, stock_total, price_per_day)
                    VALUES (?, ?, ?, ?)
                    """,
                    (name, image, stock_total, str(price_per_day)),
                )
        except Exception:
            self._logger.exception("Failed to create game")
            raise

        return Game(
            id=cursor.lastrowid,
            name=name,
            price_per_day=price_per_day,
            stock_total=stock_total,
            image=image,
        )

    def list_all(self) -> List[Game]:
        try:
            rows = self._connection.execute(
                "SELECT * FROM games ORDER BY id"
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to list games")
            raise
        return [game_from_row(row) for row in rows]

    def find_by_id(self, game_id: int) -> Optional[Game]:
        try:
            row = self._connection.execute(
                "SELECT * FROM games WHERE id = ?",
                (game_id,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get game id=%s", game_id)
            raise
        return game_from_row(row) if row else None

    def find_by_name(self, name: str) -> Optional[Game]:
        try:
            row = self._connection.execute(
                "SELECT * FROM games WHERE name = ?",
                (name,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get game name=%s", name)
            raise
        return game_from_row(row) if row else None
