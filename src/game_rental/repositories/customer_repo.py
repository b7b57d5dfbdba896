"""Repository for customer persistence."""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from game_rental.db.connection import transaction
from game_rental.domain.models import Customer
from game_rental.logging_config import get_logger
from game_rental.repositories.mappers import customer_from_row


class CustomerRepo:
    """CRUD operations for customers."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def create(self, name: str, phone: str, cpf: str) -> Customer:
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    """
                    INSERT INTO customers (name, phone, cpf)
                    VALUES (?, ?, ?)
                    """,
                    (name, phone, cpf),
                )
        except Exception:
            self._logger.exception("Failed to create customer")
            raise

        return Customer(id=cursor.lastrowid, name=name, phone=phone, cpf=cpf)

    def update(
        self,
        customer_id: int,
        name: str,
        phone: str,
        cpf: str,
    ) -> Optional[Customer]:
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    """
                    UPDATE customers
                    SET
                        name = ?,
                        phone = ?,
                        cpf = ?
                    WHERE id = ?
                    """,
                    (name, phone, cpf, customer_id),
                )
        except Exception:
            self._logger.exception("Failed to update customer id=%s", customer_id)
            raise

        if cursor.rowcount == 0:
            return None
        return self.find_by_id(customer_id)

    def list_all(self) -> List[Customer]:
        try:
            rows = self._connection.execute(
                "SELECT * FROM customers ORDER BY id"
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to list customers")
            raise
        return [customer_from_row(row) for row in rows]

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        try:
            row = self._connection.execute(
                "SELECT * FROM customers WHERE id = ?",
                (customer_id,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get customer id=%s", customer_id)
            raise
        return customer_from_row(row) if row else None

    def find_by_cpf(self, cpf: str) -> Optional[Customer]:
        try:
            row = self._connection.execute(
                "SELECT * FROM customers WHERE cpf = ?",
                (cpf,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get customer by cpf")
            raise
        return customer_from_row(row) if row else None
