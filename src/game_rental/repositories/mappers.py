"""SQLite row mappers for domain models."""

from __future__ import annotations

import sqlite3
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional

from dateutil import parser

from game_rental.domain.models import Customer, EntityRef, Game, Rental, RentalView
from game_rental.domain.money import to_money


def _row_value(row: sqlite3.Row, key: str) -> Any:
    return row[key] if key in row.keys() else None


def _to_date(value: Optional[str | date]) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, date):
        return value
    return parser.isoparse(value).date()


def _to_optional_money(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return to_money(value)


def customer_from_row(row: sqlite3.Row) -> Customer:
    return Customer(
        id=_row_value(row, "id"),
        name=row["name"],
        phone=row["phone"],
        cpf=row["cpf"],
    )


def customer_to_record(customer: Customer) -> Dict[str, Any]:
    return {
        "id": customer.id,
        "name": customer.name,
        "phone": customer.phone,
        "cpf": customer.cpf,
    }


def game_from_row(row: sqlite3.Row) -> Game:
    return Game(
        id=_row_value(row, "id"),
        name=row["name"],
        price_per_day=to_money(row["price_per_day"]),
        stock_total=int(row["stock_total"]),
        image=_row_value(row, "image"),
    )


def game_to_record(game: Game) -> Dict[str, Any]:
    return {
        "id": game.id,
        "name": game.name,
        "image": game.image,
        "stock_total": game.stock_total,
        "price_per_day": str(game.price_per_day),
    }


def rental_from_row(row: sqlite3.Row) -> Rental:
    return Rental(
        id=_row_value(row, "id"),
        customer_id=row["customer_id"],
        game_id=row["game_id"],
        rent_date=_to_date(row["rent_date"]),
        days_rented=int(row["days_rented"]),
        original_price=to_money(row["original_price"]),
        return_date=_to_date(_row_value(row, "return_date")),
        delay_fee=_to_optional_money(_row_value(row, "delay_fee")),
    )


def rental_to_record(rental: Rental) -> Dict[str, Any]:
    return {
        "id": rental.id,
        "customer_id": rental.customer_id,
        "game_id": rental.game_id,
        "rent_date": rental.rent_date.isoformat(),
        "days_rented": rental.days_rented,
        "return_date": rental.return_date.isoformat() if rental.return_date else None,
        "original_price": str(rental.original_price),
        "delay_fee": str(rental.delay_fee) if rental.delay_fee is not None else None,
    }


def rental_view_from_row(row: sqlite3.Row) -> RentalView:
    return RentalView(
        rental=rental_from_row(row),
        customer=EntityRef(id=row["customer_id"], name=row["customer_name"]),
        game=EntityRef(id=row["game_id"], name=row["game_name"]),
    )
