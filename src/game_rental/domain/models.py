"""Domain dataclasses and enums."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from game_rental.domain.money import format_money


class RentalStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass(slots=True)
class Customer:
    id: Optional[int]
    name: str
    phone: str
    cpf: str


@dataclass(slots=True)
class Game:
    id: Optional[int]
    name: str
    price_per_day: Decimal
    stock_total: int
    image: Optional[str] = None


@dataclass(slots=True)
class Rental:
    id: Optional[int]
    customer_id: int
    game_id: int
    rent_date: date
    days_rented: int
    original_price: Decimal
    return_date: Optional[date] = None
    delay_fee: Optional[Decimal] = None

    @property
    def status(self) -> RentalStatus:
        if self.return_date is None:
            return RentalStatus.OPEN
        return RentalStatus.CLOSED

    @property
    def is_open(self) -> bool:
        return self.return_date is None


@dataclass(frozen=True, slots=True)
class EntityRef:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class RentalView:
    """A rental joined with the names of its customer and game."""

    rental: Rental
    customer: EntityRef
    game: EntityRef

    def to_dict(self) -> dict[str, Any]:
        rental = self.rental
        return {
            "id": rental.id,
            "customerId": rental.customer_id,
            "gameId": rental.game_id,
            "rentDate": rental.rent_date.isoformat(),
            "daysRented": rental.days_rented,
            "returnDate": rental.return_date.isoformat()
            if rental.return_date
            else None,
            "originalPrice": format_money(rental.original_price),
            "delayFee": format_money(rental.delay_fee),
            "customer": {"id": self.customer.id, "name": self.customer.name},
            "game": {"id": self.game.id, "name": self.game.name},
        }
