"""In-memory stores with the same interface as the SQLite repositories."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from game_rental.domain.models import Customer, EntityRef, Game, Rental, RentalView


class MemoryCustomerStore:
    def __init__(self) -> None:
        self._rows: Dict[int, Customer] = {}
        self._next_id = 1

    def create(self, name: str, phone: str, cpf: str) -> Customer:
        customer = Customer(id=self._next_id, name=name, phone=phone, cpf=cpf)
        self._rows[customer.id] = customer
        self._next_id += 1
        return replace(customer)

    def update(self, customer_id: int, name: str, phone: str, cpf: str) -> Optional[Customer]:
        if customer_id not in self._rows:
            return None
        self._rows[customer_id] = Customer(id=customer_id, name=name, phone=phone, cpf=cpf)
        return replace(self._rows[customer_id])

    def list_all(self) -> List[Customer]:
        return [replace(self._rows[key]) for key in sorted(self._rows)]

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        customer = self._rows.get(customer_id)
        return replace(customer) if customer else None

    def find_by_cpf(self, cpf: str) -> Optional[Customer]:
        for customer in self._rows.values():
            if customer.cpf == cpf:
                return replace(customer)
        return None


class MemoryGameStore:
    def __init__(self) -> None:
        self._rows: Dict[int, Game] = {}
        self._next_id = 1

    def create(
        self,
        name: str,
        price_per_day: Decimal,
        stock_total: int,
        image: Optional[str] = None,
    ) -> Game:
        game = Game(
            id=self._next_id,
            name=name,
            price_per_day=price_per_day,
            stock_total=stock_total,
            image=image,
        )
        self._rows[game.id] = game
        self._next_id += 1
        return replace(game)

    def list_all(self) -> List[Game]:
        return [replace(self._rows[key]) for key in sorted(self._rows)]

    def find_by_id(self, game_id: int) -> Optional[Game]:
        game = self._rows.get(game_id)
        return replace(game) if game else None

    def find_by_name(self, name: str) -> Optional[Game]:
        for game in self._rows.values():
            if game.name == name:
                return replace(game)
        return None


class MemoryRentalStore:
    """Rental rows kept in a dict; joins read from the given customer and game stores."""

    def __init__(
        self,
        customers: MemoryCustomerStore,
        games: MemoryGameStore,
    ) -> None:
        self._customers = customers
        self._games = games
        self._rows: Dict[int, Rental] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    @contextmanager
    def checkout_guard(self, game_id: int) -> Iterator[None]:
        with self._lock:
            yield

    def insert(self, rental: Rental) -> int:
        with self._lock:
            rental_id = self._next_id
            self._next_id += 1
            self._rows[rental_id] = replace(rental, id=rental_id)
        return rental_id

    def find_by_id(self, rental_id: int) -> Optional[Rental]:
        with self._lock:
            rental = self._rows.get(rental_id)
            return replace(rental) if rental else None

    def count_open(self, game_id: int) -> int:
        with self._lock:
            return sum(
                1
                for rental in self._rows.values()
                if rental.game_id == game_id and rental.return_date is None
            )

    def update_return(self, rental_id: int, return_date: date, delay_fee: Decimal) -> bool:
        with self._lock:
            rental = self._rows.get(rental_id)
            if rental is None or rental.return_date is not None:
                return False
            rental.return_date = return_date
            rental.delay_fee = delay_fee
        return True

    def delete(self, rental_id: int) -> bool:
        with self._lock:
            return self._rows.pop(rental_id, None) is not None

    def list_joined(self) -> List[RentalView]:
        views: List[RentalView] = []
        with self._lock:
            rentals = [replace(self._rows[key]) for key in sorted(self._rows)]
        for rental in rentals:
            customer = self._customers.find_by_id(rental.customer_id)
            game = self._games.find_by_id(rental.game_id)
            if customer is None or game is None:
                continue
            views.append(
                RentalView(
                    rental=rental,
                    customer=EntityRef(id=customer.id, name=customer.name),
                    game=EntityRef(id=game.id, name=game.name),
                )
            )
        return views
