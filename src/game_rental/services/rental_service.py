"""Rental lifecycle rules: opening, returning and deleting rentals."""

from __future__ import annotations

from contextlib import AbstractContextManager, nullcontext
from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional, Protocol

from game_rental.domain.models import Customer, Game, Rental, RentalView
from game_rental.domain.money import ZERO, quantize
from game_rental.logging_config import get_logger
from game_rental.services.errors import (
    AlreadyReturnedError,
    IncompleteRentalError,
    NotFoundError,
    StockExhaustedError,
)
from game_rental.services.validation import positive_int


class CustomerStore(Protocol):
    def find_by_id(self, customer_id: int) -> Optional[Customer]: ...


class GameStore(Protocol):
    def find_by_id(self, game_id: int) -> Optional[Game]: ...


class RentalStore(Protocol):
    def checkout_guard(self, game_id: int) -> AbstractContextManager[None]: ...

    def insert(self, rental: Rental) -> int: ...

    def find_by_id(self, rental_id: int) -> Optional[Rental]: ...

    def count_open(self, game_id: int) -> int: ...

    def update_return(
        self, rental_id: int, return_date: date, delay_fee: Decimal
    ) -> bool: ...

    def delete(self, rental_id: int) -> bool: ...

    def list_joined(self) -> List[RentalView]: ...


def compute_delay_fee(rental: Rental, return_date: date) -> Decimal:
    """Fee owed for the days kept past ``rent_date + days_rented``.

    Elapsed days are the plain calendar difference between the two dates, so
    returning on the due date itself costs nothing. The daily rate is taken
    from ``original_price`` so later catalog changes do not apply.
    """
    elapsed_days = (return_date - rental.rent_date).days
    delay_days = elapsed_days - rental.days_rented
    if delay_days <= 0:
        return ZERO
    return quantize(delay_days * rental.original_price / rental.days_rented)


class RentalLedger:
    """Service for rental business rules."""

    def __init__(
        self,
        customers: CustomerStore,
        games: GameStore,
        rentals: RentalStore,
        *,
        clock: Callable[[], date] = date.today,
        serialize_checkout: bool = False,
    ) -> None:
        self._customers = customers
        self._games = games
        self._rentals = rentals
        self._clock = clock
        self._serialize_checkout = serialize_checkout
        self._logger = get_logger(self.__class__.__name__)

    def _get_game(self, game_id: int) -> Game:
        game = self._games.find_by_id(game_id)
        if game is None:
            raise NotFoundError("game", game_id, "Jogo não encontrado")
        return game

    def _get_rental(self, rental_id: int) -> Rental:
        rental = self._rentals.find_by_id(rental_id)
        if rental is None:
            raise NotFoundError("rental", rental_id, "Aluguel não encontrado")
        return rental

    def _checkout_scope(self, game_id: int) -> AbstractContextManager[None]:
        if self._serialize_checkout:
            return self._rentals.checkout_guard(game_id)
        return nullcontext()

    def open_rental(
        self,
        customer_id: object,
        game_id: object,
        days_rented: object,
    ) -> Rental:
        customer_id = positive_int(customer_id, "customerId")
        game_id = positive_int(game_id, "gameId")
        days_rented = positive_int(days_rented, "daysRented")

        if self._customers.find_by_id(customer_id) is None:
            raise NotFoundError("customer", customer_id, "Cliente não encontrado")
        game = self._get_game(game_id)

        with self._checkout_scope(game_id):
            open_count = self._rentals.count_open(game_id)
            if open_count >= game.stock_total:
                self._logger.warning(
                    "Stock exhausted for game_id=%s (%s/%s open)",
                    game_id,
                    open_count,
                    game.stock_total,
                )
                raise StockExhaustedError("Estoque insuficiente")

            rental = Rental(
                id=None,
                customer_id=customer_id,
                game_id=game_id,
                rent_date=self._clock(),
                days_rented=days_rented,
                original_price=days_rented * game.price_per_day,
            )
            rental.id = self._rentals.insert(rental)

        self._logger.info(
            "Opened rental id=%s customer_id=%s game_id=%s days=%s",
            rental.id,
            customer_id,
            game_id,
            days_rented,
        )
        return rental

    def return_rental(self, rental_id: object) -> Rental:
        rental_id = positive_int(rental_id, "id")
        rental = self._get_rental(rental_id)
        if not rental.is_open:
            raise AlreadyReturnedError("Aluguel já devolvido")

        return_date = self._clock()
        delay_fee = compute_delay_fee(rental, return_date)
        if not self._rentals.update_return(rental_id, return_date, delay_fee):
            # Closed by a concurrent return between the read and the update.
            raise AlreadyReturnedError("Aluguel já devolvido")

        rental.return_date = return_date
        rental.delay_fee = delay_fee
        self._logger.info(
            "Returned rental id=%s delay_fee=%s", rental_id, delay_fee
        )
        return rental

    def delete_rental(self, rental_id: object) -> None:
        rental_id = positive_int(rental_id, "id")
        rental = self._get_rental(rental_id)
        if rental.is_open:
            raise IncompleteRentalError("Aluguel ainda não devolvido")
        if not self._rentals.delete(rental_id):
            raise NotFoundError("rental", rental_id, "Aluguel não encontrado")
        self._logger.info("Deleted rental id=%s", rental_id)

    def list_rentals(self) -> List[RentalView]:
        return self._rentals.list_joined()

    def available_stock(self, game_id: object) -> int:
        game_id = positive_int(game_id, "gameId")
        game = self._get_game(game_id)
        return max(game.stock_total - self._rentals.count_open(game_id), 0)
