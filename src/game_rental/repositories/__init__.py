"""Repositories for data access."""

from game_rental.repositories.customer_repo import CustomerRepo
from game_rental.repositories.game_repo import GameRepo
from game_rental.repositories.mappers import (
    customer_from_row,
    customer_to_record,
    game_from_row,
    game_to_record,
    rental_from_row,
    rental_to_record,
    rental_view_from_row,
)
from game_rental.repositories.memory import (
    MemoryCustomerStore,
    MemoryGameStore,
    MemoryRentalStore,
)
from game_rental.repositories.rental_repo import RentalRepo

__all__ = [
    "CustomerRepo",
    "customer_from_row",
    "customer_to_record",
    "game_from_row",
    "game_to_record",
    "GameRepo",
    "MemoryCustomerStore",
    "MemoryGameStore",
    "MemoryRentalStore",
    "rental_from_row",
    "rental_to_record",
    "rental_view_from_row",
    "RentalRepo",
]
