"""Domain models for GameRental."""

from game_rental.domain.models import (
    Customer,
    EntityRef,
    Game,
    Rental,
    RentalStatus,
    RentalView,
)

__all__ = [
    "Customer",
    "EntityRef",
    "Game",
    "Rental",
    "RentalStatus",
    "RentalView",
]
