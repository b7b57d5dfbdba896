"""Game catalog rules."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Protocol

from game_rental.domain.models import Game
from game_rental.logging_config import get_logger
from game_rental.services.errors import DuplicateError, ValidationError
from game_rental.services.validation import positive_int, positive_money, required_text


class GameRepository(Protocol):
    def create(
        self,
        name: str,
        price_per_day: Decimal,
        stock_total: int,
        image: Optional[str] = None,
    ) -> Game: ...

    def list_all(self) -> List[Game]: ...

    def find_by_name(self, name: str) -> Optional[Game]: ...


class GameService:
    """Service for the game catalog; names are unique."""

    def __init__(self, repository: GameRepository) -> None:
        self._repository = repository
        self._logger = get_logger(self.__class__.__name__)

    def create_game(
        self,
        name: object,
        price_per_day: object,
        stock_total: object,
        image: Optional[str] = None,
    ) -> Game:
        name = required_text(name, "name")
        price = positive_money(price_per_day, "pricePerDay")
        stock = positive_int(stock_total, "stockTotal")
        if image is not None and not isinstance(image, str):
            raise ValidationError("Campo inválido: image", "image")

        if self._repository.find_by_name(name) is not None:
            raise DuplicateError("Jogo já cadastrado")
        game = self._repository.create(name, price, stock, image)
        self._logger.info("Created game id=%s name=%s", game.id, name)
        return game

    def list_games(self) -> List[Game]:
        return self._repository.list_all()
