"""Customer registration rules."""

from __future__ import annotations

from typing import List, Optional, Protocol

from game_rental.domain.models import Customer
from game_rental.logging_config import get_logger
from game_rental.services.errors import DuplicateError, NotFoundError
from game_rental.services.validation import digits, positive_int, required_text


class CustomerRepository(Protocol):
    def create(self, name: str, phone: str, cpf: str) -> Customer: ...

    def update(
        self, customer_id: int, name: str, phone: str, cpf: str
    ) -> Optional[Customer]: ...

    def list_all(self) -> List[Customer]: ...

    def find_by_id(self, customer_id: int) -> Optional[Customer]: ...

    def find_by_cpf(self, cpf: str) -> Optional[Customer]: ...


def _clean_fields(name: object, phone: object, cpf: object) -> tuple[str, str, str]:
    return (
        required_text(name, "name"),
        digits(phone, "phone", min_len=10, max_len=11),
        digits(cpf, "cpf", min_len=11, max_len=11),
    )


class CustomerService:
    """Service for customer records; cpf is unique across customers."""

    def __init__(self, repository: CustomerRepository) -> None:
        self._repository = repository
        self._logger = get_logger(self.__class__.__name__)

    def create_customer(self, name: object, phone: object, cpf: object) -> Customer:
        name, phone, cpf = _clean_fields(name, phone, cpf)
        if self._repository.find_by_cpf(cpf) is not None:
            raise DuplicateError("CPF já cadastrado")
        customer = self._repository.create(name, phone, cpf)
        self._logger.info("Created customer id=%s", customer.id)
        return customer

    def list_customers(self) -> List[Customer]:
        return self._repository.list_all()

    def get_customer(self, customer_id: object) -> Customer:
        customer_id = positive_int(customer_id, "id")
        customer = self._repository.find_by_id(customer_id)
        if customer is None:
            raise NotFoundError("customer", customer_id, "Cliente não encontrado")
        return customer

    def update_customer(
        self,
        customer_id: object,
        name: object,
        phone: object,
        cpf: object,
    ) -> Customer:
        customer_id = positive_int(customer_id, "id")
        name, phone, cpf = _clean_fields(name, phone, cpf)
        if self._repository.find_by_id(customer_id) is None:
            raise NotFoundError("customer", customer_id, "Cliente não encontrado")

        owner = self._repository.find_by_cpf(cpf)
        if owner is not None and owner.id != customer_id:
            raise DuplicateError("CPF já cadastrado para outro cliente")

        customer = self._repository.update(customer_id, name, phone, cpf)
        if customer is None:
            raise NotFoundError("customer", customer_id, "Cliente não encontrado")
        self._logger.info("Updated customer id=%s", customer_id)
        return customer
