import unittest
from decimal import Decimal

from game_rental.repositories.memory import MemoryCustomerStore, MemoryGameStore
from game_rental.services.customer_service import CustomerService
from game_rental.services.errors import (
    ConflictError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from game_rental.services.game_service import GameService


class CustomerServiceTests(unittest.TestCase):
    def setUp(self):
        self.service = CustomerService(MemoryCustomerStore())

    def test_create_and_get(self):
        created = self.service.create_customer(" João ", "21998899222", "01234567890")

        self.assertEqual(created.name, "João")
        self.assertEqual(self.service.get_customer(created.id), created)
        self.assertEqual(self.service.list_customers(), [created])

    def test_duplicate_cpf_is_a_conflict(self):
        self.service.create_customer("João", "21998899222", "01234567890")

        with self.assertRaises(DuplicateError) as ctx:
            self.service.create_customer("Outro", "2199889922", "01234567890")
        self.assertIsInstance(ctx.exception, ConflictError)
        self.assertEqual(ctx.exception.to_dict()["code"], "duplicate")

    def test_invalid_fields(self):
        cases = [
            ("", "21998899222", "01234567890", "name"),
            ("João", "123", "01234567890", "phone"),
            ("João", "21998899222", "0123456789", "cpf"),
            ("João", "21998899222", "0123456789a", "cpf"),
        ]
        for name, phone, cpf, field in cases:
            with self.subTest(field=field, cpf=cpf):
                with self.assertRaises(ValidationError) as ctx:
                    self.service.create_customer(name, phone, cpf)
                self.assertEqual(ctx.exception.field, field)

    def test_get_missing_customer(self):
        with self.assertRaises(NotFoundError):
            self.service.get_customer(5)
        with self.assertRaises(ValidationError):
            self.service.get_customer("cinco")

    def test_update_keeps_own_cpf(self):
        customer = self.service.create_customer("João", "21998899222", "01234567890")

        updated = self.service.update_customer(
            customer.id, "João Alfredo", "21998899221", "01234567890"
        )

        self.assertEqual(updated.name, "João Alfredo")
        self.assertEqual(updated.phone, "21998899221")

    def test_update_with_cpf_of_another_customer(self):
        first = self.service.create_customer("João", "21998899222", "01234567890")
        self.service.create_customer("Maria", "21998899223", "98765432100")

        with self.assertRaises(DuplicateError):
            self.service.update_customer(first.id, "João", "21998899222", "98765432100")

    def test_update_missing_customer(self):
        with self.assertRaises(NotFoundError):
            self.service.update_customer(3, "João", "21998899222", "01234567890")


class GameServiceTests(unittest.TestCase):
    def setUp(self):
        self.service = GameService(MemoryGameStore())

    def test_create_game(self):
        game = self.service.create_game("Banco Imobiliário", "15.90", "3", "http://img")

        self.assertEqual(game.price_per_day, Decimal("15.90"))
        self.assertEqual(game.stock_total, 3)
        self.assertEqual(self.service.list_games(), [game])

    def test_duplicate_name(self):
        self.service.create_game("War", Decimal("3.00"), 1)
        with self.assertRaises(DuplicateError):
            self.service.create_game("War", Decimal("4.00"), 2)

    def test_invalid_values(self):
        cases = [
            ("", Decimal("1.00"), 1, "name"),
            ("War", Decimal("0"), 1, "pricePerDay"),
            ("War", "abc", 1, "pricePerDay"),
            ("War", 1.5, 1, "pricePerDay"),
            ("War", Decimal("1.00"), 0, "stockTotal"),
            ("War", Decimal("1.00"), 1.5, "stockTotal"),
        ]
        for name, price, stock, field in cases:
            with self.subTest(field=field, price=price, stock=stock):
                with self.assertRaises(ValidationError) as ctx:
                    self.service.create_game(name, price, stock)
                self.assertEqual(ctx.exception.field, field)


if __name__ == "__main__":
    unittest.main()
