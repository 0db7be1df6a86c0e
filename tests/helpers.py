class Account:
    def __init__(self, balance: int = 0) -> None:
        self.balance = balance

    def deposit(self, amount: int) -> int:
        self.balance += amount
        return self.balance


class SavingsAccount(Account):
    pass


class CustomError(Exception):
    pass


class StartsWith:
    """Hamcrest-style matcher exposing ``matches``."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def matches(self, item: object) -> bool:
        return isinstance(item, str) and item.startswith(self.prefix)

    def __str__(self) -> str:
        return f"a string starting with {self.prefix!r}"
