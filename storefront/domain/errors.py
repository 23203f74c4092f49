"""Bledy domenowe wspolne dla repozytoriow i serwisow.

Kazdy blad dziedziczy tez po wbudowanym wyjatku, ktory serwisy rzucaly
wczesniej, wiec ``except ValueError`` dalej dziala.
"""


class StoreError(Exception):
    """Baza dla wszystkich sklasyfikowanych bledow."""

    default_message = "request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class NotFound(StoreError, LookupError):
    """Brak encji albo encja innego uzytkownika.

    Jeden blad dla obu przypadkow - cudze zasoby nie sa ujawniane.
    """

    default_message = "not found"


class AddressNotFound(NotFound):
    default_message = "address not found"


class OrderNotFound(NotFound):
    default_message = "order not found"


class ProductNotFound(NotFound):
    default_message = "product not found"


class ProductNotInCart(NotFound):
    default_message = "product not found in cart"


class Forbidden(StoreError, PermissionError):
    """Encja istnieje, ale nalezy do innego uzytkownika."""

    default_message = "forbidden"


class InvalidArgument(StoreError, ValueError):
    default_message = "invalid argument"


class InvalidState(StoreError, ValueError):
    default_message = "operation not allowed in the current state"


class OrderCannotBeCancelled(InvalidState):
    default_message = "order cannot be cancelled in its current status"


class StorageFailure(StoreError, RuntimeError):
    """Blad transakcji albo polaczenia.

    Komunikat zawsze ogolny, blad sterownika zostaje w ``__cause__``
    tylko do logow.
    """

    default_message = "storage failure"

    def __init__(self, message: str | None = None, retryable: bool = False):
        super().__init__(message)
        self.retryable = retryable


class CatalogUnavailable(StoreError, RuntimeError):
    default_message = "product catalog unavailable"
