"""Domain-level exceptions.

Every business rule violation is a subclass of DomainException so the CLI
layer can catch them uniformly and display a readable message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UnknownProductError(ValidationError):
    """An invoice line references a product that is not in the catalogue.

    Only raised when the ledger runs with ``on_unknown_product="reject"``.
    """

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Unknown product ID '{product_id}'")
        self.product_id = product_id
