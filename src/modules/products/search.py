"""Free-text product search.

A product matches when the lower-cased term is a substring of any one of
its six fields rendered as text.  Fields are checked one by one, so a term
that straddles two fields (``"mouse logix"``) does not match.

The same rules back ``GET /products?search=`` on the server and the live
filter the UI applies to its cached list, so both always agree.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Iterator, List, Optional, Protocol, TypeVar


class Searchable(Protocol):
    id: int
    name: str
    brand: str
    price: Decimal
    description: str
    stock: int


P = TypeVar("P", bound=Searchable)


def price_text(price: Decimal) -> str:
    """Canonical text of a price: fixed-point, no trailing zeros.

    ``Decimal("49.00")`` -> ``"49"``, ``Decimal("19.90")`` -> ``"19.9"``.
    Stored values (two decimal places) and parsed JSON values then render
    the same way.
    """
    return format(Decimal(price).normalize(), "f")


def searchable_values(product: Searchable) -> Iterator[str]:
    yield str(product.id)
    yield product.name.lower()
    yield product.brand.lower()
    yield product.description.lower()
    yield price_text(product.price)
    yield str(product.stock)


def normalise_term(term: Optional[str]) -> str:
    """Lower-cased term; empty when the term is blank or only whitespace."""
    term = term or ""
    return term.lower() if term.strip() else ""


def matches(product: Searchable, term: str) -> bool:
    needle = normalise_term(term)
    if not needle:
        return True
    return any(needle in value for value in searchable_values(product))


def filter_products(products: Iterable[P], term: Optional[str]) -> List[P]:
    """Products matching ``term``, in their original order.

    A blank or whitespace-only term returns every product.
    """
    needle = normalise_term(term)
    if not needle:
        return list(products)
    return [p for p in products if matches(p, needle)]
