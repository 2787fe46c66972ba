"""Stable integer codes for product descriptions."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List

from src.ingestion.record_validation import SalesObservation

from .exceptions import EncodingError

logger = logging.getLogger(__name__)


class ProductCatalog:
    """Bidirectional mapping between product descriptions and dense codes.

    Codes run from ``0`` to ``len(catalog) - 1`` in the order products were
    first added. Instances are built per run by :func:`build_catalog`.
    """

    def __init__(self, products: Iterable[str] = ()) -> None:
        self._codes: Dict[str, int] = {}
        self._products: List[str] = []
        for product in products:
            self.add(product)

    def add(self, product: str) -> int:
        """Return the code for ``product``, assigning the next one if it is new."""
        code = self._codes.get(product)
        if code is None:
            code = len(self._products)
            self._codes[product] = code
            self._products.append(product)
        return code

    def code_for(self, product: str) -> int:
        try:
            return self._codes[product]
        except KeyError:
            raise EncodingError(f"Product '{product}' is not in the catalog.") from None

    def product_for(self, code: int) -> str:
        if not 0 <= code < len(self._products):
            raise EncodingError(f"Product code {code} is not in the catalog.")
        return self._products[code]

    @property
    def codes(self) -> List[int]:
        return list(range(len(self._products)))

    @property
    def products(self) -> List[str]:
        return list(self._products)

    def as_dict(self) -> Dict[str, int]:
        return dict(self._codes)

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product: object) -> bool:
        return product in self._codes

    def __iter__(self) -> Iterator[str]:
        return iter(self._products)

    def __repr__(self) -> str:
        return f"ProductCatalog({self._codes!r})"


def build_catalog(observations: Iterable[SalesObservation]) -> ProductCatalog:
    """Assign codes to products in first-seen order across ``observations``."""
    catalog = ProductCatalog(observation.product for observation in observations)
    logger.info("Built product catalog with %d products", len(catalog))
    return catalog
