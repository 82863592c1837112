"""
VariantPriceResolver - discounted prices and price ranking.

A size's effective price is ``price * (1 - discount / 100)``. A product's ranking
price is the lowest effective price over every size of every variant; a product
without sizes has no ranking price and always sorts last.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List, Optional, Sequence, Tuple

HUNDRED = Decimal("100")
CENT = Decimal("0.01")

# (price, discount) of one size row
PricePair = Tuple[Any, Any]


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class VariantPriceResolver:
    """Pure price computations. Identical inputs always give identical outputs."""

    @staticmethod
    def effective_price(price: Any, discount: Any = 0) -> Decimal:
        """
        Price after applying a percentage discount.

        Raises:
            ValueError: if price is not strictly positive or discount is outside [0, 100]
        """
        price = _to_decimal(price)
        discount = _to_decimal(discount or 0)

        if price <= 0:
            raise ValueError(f"Price must be greater than zero, got {price}")
        if discount < 0 or discount > HUNDRED:
            raise ValueError(f"Discount must be between 0 and 100, got {discount}")

        return price * (1 - discount / HUNDRED)

    @staticmethod
    def display_price(value: Decimal) -> Decimal:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)

    def ranking_price(self, sizes: Iterable[PricePair]) -> Optional[Decimal]:
        """Lowest effective price among ``(price, discount)`` pairs, None when there are none."""
        prices = [self.effective_price(price, discount) for price, discount in sizes]
        return min(prices) if prices else None

    def product_ranking_price(self, product) -> Optional[Decimal]:
        """Ranking price of a product whose variants and sizes are loaded (prefetched)."""
        return self.ranking_price(
            (size.price, size.discount) for variant in product.variants.all() for size in variant.sizes.all()
        )

    def sort_by_ranking_price(
        self, rows: Sequence[Tuple[Any, Iterable[PricePair]]], descending: bool = False
    ) -> List[Tuple[Any, Optional[Decimal]]]:
        """
        Order ``(key, size pairs)`` rows by ranking price.

        The sort is stable: rows with equal ranking price keep their incoming
        order. Rows without any size go last for both directions.

        Returns:
            List of ``(key, ranking_price)`` in ranked order
        """
        priced = []
        unpriced = []
        for key, sizes in rows:
            ranking = self.ranking_price(sizes)
            if ranking is None:
                unpriced.append((key, None))
            else:
                priced.append((key, ranking))

        priced.sort(key=lambda row: row[1], reverse=descending)
        return priced + unpriced
