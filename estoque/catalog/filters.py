"""
Fixed-schema product catalog.

Filtering recomputes over the whole list on every query, which is fine at
the scale of one sector's stockroom.
"""

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field

from estoque.datatables.columns import fresh_id
from estoque.notifications import Notifier

ALL_CATEGORIES = "all"


class Product(BaseModel):
    id: str = Field(default_factory=fresh_id)
    name: str
    category: str
    quantity: int = Field(default=0, ge=0)
    location: str = ""
    last_updated: date = Field(default_factory=date.today)
    min_stock: int = Field(default=0, ge=0)
    custom_fields: Dict[str, Any] = Field(default_factory=dict)

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_stock


def matches(product: Any, search_term: str = "", category: str = ALL_CATEGORIES) -> bool:
    """Works on anything with name, location and category attributes."""
    if category != ALL_CATEGORIES and product.category != category:
        return False
    term = (search_term or "").lower()
    return term in (product.name or "").lower() or term in (product.location or "").lower()


def filter_products(
    products: Iterable[Any], search_term: str = "", category: str = ALL_CATEGORIES
) -> List[Any]:
    return [p for p in products if matches(p, search_term, category)]


def categories(products: Iterable[Any]) -> List[str]:
    """Distinct categories in first-seen order."""
    return list(dict.fromkeys(p.category for p in products))


def low_stock(products: Iterable[Any]) -> List[Any]:
    return [p for p in products if p.quantity <= p.min_stock]


class ProductCatalog:
    """In-memory catalog with notifying mutations."""

    def __init__(self, products: Iterable[Product] = (), notifier: Optional[Notifier] = None):
        self.products: List[Product] = list(products)
        self.notifier = notifier or Notifier()

    def get(self, product_id: str) -> Optional[Product]:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def add(
        self,
        name: str,
        category: str,
        quantity: int = 0,
        location: str = "",
        min_stock: int = 0,
    ) -> Optional[Product]:
        if not (name or "").strip() or not (category or "").strip():
            self.notifier.error("Erro", "Nome e categoria são obrigatórios")
            return None
        try:
            product = Product(
                name=name,
                category=category,
                quantity=max(0, int(quantity or 0)),
                location=location,
                min_stock=min_stock,
            )
        except (TypeError, ValueError) as e:
            self.notifier.error("Erro", str(e))
            return None
        self.products.append(product)
        self.notifier.success("Sucesso", "Produto adicionado com sucesso!")
        return product

    def update(self, product_id: str, **changes: Any) -> Optional[Product]:
        current = self.get(product_id)
        if current is None:
            self.notifier.error("Erro", "Produto não encontrado")
            return None
        data = current.model_dump()
        data.update(changes)
        if not str(data.get("name") or "").strip() or not str(data.get("category") or "").strip():
            self.notifier.error("Erro", "Nome e categoria são obrigatórios")
            return None
        try:
            data["quantity"] = max(0, int(data.get("quantity") or 0))
            data["last_updated"] = date.today()
            updated = Product.model_validate(data)
        except (TypeError, ValueError) as e:
            self.notifier.error("Erro", str(e))
            return None
        self.products = [updated if p.id == product_id else p for p in self.products]
        self.notifier.success("Sucesso", "Produto atualizado com sucesso!")
        return updated

    def remove(self, product_id: str) -> Optional[Product]:
        removed = self.get(product_id)
        self.products = [p for p in self.products if p.id != product_id]
        self.notifier.success("Produto removido", "O produto foi removido com sucesso")
        return removed

    def adjust_quantity(self, product_id: str, delta: int) -> Optional[Product]:
        current = self.get(product_id)
        if current is None:
            self.notifier.error("Erro", "Produto não encontrado")
            return None
        try:
            quantity = max(0, current.quantity + int(delta))
        except (TypeError, ValueError) as e:
            self.notifier.error("Erro", str(e))
            return None
        return self.update(product_id, quantity=quantity)

    def categories(self) -> List[str]:
        return categories(self.products)

    def low_stock(self) -> List[Product]:
        return low_stock(self.products)

    def filter(self, search_term: str = "", category: str = ALL_CATEGORIES) -> Sequence[Product]:
        return filter_products(self.products, search_term, category)
