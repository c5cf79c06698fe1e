"""Single-profile product catalog persisted to a local JSON file.

The whole catalog is rewritten on every mutation. There is no locking; one
process is expected to own the file at a time.
"""
from __future__ import annotations

import json
import logging
import uuid
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .errors import CatalogError, UnknownProductError
from .ingestion.value_coercion import coerce_float, coerce_int, coerce_text
from .models import ProductRecord


LOGGER = logging.getLogger("shelfrank.catalog")


@dataclass(frozen=True)
class CatalogProduct:
    identifier: str
    name: str
    description: str = ""
    price: float = 0.0
    stock: int = 0
    image: str = ""


_EDITABLE = tuple(f.name for f in fields(CatalogProduct) if f.name != "identifier")


def _uid() -> str:
    return uuid.uuid4().hex[:12]


def _clean_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    unknown = set(payload) - set(_EDITABLE)
    if unknown:
        raise ValueError(f"Unknown catalog fields: {sorted(unknown)}")
    out: Dict[str, Any] = {}
    for key, value in payload.items():
        if key == "price":
            out[key] = coerce_float(value)
        elif key == "stock":
            out[key] = coerce_int(value)
        else:
            out[key] = coerce_text(value)
    return out


class CatalogStore:
    """CRUD access to the catalog file at ``path``."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> List[CatalogProduct]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except json.JSONDecodeError as exc:
            raise CatalogError(f"Catalog file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, list):
            raise CatalogError(f"Catalog file {self.path} must contain a JSON list")
        known = {f.name for f in fields(CatalogProduct)}
        products: List[CatalogProduct] = []
        for position, item in enumerate(raw, start=1):
            try:
                data = {k: item[k] for k in item if k in known}
                products.append(CatalogProduct(**data))
            except (TypeError, KeyError) as exc:
                raise CatalogError(
                    f"Catalog file {self.path} has an invalid product at position {position}: {item!r}"
                ) from exc
        return products

    def _save(self, products: List[CatalogProduct]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [asdict(p) for p in products]
        self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")

    def list(self, query: Optional[str] = None) -> List[CatalogProduct]:
        """Return all products, or those whose name or description contains ``query``."""

        products = self._load()
        if not query:
            return products
        needle = query.lower()
        return [p for p in products if needle in p.name.lower() or needle in p.description.lower()]

    def get(self, identifier: str) -> CatalogProduct:
        for product in self._load():
            if product.identifier == identifier:
                return product
        raise UnknownProductError(identifier)

    def create(self, **payload: Any) -> CatalogProduct:
        data = _clean_payload(payload)
        if not data.get("name"):
            raise ValueError("Catalog products require a name")
        product = CatalogProduct(identifier=_uid(), **data)
        products = self._load()
        products.append(product)
        self._save(products)
        LOGGER.info("Created catalog product %s (%s)", product.identifier, product.name)
        return product

    def update(self, identifier: str, **payload: Any) -> CatalogProduct:
        data = _clean_payload(payload)
        if "name" in data and not data["name"]:
            raise ValueError("Catalog products require a name")
        products = self._load()
        for i, product in enumerate(products):
            if product.identifier == identifier:
                products[i] = replace(product, **data)
                self._save(products)
                LOGGER.info("Updated catalog product %s", identifier)
                return products[i]
        raise UnknownProductError(identifier)

    def delete(self, identifier: str) -> None:
        products = self._load()
        remaining = [p for p in products if p.identifier != identifier]
        if len(remaining) == len(products):
            raise UnknownProductError(identifier)
        self._save(remaining)
        LOGGER.info("Deleted catalog product %s", identifier)

    def import_records(self, records: Iterable[ProductRecord]) -> List[CatalogProduct]:
        """Append ingested records as new catalog products, in rank order."""

        ordered = sorted(records, key=lambda r: r.current_rank)
        added = [
            CatalogProduct(
                identifier=_uid(),
                name=r.product_name,
                description=r.description,
                price=r.unit_price,
                stock=r.stock_quantity,
            )
            for r in ordered
        ]
        products = self._load()
        products.extend(added)
        self._save(products)
        LOGGER.info("Imported %d products into %s", len(added), self.path)
        return added
