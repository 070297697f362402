"""
Article Catalog

Resolves raw input records into ordered-article units with location and
volume, and exposes the aggregate statistics both optimization stages need.
"""

import json
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path
from typing import List, Dict, Any, Union

ArticleId = int
OrderId = int


class InputError(Exception):
    """Raised when an input file cannot be read or has the wrong shape"""
    pass


class CatalogError(Exception):
    """Raised when an ordered article cannot be resolved"""
    pass


@dataclass(frozen=True)
class ArticleLocation:
    """Storage location of an article"""
    warehouse: int
    aisle: int


@dataclass(frozen=True)
class Article:
    """Catalog entry, one per distinct ordered article id"""
    article_id: ArticleId
    volume: int
    location: ArticleLocation


@dataclass(frozen=True)
class OrderedArticleUnit:
    """One occurrence of an article inside one order"""
    order_id: OrderId
    article_id: ArticleId
    volume: int
    location: ArticleLocation

    @classmethod
    def from_article(cls, order_id: OrderId, article: Article) -> 'OrderedArticleUnit':
        return cls(
            order_id=order_id,
            article_id=article.article_id,
            volume=article.volume,
            location=article.location
        )


REQUIRED_SECTIONS = ("ArticleLocations", "Orders", "Articles")


def load_input(input_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a raw input record from a JSON file

    Args:
        input_path: Path to the input JSON file

    Returns:
        Dictionary with 'ArticleLocations', 'Orders' and 'Articles' lists
    """
    input_path = Path(input_path)
    try:
        with open(input_path, 'r') as f:
            record = json.load(f)
    except FileNotFoundError:
        raise InputError(f"Input file not found: {input_path}")
    except json.JSONDecodeError as e:
        raise InputError(f"Cannot deserialize input {input_path}: {e}")

    if not isinstance(record, dict):
        raise InputError(f"Input {input_path} must contain a JSON object")

    missing = [section for section in REQUIRED_SECTIONS if section not in record]
    if missing:
        raise InputError(f"Input {input_path} is missing sections: {', '.join(missing)}")

    return record


class Catalog:
    """Immutable view of all ordered article units of one planning run"""

    def __init__(self, articles: Dict[ArticleId, Article], units: List[OrderedArticleUnit],
                 num_orders: int):
        self._articles = articles
        self._units = tuple(units)
        self._num_orders = num_orders

        self._num_warehouses = len({unit.location.warehouse for unit in self._units})
        # Aisle ids are only unique within a warehouse
        self._num_aisles = len({
            (unit.location.warehouse, unit.location.aisle) for unit in self._units
        })

    @classmethod
    def from_input(cls, record: Dict[str, Any]) -> 'Catalog':
        """
        Build the catalog from a raw input record

        Every article id referenced by an order must resolve to exactly one
        volume and one location; the first matching entry wins.
        """
        try:
            orders = record["Orders"]
            article_rows = record["Articles"]
            location_rows = record["ArticleLocations"]

            order_lines = [(order["OrderId"], order["ArticleIds"]) for order in orders]
            ordered_ids = sorted({
                article_id for _, article_ids in order_lines for article_id in article_ids
            })

            volumes = {}
            for row in article_rows:
                volumes.setdefault(row["ArticleId"], row["Volume"])

            locations = {}
            for row in location_rows:
                locations.setdefault(
                    row["ArticleId"],
                    ArticleLocation(warehouse=row["Warehouse"], aisle=row["Aisle"])
                )
        except (KeyError, TypeError) as e:
            raise InputError(f"Malformed input record: {e!r}")

        articles = OrderedDict()
        for article_id in ordered_ids:
            if article_id not in volumes:
                raise CatalogError(f"Article {article_id} ordered but not listed as article")
            if article_id not in locations:
                raise CatalogError(f"Article {article_id} ordered but has no location")

            articles[article_id] = Article(
                article_id=article_id,
                volume=volumes[article_id],
                location=locations[article_id]
            )

        units = [
            OrderedArticleUnit.from_article(order_id, articles[article_id])
            for order_id, article_ids in order_lines
            for article_id in article_ids
        ]

        return cls(articles, units, num_orders=len(orders))

    @classmethod
    def from_file(cls, input_path: Union[str, Path]) -> 'Catalog':
        """Load an input JSON file and build the catalog"""
        return cls.from_input(load_input(input_path))

    @property
    def units(self) -> tuple:
        """Flat ordered sequence of units; position is the stage-1 genome index"""
        return self._units

    @property
    def num_units(self) -> int:
        return len(self._units)

    @property
    def max_batches(self) -> int:
        # Worst case: every unit in its own batch
        return len(self._units)

    @property
    def num_orders(self) -> int:
        return self._num_orders

    @property
    def num_warehouses(self) -> int:
        return self._num_warehouses

    @property
    def num_aisles(self) -> int:
        return self._num_aisles

    @property
    def num_articles(self) -> int:
        return len(self._articles)

    def get_article(self, article_id: ArticleId) -> Article:
        """Look up a catalog entry by id"""
        try:
            return self._articles[article_id]
        except KeyError:
            raise CatalogError(f"Article {article_id} is not part of any order")

    def order_ids(self) -> List[OrderId]:
        """Distinct order ids of all units, sorted"""
        return sorted({unit.order_id for unit in self._units})

    def units_of_order(self, order_id: OrderId) -> List[OrderedArticleUnit]:
        """All units sharing an order id, in catalog order"""
        return [unit for unit in self._units if unit.order_id == order_id]

    def max_items_per_batch(self, max_weight_per_batch: int) -> int:
        """
        Upper bound on units per batch: how many of the smallest units fit
        into one batch without exceeding the weight limit
        """
        total = 0
        count = 0
        for volume in sorted(unit.volume for unit in self._units):
            if total + volume > max_weight_per_batch:
                break
            total += volume
            count += 1
        return count

    def __len__(self) -> int:
        return len(self._units)

    def __repr__(self) -> str:
        return (f"Catalog(units={self.num_units}, articles={self.num_articles}, "
                f"orders={self.num_orders})")
