"""Spare parts, the parts catalog and labor pricing."""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

# (upper price bound, labor markup); the last tier has no bound
LABOR_TIERS = (
    (500, 0),
    (2000, 1000),
    (10000, 3000),
)
TOP_TIER_MARKUP = 8000


@dataclass
class Part:
    """A spare part and the vehicle model it fits."""

    part_id: int
    name: str
    compatible_model: str
    price: float


@dataclass
class PriceResult:
    """Estimate for a set of parts."""

    total_amount: float
    amount_without_labor: float

    @property
    def labor(self) -> float:
        return self.total_amount - self.amount_without_labor


def labor_markup(price: float) -> float:
    """Labor surcharge for one part, chosen by its price bracket."""
    for bound, markup in LABOR_TIERS:
        if price < bound:
            return markup
    return TOP_TIER_MARKUP


def calculate_total_price(parts: Iterable[Part]) -> PriceResult:
    """Sum part prices with and without the tiered labor markup."""
    total_amount = 0.0
    amount_without_labor = 0.0
    for part in parts:
        amount_without_labor += part.price
        total_amount += part.price + labor_markup(part.price)
    return PriceResult(total_amount, amount_without_labor)


class PartsCatalog:
    """Parts keyed by their stringified ID. Re-adding a key overwrites it."""

    def __init__(self, next_id: int = 1):
        self.parts: Dict[str, Part] = {}
        self.next_id = next_id

    def __iter__(self) -> Iterator[Part]:
        return iter(self.parts.values())

    def __len__(self) -> int:
        return len(self.parts)

    def put(self, part: Part) -> Part:
        """Insert a part under its existing ID."""
        self.parts[str(part.part_id)] = part
        if part.part_id >= self.next_id:
            self.next_id = part.part_id + 1
        return part

    def add(self, part: Part) -> Part:
        """Assign the next part ID and insert."""
        part.part_id = self.next_id
        self.next_id += 1
        self.parts[str(part.part_id)] = part
        return part

    def add_new(self, name: str, compatible_model: str, price: float) -> Part:
        return self.add(Part(0, name, compatible_model, price))

    def get(self, part_id: int) -> Optional[Part]:
        return self.parts.get(str(part_id))

    def compatible_with(self, model: str) -> List[Part]:
        """Parts whose compatible model matches exactly."""
        return [p for p in self.parts.values() if p.compatible_model == model]
