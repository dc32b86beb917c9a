import dataclasses
from typing import Any, Dict, Optional


@dataclasses.dataclass(frozen=True)
class UnitSpec:
    key: str
    to_ml: Optional[float] = None
    to_g: Optional[float] = None

    @property
    def is_volume(self) -> bool:
        return self.to_ml is not None

    @property
    def is_weight(self) -> bool:
        return self.to_g is not None

    @property
    def is_count(self) -> bool:
        return self.to_ml is None and self.to_g is None


@dataclasses.dataclass(frozen=True)
class IngredientLine:
    """A structured ingredient line derived from its raw text.

    ``quantity`` keeps the matched quantity text ("1 1/2") and
    ``quantity_float`` its parsed value.
    """

    raw: str
    quantity: Optional[str]
    quantity_float: Optional[float]
    unit: Optional[UnitSpec]
    ingredient_name: str
    notes: Optional[str]
    quantity_ml: Optional[float] = None
    quantity_g: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the record shape stored with imported recipes."""
        return {
            "raw": self.raw,
            "quantity": self.quantity,
            "quantity_float": self.quantity_float,
            "unit": self.unit.key if self.unit else None,
            "ingredient": self.ingredient_name,
            "notes": self.notes,
            "quantity_ml": self.quantity_ml,
            "quantity_g": self.quantity_g,
        }
