from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple, TypedDict

# Allowed ingredient statuses
STATUSES = ("healthy", "harmful", "neutral")

Status = Literal["healthy", "harmful", "neutral"]


class IngredientDict(TypedDict):
    name: str
    quantity: str
    status: Status
    description: str


class SourceDict(TypedDict):
    title: str
    uri: str


class AnalysisResultDict(TypedDict):
    """
    The canonical JSON contract for one analysed product.

    This must be the ONLY shape that leaves the report engine.
    """
    productName: str
    summary: str
    ingredients: List[IngredientDict]
    sources: List[SourceDict]
    fssaiNotice: Optional[str]
    healthScore: int


@dataclass(frozen=True)
class Ingredient:
    name: str
    quantity: str
    status: str
    description: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Ingredient name must not be empty.")
        if self.status not in STATUSES:
            raise ValueError(f"Invalid status: {self.status!r}")

    def to_dict(self) -> IngredientDict:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "status": self.status,  # type: ignore[typeddict-item]
            "description": self.description,
        }


@dataclass(frozen=True)
class Source:
    title: str
    uri: str

    def to_dict(self) -> SourceDict:
        return {"title": self.title, "uri": self.uri}


@dataclass(frozen=True)
class AnalysisResult:
    """
    Python representation of one parsed report.

    Built once per parse call and never mutated. Use .to_dict() before
    handing it to the JSON API.
    """
    product_name: str
    summary: str
    ingredients: Tuple[Ingredient, ...]
    health_score: int
    sources: Tuple[Source, ...] = field(default_factory=tuple)
    fssai_notice: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.ingredients:
            raise ValueError("AnalysisResult needs at least one ingredient.")

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    @property
    def harmful_ingredients(self) -> Tuple[Ingredient, ...]:
        return tuple(i for i in self.ingredients if i.status == "harmful")

    @property
    def safe_ingredients(self) -> Tuple[Ingredient, ...]:
        return tuple(i for i in self.ingredients if i.status != "harmful")

    def to_dict(self) -> AnalysisResultDict:
        """
        Return a plain dict matching AnalysisResultDict / JSON contract.
        """
        return {
            "productName": self.product_name,
            "summary": self.summary,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "sources": [s.to_dict() for s in self.sources],
            "fssaiNotice": self.fssai_notice,
            "healthScore": int(self.health_score),
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "AnalysisResult":
        """
        Rebuild a result from its to_dict() shape.
        """
        return cls(
            product_name=str(raw.get("productName", "")),
            summary=str(raw.get("summary", "")),
            ingredients=tuple(
                Ingredient(
                    name=str(i["name"]),
                    quantity=str(i.get("quantity", "")),
                    status=str(i.get("status", "neutral")),
                    description=str(i.get("description", "")),
                )
                for i in raw.get("ingredients") or []
            ),
            health_score=int(raw.get("healthScore", 0)),
            sources=tuple(
                Source(title=str(s.get("title", "")), uri=str(s.get("uri", "")))
                for s in raw.get("sources") or []
            ),
            fssai_notice=raw.get("fssaiNotice") or None,
        )
