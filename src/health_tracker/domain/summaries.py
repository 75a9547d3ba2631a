"""Domain models for per-day summaries."""

from dataclasses import dataclass, fields, replace

SUMMARY_FIELDS = ("water_oz", "weight", "sleep", "notes")


@dataclass(frozen=True)
class Weight:
    """A body weight measurement."""

    value: float
    unit: str = "lbs"

    def to_dict(self) -> dict[str, object]:
        return {"value": self.value, "unit": self.unit}

    @classmethod
    def from_value(cls, raw: object) -> "Weight | None":
        """Coerce a stored or imported weight into a ``Weight``."""
        if raw is None:
            return None
        if isinstance(raw, Weight):
            return raw
        if isinstance(raw, dict):
            if raw.get("value") is None:
                raise ValueError(f"Weight is missing a value: {raw!r}")
            return cls(value=_to_float(raw["value"]), unit=str(raw.get("unit") or "lbs"))
        if isinstance(raw, int | float):
            return cls(value=float(raw))
        raise ValueError(f"Unsupported weight value: {raw!r}")


@dataclass(frozen=True)
class DailySummary:
    """Aggregate fields for one calendar day that are not discrete entries."""

    date: str
    water_oz: int | None = None
    weight: Weight | None = None
    sleep: object | None = None
    notes: str | None = None

    def merged(self, updates: dict[str, object]) -> "DailySummary":
        """Return a copy with ``updates`` overwriting matching fields."""
        known = {f.name for f in fields(self)} - {"date"}
        unknown = set(updates) - known
        if unknown:
            raise ValueError(f"Unknown summary fields: {sorted(unknown)}")
        changes = dict(updates)
        if "weight" in changes:
            changes["weight"] = Weight.from_value(changes["weight"])
        if changes.get("water_oz") is not None:
            try:
                changes["water_oz"] = int(changes["water_oz"])
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Invalid water_oz: {updates['water_oz']!r}") from exc
        return replace(self, **changes)

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in SUMMARY_FIELDS)

    def to_dict(self) -> dict[str, object]:
        return {
            "date": self.date,
            "water_oz": self.water_oz,
            "weight": self.weight.to_dict() if self.weight else None,
            "sleep": self.sleep,
            "notes": self.notes,
        }


def _to_float(value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Unsupported weight value: {value!r}") from exc
