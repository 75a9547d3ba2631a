"""Analysis records and their read-time normalization.

Analysis files come from an external process in two shapes. The legacy shape
nests values per metric (``calories.intake``, ``macros.protein.grams``,
``water.total_oz``) while the current shape splits them into ``totals`` and
``goals.<metric>.target``. Records are stored verbatim; consumers read them
through ``normalize_analysis`` so shape checks live in one place.
"""

from dataclasses import dataclass, field
from typing import Literal

AnalysisShape = Literal["legacy", "current", "unknown"]

MACRO_NAMES = ("protein", "carbs", "fat")


@dataclass(frozen=True)
class MacroProgress:
    """Actual versus goal for one macro."""

    actual: float | None
    goal: float | None


@dataclass(frozen=True)
class NormalizedAnalysis:
    """Analysis values in a single shape regardless of the source schema."""

    date: str
    shape: AnalysisShape
    calories_intake: float | None = None
    calories_goal: float | None = None
    calories_burned: float | None = None
    calories_net: float | None = None
    macros: dict[str, MacroProgress] = field(default_factory=dict)
    water_actual: float | None = None
    water_goal: float | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "date": self.date,
            "shape": self.shape,
            "calories": {
                "intake": self.calories_intake,
                "goal": self.calories_goal,
                "burned": self.calories_burned,
                "net": self.calories_net,
            },
            "macros": {
                name: {"actual": m.actual, "goal": m.goal}
                for name, m in self.macros.items()
            },
            "water": {"actual": self.water_actual, "goal": self.water_goal},
        }


def detect_shape(payload: dict[str, object]) -> AnalysisShape:
    """Classify an analysis payload by schema version."""
    if isinstance(payload.get("calories"), dict) or isinstance(
        payload.get("macros"), dict
    ):
        return "legacy"
    if isinstance(payload.get("totals"), dict):
        return "current"
    return "unknown"


def normalize_analysis(payload: dict[str, object]) -> NormalizedAnalysis:
    """Map either analysis schema onto ``NormalizedAnalysis``.

    ``shape`` tags the record as a whole, but calories, macros and water are
    each read from the legacy field when present and from the current
    fields otherwise, so mixed records keep every value they carry.
    """
    goals = _as_dict(payload.get("goals"))
    intake, goal, burned, net = _calories(payload, goals)
    water_actual, water_goal = _water(payload, goals)
    return NormalizedAnalysis(
        date=str(payload.get("date") or ""),
        shape=detect_shape(payload),
        calories_intake=intake,
        calories_goal=goal,
        calories_burned=burned,
        calories_net=net,
        macros=_macros(payload, goals),
        water_actual=water_actual,
        water_goal=water_goal,
    )


def _calories(
    payload: dict[str, object], goals: dict[str, object]
) -> tuple[float | None, float | None, float | None, float | None]:
    calories = payload.get("calories")
    if isinstance(calories, dict):
        return (
            _as_number(calories.get("intake")),
            _as_number(calories.get("goal")),
            _as_number(calories.get("burned")),
            _as_number(calories.get("net")),
        )
    totals = _as_dict(payload.get("totals"))
    return (
        _as_number(totals.get("calories")),
        _as_number(_as_dict(goals.get("calories")).get("target")),
        None,
        None,
    )


def _macros(
    payload: dict[str, object], goals: dict[str, object]
) -> dict[str, MacroProgress]:
    legacy = payload.get("macros")
    if isinstance(legacy, dict):
        return {
            str(name): MacroProgress(
                actual=_as_number(_as_dict(values).get("grams")),
                goal=_as_number(_as_dict(values).get("goal")),
            )
            for name, values in legacy.items()
        }
    totals = _as_dict(payload.get("totals"))
    return {
        name: MacroProgress(
            actual=_as_number(totals.get(name)),
            goal=_as_number(_as_dict(goals.get(name)).get("target")),
        )
        for name in MACRO_NAMES
        if totals.get(name) is not None
    }


def _water(
    payload: dict[str, object], goals: dict[str, object]
) -> tuple[float | None, float | None]:
    legacy = payload.get("water")
    if isinstance(legacy, dict):
        return _as_number(legacy.get("total_oz")), _as_number(legacy.get("goal_oz"))
    current = _as_dict(goals.get("water"))
    return _as_number(current.get("actual_oz")), _as_number(current.get("target_oz"))


def _as_dict(value: object) -> dict[str, object]:
    return value if isinstance(value, dict) else {}


def _as_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    return None
