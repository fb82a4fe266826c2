from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Hashable, List, Tuple

import yaml

from .stratifier import StateStratifier, validate_states


@dataclass(frozen=True)
class AxisSpec:
    name: str
    states: Tuple[Hashable, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "states": list(self.states)}


@dataclass(frozen=True)
class StratificationSpec:
    """Declared set of stratifiers, in axis order.

    Intended to be written ex ante in YAML so that key assignment is
    reproducible across runs: the order of ``axes`` and of each axis's
    ``states`` fixes which key every tuple receives.
    """

    version: str
    axes: Tuple[AxisSpec, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"version": self.version, "axes": [a.to_dict() for a in self.axes]}

    def validate(self) -> None:
        if not self.axes:
            raise ValueError("axes must be non-empty")
        names = [a.name for a in self.axes]
        dup = sorted({n for n in names if names.count(n) > 1})
        if dup:
            raise ValueError(f"Duplicate axis names: {dup}")
        for a in self.axes:
            validate_states(a.states, context=f"axis '{a.name}'")

    def build_stratifiers(self) -> List[StateStratifier]:
        self.validate()
        return [StateStratifier(a.name, a.states) for a in self.axes]


def _as_states(name: str, raw: Any) -> Tuple[Hashable, ...]:
    if not isinstance(raw, list):
        raise ValueError(f"axis '{name}': states must be a list, got {type(raw).__name__}")
    return tuple(raw)


def parse_stratification_spec(raw: Dict[str, Any]) -> StratificationSpec:
    version = str(raw.get("version", "v1.0"))
    axes_raw = raw.get("axes")
    axes: List[AxisSpec] = []
    if isinstance(axes_raw, dict):
        for name, states in axes_raw.items():
            axes.append(AxisSpec(str(name), _as_states(str(name), states)))
    elif isinstance(axes_raw, list):
        for i, entry in enumerate(axes_raw):
            if not isinstance(entry, dict) or "states" not in entry:
                raise ValueError(f"axes[{i}] must be a mapping with 'name' and 'states'")
            name = str(entry.get("name", f"strat{i}"))
            axes.append(AxisSpec(name, _as_states(name, entry["states"])))
    else:
        raise ValueError("'axes' must be a list or a mapping")

    spec = StratificationSpec(version=version, axes=tuple(axes))
    spec.validate()
    return spec


def load_stratification_spec(yaml_path: str | Path) -> StratificationSpec:
    p = Path(yaml_path)
    if not p.exists():
        raise FileNotFoundError(f"Stratification config not found: {p}")
    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{p}: top level must be a mapping")
    return parse_stratification_spec(raw)
