from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .manager import UNSET, StratificationManager
from .stratifier import stratifier_name


def _column_names(manager: StratificationManager, value_name: str) -> List[str]:
    names = [stratifier_name(s, i) for i, s in enumerate(manager.stratifiers)]
    reserved = {"key", value_name}
    clash = sorted({n for n in names if n in reserved})
    if clash:
        raise ValueError(f"Stratifier names collide with export columns: {clash}")
    dup = sorted({n for n in names if names.count(n) > 1})
    if dup:
        raise ValueError(f"Duplicate stratifier names: {dup}")
    return names


def values_frame(manager: StratificationManager, value_name: str = "value") -> pd.DataFrame:
    """One row per key: the states of each stratifier, then the stored value."""
    names = _column_names(manager, value_name)
    rows = [list(states) + [value] for states, value in manager.items()]
    df = pd.DataFrame(rows, columns=names + [value_name])
    df.index = pd.RangeIndex(len(df), name="key")
    return df


def select_values(manager: StratificationManager, partial_states: Sequence[Iterable[Any]]) -> List[Tuple[int, Any]]:
    """Wildcard read: ``(key, value)`` for every matching key, ascending."""
    return [(k, manager.get(k)) for k in sorted(manager.get_keys(partial_states))]


def _json_default(obj: Any) -> Any:
    if obj is UNSET:
        return None
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, pd.Timestamp):
        return obj.isoformat()
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=repr)
    raise TypeError(f"Object of type {obj.__class__.__name__} is not JSON serialisable")


def write_values_json(manager: StratificationManager, out_path: str | Path, value_name: str = "value") -> None:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    names = _column_names(manager, value_name)
    rows = []
    for key, (states, value) in enumerate(manager.items()):
        row = {"key": key, value_name: value}
        row.update(zip(names, states))
        rows.append(row)
    payload = {
        "stratifiers": names,
        "n_keys": manager.size(),
        "rows": rows,
    }
    out_path.write_text(
        json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False, default=_json_default),
        encoding="utf-8",
    )
