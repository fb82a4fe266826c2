"""stratification

Multi-dimensional categorical index over an ordered list of stratifiers.

The package exposes:
- stratifiers: the axis protocol and a stock list-backed axis
- the stratification tree and its dense, lexicographic key assignment
- StratificationManager: tuple <-> key lookup, a value store per key, and
  wildcard queries over per-axis sets of allowed states
- YAML configuration, JSONL event logging and pandas/JSON export of values
"""

from .combinatorics import all_combinations, combine_states, n_combinations
from .config import AxisSpec, StratificationSpec, load_stratification_spec, parse_stratification_spec
from .frame import select_values, values_frame, write_values_json
from .logger import EventLogger
from .manager import UNSET, StratificationManager
from .node import NodeKind, StratNode, build_tree
from .stratifier import StateStratifier, Stratifier, stratifier_name, validate_states

__version__ = "0.1.0"

__all__ = [
    "Stratifier",
    "StateStratifier",
    "stratifier_name",
    "validate_states",
    "NodeKind",
    "StratNode",
    "build_tree",
    "n_combinations",
    "all_combinations",
    "combine_states",
    "StratificationManager",
    "UNSET",
    "AxisSpec",
    "StratificationSpec",
    "load_stratification_spec",
    "parse_stratification_spec",
    "EventLogger",
    "values_frame",
    "select_values",
    "write_values_json",
]
