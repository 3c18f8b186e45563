"""
Hückel parameter table.

Diagonal corrections hX give the Coulomb integral of a heteroatom as
α_X = α + hX·β; off-diagonal corrections hXY scale the resonance
integral, β_XY = hXY·β. Carbon is the reference (hC = 0, hCC = 1).

N, O, S and P are *adaptive*: their corrections depend on whether the
atom gives one electron to the π system (pyridine-like N, carbonyl O)
or a lone pair of two (pyrrole-like N, furan O). Bond keys mark a
two-electron site with a ``2`` suffix, e.g. ``C-N2``.

Example:
    >>> from tiny_huckel.core.parameters import get_hx, get_hxy
    >>> get_hx("N", 1), get_hx("N", 2)
    (0.51, 1.37)
    >>> get_hxy("N", "C", 2, 1)
    0.89
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)


ADAPTIVE_ELEMENTS = frozenset({"N", "O", "S", "P"})

# Coulomb corrections of adaptive elements, by π electrons contributed.
ADAPTIVE_HX: Mapping[str, Mapping[int, float]] = MappingProxyType({
    "N": MappingProxyType({1: 0.51, 2: 1.37}),
    "O": MappingProxyType({1: 0.97, 2: 2.09}),
    "S": MappingProxyType({1: 0.46, 2: 1.11}),
    "P": MappingProxyType({1: 0.19, 2: 0.75}),
})


def _frozen(mapping: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType({str(k): float(v) for k, v in mapping.items()})


@dataclass(frozen=True)
class HuckelParameters:
    """
    Immutable parameter table.

    Parameters
    ----------
    hx : mapping of str → float
        Coulomb corrections by element symbol. Missing elements default
        to 0.0 (behave like carbon).
    hxy : mapping of str → float
        Resonance corrections by bond key (``"C-N"``, ``"C-N2"``).
        Missing keys default to 1.0.
    """

    hx: Mapping[str, float] = field(default_factory=dict)
    hxy: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "hx", _frozen(self.hx))
        object.__setattr__(self, "hxy", _frozen(self.hxy))

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {"hX": dict(self.hx), "hXY": dict(self.hxy)}

    @classmethod
    def from_dict(cls, data: Mapping) -> "HuckelParameters":
        return with_overrides(cls(), data)

    def __repr__(self) -> str:
        return f"HuckelParameters(hX={len(self.hx)} elements, hXY={len(self.hxy)} bonds)"


DEFAULT_PARAMETERS = HuckelParameters(
    hx={
        "C": 0.0, "N": 1.37, "O": 2.09, "S": 1.11, "P": 0.75,
        "Cl": 1.48, "Br": 1.48, "F": 2.71, "B": -0.45, "Si": 0.0,
    },
    hxy={
        "C-C": 1.00, "C-B": 0.73, "C-N": 1.02, "C-N2": 0.89,
        "C-O": 1.06, "C-O2": 0.66, "C-F": 0.52, "C-Si": 0.75,
        "C-P": 0.77, "C-P2": 0.76, "C-S": 0.81, "C-S2": 0.69,
        "C-Cl": 0.62, "C-Br": 0.62,
        "B-B": 0.87, "B-N": 0.66, "B-N2": 0.53, "B-O": 0.60,
        "B-O2": 0.35, "B-F": 0.26, "B-Si": 0.57, "B-P": 0.53,
        "B-P2": 0.54, "B-S": 0.51, "B-S2": 0.44, "B-Cl": 0.41,
        "B-Br": 0.41,
        "N-N": 1.09, "N-O": 1.14, "N-F": 0.65, "N-Si": 0.72,
        "N-P": 0.78, "N-S": 0.83, "N-Cl": 0.77, "N-Br": 0.77,
        "N2-N2": 0.98, "N2-O": 1.13, "N2-O2": 1.02, "N2-F": 0.77,
        "N2-Si": 0.43, "N2-P": 0.65, "N2-P2": 0.82, "N2-S": 0.64,
        "N2-S2": 0.85, "N2-Cl": 0.73,
        "O-O": 1.26, "O-O2": 0.95, "O-F": 0.94, "O-Si": 0.43,
        "O-P": 0.50, "O-P2": 0.75, "O-S": 0.54, "O-S2": 0.82,
        "O-Cl": 0.80, "O-Br": 0.80,
        "O2-O2": 0.95, "O2-F": 0.94, "O2-Si": 0.24, "O2-P": 0.31,
        "O2-P2": 0.39, "O2-S": 0.48, "O2-S2": 0.54, "O2-Cl": 0.70,
        "F-F": 1.04, "F-Si": 0.17, "F-P": 0.21, "F-P2": 0.22,
        "F-S": 0.22, "F-S2": 0.32, "F-Cl": 0.51, "F-Br": 0.51,
        "Si-Si": 0.64, "Si-P": 0.62, "Si-P2": 0.58, "Si-S": 0.52,
        "Si-S2": 0.40, "Si-Cl": 0.34, "Si-Br": 0.34,
        "P-P": 0.63, "P-P2": 0.58, "P-S": 0.58, "P-S2": 0.48,
        "P-Cl": 0.35, "P-Br": 0.35,
        "P2-P2": 0.63, "P2-S": 0.65, "P2-S2": 0.60, "P2-Cl": 0.55,
        "S-S": 0.68, "S-S2": 0.58, "S-Cl": 0.56, "S-Br": 0.56,
        "S2-S2": 0.63, "S2-Cl": 0.52,
        "Cl-Cl": 0.68, "Br-Br": 0.65, "Cl-Br": 0.66,
    },
)


# ─── Lookups ─────────────────────────────────────────────────────────────

def get_hx(element: str, pi_electrons: Optional[int] = None,
           parameters: HuckelParameters = DEFAULT_PARAMETERS) -> float:
    """
    Coulomb correction hX for an atom.

    Adaptive elements always come from the fixed ``ADAPTIVE_HX`` table
    (two-electron value when ``pi_electrons`` is not 1 or 2); every other
    element reads ``parameters.hx`` and defaults to 0.0.
    """
    if element in ADAPTIVE_ELEMENTS:
        table = ADAPTIVE_HX[element]
        return table.get(pi_electrons, table[2])
    return parameters.hx.get(element, 0.0)


def _keys_for(first: str, second: str, first_e: Optional[int],
              second_e: Optional[int]) -> List[str]:
    first_two = first in ADAPTIVE_ELEMENTS and first_e == 2
    second_two = second in ADAPTIVE_ELEMENTS and second_e == 2
    keys = []
    if first_two and second_two:
        keys.append(f"{first}2-{second}2")
    if first_two:
        keys.append(f"{first}2-{second}")
    if second_two:
        keys.append(f"{first}-{second}2")
    keys.append(f"{first}-{second}")
    return keys


def candidate_bond_keys(element1: str, element2: str,
                        pi_electrons1: Optional[int] = None,
                        pi_electrons2: Optional[int] = None) -> List[str]:
    """
    Bond keys to try, most specific first.

    The pair is sorted alphabetically; keys for that order come first,
    then keys for the reversed order (the table stores some pairs, such
    as ``O2-F``, against alphabetical order).
    """
    (a, ea), (b, eb) = sorted(
        [(element1, pi_electrons1), (element2, pi_electrons2)],
        key=lambda pair: pair[0],
    )
    keys = _keys_for(a, b, ea, eb)
    for key in _keys_for(b, a, eb, ea):
        if key not in keys:
            keys.append(key)
    return keys


def get_hxy(element1: str, element2: str,
            pi_electrons1: Optional[int] = None,
            pi_electrons2: Optional[int] = None,
            parameters: HuckelParameters = DEFAULT_PARAMETERS) -> float:
    """Resonance correction hXY for a bond, 1.0 when no key matches."""
    for key in candidate_bond_keys(element1, element2, pi_electrons1, pi_electrons2):
        value = parameters.hxy.get(key)
        if value is not None:
            return value
    return 1.0


# ─── Updating ────────────────────────────────────────────────────────────

_SECTION_ALIASES = {"hX": "hx", "hx": "hx", "hXY": "hxy", "hxy": "hxy"}


def _coerce_section(name: str, values) -> Dict[str, float]:
    if not isinstance(values, Mapping):
        raise ValueError(f"'{name}' overrides must be a mapping, got {type(values).__name__}")
    coerced = {}
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Parameter {name}[{key!r}] must be a number, got {value!r}")
        if not math.isfinite(value):
            raise ValueError(f"Parameter {name}[{key!r}] must be finite, got {value!r}")
        coerced[str(key)] = float(value)
    return coerced


def with_overrides(old: HuckelParameters,
                   partial: Optional[Mapping] = None) -> HuckelParameters:
    """
    Return a new table with ``partial`` shallow-merged into ``old``.

    ``partial`` may carry ``hX`` and/or ``hXY`` sections; keys it does not
    mention keep their old values, new keys are added.
    """
    if not partial:
        return old
    sections: Dict[str, Dict[str, float]] = {"hx": {}, "hxy": {}}
    for name, values in partial.items():
        if name not in _SECTION_ALIASES:
            raise ValueError(f"Unknown parameter section '{name}'. Expected 'hX' or 'hXY'")
        sections[_SECTION_ALIASES[name]].update(_coerce_section(name, values))

    hx = dict(old.hx)
    hx.update(sections["hx"])
    hxy = dict(old.hxy)
    hxy.update(sections["hxy"])
    return HuckelParameters(hx=hx, hxy=hxy)


def load_parameters(path: Union[str, Path],
                    base: HuckelParameters = DEFAULT_PARAMETERS) -> HuckelParameters:
    """Merge a JSON file of ``{"hX": {...}, "hXY": {...}}`` overrides onto ``base``."""
    path = Path(path)
    logger.info("Loading parameter overrides from: %s", path)
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    return with_overrides(base, data)
