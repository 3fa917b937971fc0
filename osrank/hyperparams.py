"""Hyper-parameters and command-line value parsing for the osrank run."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field, replace
from fractions import Fraction
from os import PathLike

_RATIO_RE = re.compile(r"^\+?(\d+)(?:/\+?(\d+))?$")


@dataclass(frozen=True)
class HyperParams:
    """Edge weighting factors used when building the network matrix."""

    contrib_factor: Fraction = field(default=Fraction(1, 7))
    contrib_prime_factor: Fraction = field(default=Fraction(2, 5))
    depend_factor: Fraction = field(default=Fraction(4, 7))
    maintain_factor: Fraction = field(default=Fraction(2, 7))
    maintain_prime_factor: Fraction = field(default=Fraction(3, 5))


class OsrankAlgorithm(enum.Enum):
    """The flavour of the osrank algorithm to run."""

    NAIVE = "naive"
    INCREMENTAL = "incremental"


def to_weight(text: str) -> Fraction | None:
    """Parse ``"n"`` or ``"n/d"`` into a weight, or return None if invalid."""
    match = _RATIO_RE.match(text)
    if match is None:
        return None
    numer = int(match.group(1))
    denom = int(match.group(2)) if match.group(2) is not None else 1
    if denom == 0:
        return None
    return Fraction(numer, denom)


def parse_hyperparams(
    contrib: str | None,
    contrib_prime: str | None,
    depend: str | None,
    maintain: str | None,
    maintain_prime: str | None,
) -> HyperParams:
    """Override the default hyper-parameters with any valid values given."""
    overrides = {
        "contrib_factor": contrib,
        "contrib_prime_factor": contrib_prime,
        "depend_factor": depend,
        "maintain_factor": maintain,
        "maintain_prime_factor": maintain_prime,
    }
    parsed = {}
    for name, text in overrides.items():
        if text is None:
            continue
        weight = to_weight(text)
        if weight is not None:
            parsed[name] = weight
    return replace(HyperParams(), **parsed)


def parse_algorithm(text: str) -> OsrankAlgorithm | None:
    """Map an algorithm name to its enum member, or None if unknown."""
    try:
        return OsrankAlgorithm(text)
    except ValueError:
        return None


def parse_seed_set(path: str | PathLike) -> frozenset[str] | None:
    """Read trusted node ids, one per line; return None if there are none."""
    with open(path, encoding="utf-8") as handle:
        nodes = frozenset(handle.read().splitlines())
    return nodes or None