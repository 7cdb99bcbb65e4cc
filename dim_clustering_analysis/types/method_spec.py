"""MethodSpec dataclass for the clustering method registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass(frozen=True)
class MethodSpec:
    name: str
    factory: Callable[..., "ClusteringAdapter"]
    default_params: dict[str, object] = field(default_factory=dict)
