"""Custom types."""

__all__ = [
    "LikeSz0",
    "LikeSz3",
    "Sz0",
    "Sz3",
    "Sz4",
    "Sz5",
    "Sz33",
    "Sz53",
    "SzN",
    "SzN3",
]

from typing import TypeAlias

from jaxtyping import Array, ArrayLike, Real

Sz0: TypeAlias = Real[Array, ""]
Sz3: TypeAlias = Real[Array, "3"]
Sz4: TypeAlias = Real[Array, "4"]
Sz5: TypeAlias = Real[Array, "5"]
Sz33: TypeAlias = Real[Array, "3 3"]
Sz53: TypeAlias = Real[Array, "5 3"]

SzN: TypeAlias = Real[Array, "N"]
SzN3: TypeAlias = Real[Array, "N 3"]

LikeSz0: TypeAlias = Real[ArrayLike, ""] | float | int
LikeSz3: TypeAlias = Real[ArrayLike, "3"]
