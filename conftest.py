"""Doctest configuration."""

import builtins
from doctest import ELLIPSIS, NORMALIZE_WHITESPACE
from typing import Any

import matplotlib

matplotlib.use("Agg")  # Use non-interactive backend for testing

import jax
import numpy as np
import pytest
from sybil import Sybil
from sybil.parsers import myst, rest
from sybil.sybil import SybilCollection

jax.config.update("jax_enable_x64", True)

###########################################################
# Pytest fixtures


def _custom_repr(x: Any, /) -> Any:
    if isinstance(x, jax.Array):
        x = x.copy()
        x = x.at[x == 0].set(np.zeros((), dtype=x.dtype))
    elif isinstance(x, np.ndarray) and np.issubdtype(x.dtype, np.floating):
        x = np.where(x == 0, np.zeros((), dtype=x.dtype), x)
    return x


@pytest.fixture(scope="session")
def _normalize_negative_zero() -> None:
    """
    Ensure that -0.0 is displayed as 0.0 in all jax and numpy output.
    Applied automatically to all tests, including doctests.
    """
    orig_print = builtins.print

    def _custom_print(*args: Any, **kwargs: Any) -> None:
        new_args = [_custom_repr(a) for a in args]
        return orig_print(*new_args, **kwargs)

    builtins.print = _custom_print
    yield
    builtins.print = orig_print


###########################################################
# Sybil Doctest Configuration

optionflags = ELLIPSIS | NORMALIZE_WHITESPACE

parsers = [
    myst.DocTestDirectiveParser(optionflags=optionflags),
    myst.PythonCodeBlockParser(doctest_optionflags=optionflags),
    myst.SkipParser(),
]

docs = Sybil(parsers=parsers, patterns=["*.md"])
python = Sybil(
    parsers=[
        rest.DocTestParser(optionflags=optionflags),
        rest.PythonCodeBlockParser(),
        rest.SkipParser(),
    ],
    patterns=["*.py"],
    fixtures=["_normalize_negative_zero"],
)

pytest_collect_file = SybilCollection((docs, python)).pytest()
