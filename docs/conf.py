"""Sphinx configuration."""

import importlib.metadata
import re
import sys
from pathlib import Path
from typing import Any, Final

here = Path(__file__).parent
sys.path.insert(0, str((here.parent / "src").resolve()))

project: Final[str] = "hodographs"
copyright: Final[str] = "2025, the hodographs developers"
author: Final[str] = "the hodographs developers"

try:
    version = release = importlib.metadata.version("hodographs")
except importlib.metadata.PackageNotFoundError:
    import hodographs

    version = release = hodographs.__version__

extensions: Final[list[str]] = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.mathjax",
    "sphinx.ext.napoleon",
    "sphinx_copybutton",
    "matplotlib.sphinxext.plot_directive",
]

source_suffix: Final[list[str]] = [".rst", ".md"]
exclude_patterns: Final[list[str]] = ["_build", "Thumbs.db", ".DS_Store", ".venv"]

html_theme: Final[str] = "sphinx_book_theme"

myst_enable_extensions = ["colon_fence", "dollarmath", "amsmath"]

intersphinx_mapping: Final[dict[str, tuple[str, str | None]]] = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "interpax": ("https://interpax.readthedocs.io/en/latest", None),
    "jax": ("https://jax.readthedocs.io/en/latest/", None),
    "equinox": ("https://docs.kidger.site/equinox/", None),
    "matplotlib": ("https://matplotlib.org/stable/", None),
}

# Configure matplotlib plot directive
plot_include_source: Final = True
plot_html_show_source_link: Final = False
plot_html_show_formats: Final = False
plot_formats: Final[list[str]] = ["png"]
plot_rcparams: Final[dict[str, Any]] = {"figure.dpi": 150, "font.size": 9}

napoleon_use_math: Final = True
autodoc_docstring_signature: Final = True


def _process_docstring_math(_app, _what, _name, _obj, _options, lines):
    """Convert $$ blocks and inline $ math in docstrings to RST math."""
    result = []
    in_block = False
    for line in lines:
        if line.strip() == "$$":
            in_block = not in_block
            result.extend(["", ".. math::", ""] if in_block else [""])
        elif in_block:
            result.append("    " + line if line.strip() else "")
        else:
            result.append(re.sub(r"\$([^\$]+)\$", r":math:`\1`", line))
    lines[:] = result


def setup(app):
    app.connect("autodoc-process-docstring", _process_docstring_math)
    return {"parallel_read_safe": True, "parallel_write_safe": True}
