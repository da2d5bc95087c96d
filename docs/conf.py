# Sphinx configuration for the MedScan API docs.
# Build with: sphinx-build -b html docs docs/_build

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

from medscan_ui import __version__  # noqa: E402

project = "MedScan UI"
author = "MedScan developers"
version = release = __version__

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinx.ext.viewcode",
    "sphinx_copybutton",
    "sphinx_autodoc_typehints",
]
exclude_patterns = ["_build"]

html_theme = "pydata_sphinx_theme"
html_title = "MedScan UI"

# numpydoc-style sections only
napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_preprocess_types = True

autosummary_generate = True
autodoc_member_order = "bysource"
autodoc_typehints = "description"
# widgets are documented from source; no display needed to build
autodoc_mock_imports = ["PySide6"]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "PIL": ("https://pillow.readthedocs.io/en/stable/", None),
    "requests": ("https://requests.readthedocs.io/en/latest/", None),
}
