import os
import sys

sys.path.insert(0, os.path.abspath("../../src"))

project = "Wiremodel"
copyright = "2026, Wiremodel contributors"
author = "Wiremodel contributors"
import wiremodel

release = wiremodel.__version__

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
    "myst_parser",
]

templates_path = ["_templates"]
exclude_patterns = []

# MyST-Parser configuration
myst_heading_anchors = 3
myst_enable_extensions = ["colon_fence"]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
}

# Re-exports from the package root produce duplicate cross-references.
suppress_warnings = [
    "ref.python",
]

autodoc_default_options = {
    "imported-members": False,
    "show-inheritance": True,
}
autodoc_class_content = "both"
autodoc_member_order = "bysource"

html_theme = "furo"
html_static_path = ["_static"]

html_theme_options = {
    "light_css_variables": {
        "color-brand-primary": "#00796B",
        "color-brand-content": "#00796B",
    },
    "dark_css_variables": {
        "color-brand-primary": "#4DB6AC",
        "color-brand-content": "#4DB6AC",
    },
}

html_title = "Wiremodel"
