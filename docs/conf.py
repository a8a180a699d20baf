# Sphinx configuration for the action_core API reference.

import os
import sys

sys.path.insert(0, os.path.abspath('../src'))

from action_core import __version__  # noqa: E402

project = 'Action Core'
copyright = '2026, Action Core contributors'
author = 'Action Core contributors'
version = '.'.join(__version__.split('.')[:2])
release = __version__

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.intersphinx',
    'sphinx_autodoc_typehints',
]

exclude_patterns = ['_build']

html_theme = 'sphinx_rtd_theme'
html_title = f'Action Core {release}'

# Protocols and result types are documented in source order so that
# context, outcome and result read before the executors that use them.
autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'show-inheritance': True,
}
autodoc_class_signature = 'separated'
autodoc_typehints_format = 'short'
typehints_defaults = 'comma'
always_document_param_types = False

autodoc_inherit_docstrings = False

napoleon_google_docstring = True
napoleon_numpy_docstring = False

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'pydantic': ('https://docs.pydantic.dev/latest', None),
}
