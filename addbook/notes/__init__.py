"""
Note rendering and writing.

Modules:
    template - Placeholder substitution and the built-in note template
    vault - Markdown note files with unique names
"""

from .template import DEFAULT_TEMPLATE, escape_value, load_template, render_note
from .vault import NoteVault

__all__ = [
    'DEFAULT_TEMPLATE',
    'escape_value',
    'load_template',
    'render_note',
    'NoteVault',
]
