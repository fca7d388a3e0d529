r"""
Macro and environment signature tables for common LaTeX packages.

Each package module exposes two dictionaries, `macros` and `environments`,
of the form::

    {name: {'signature': 'o m', 'renderInfo': {'breakAround': True}}}

Both keys of an entry are optional; a missing signature means that the macro
takes no arguments.
"""

import importlib
import logging

logger = logging.getLogger(__name__)


#: Packages whose tables are loaded by default.
default_packages = ('latex2e', 'amsmath', 'xparse', 'hyperref', 'graphicx')


def get_package(name):
    r"""
    Return the ``(macros, environments)`` tables of the package module
    `name` (e.g. ``'amsmath'``).  Raises `ValueError` for unknown packages.
    """
    modname = __name__ + '.' + name
    if not name or '.' in name:
        raise ValueError("Unknown package ‘{}’".format(name))
    try:
        mod = importlib.import_module(modname)
    except ModuleNotFoundError as e:
        if e.name != modname:
            # the package module exists but fails to import something
            raise
        raise ValueError("Unknown package ‘{}’".format(name))
    return mod.macros, mod.environments


def merge_tables(*tables):
    r"""
    Merge signature tables into a new dictionary.  Entries of later tables
    replace entries of earlier ones with the same name.
    """
    merged = {}
    for t in tables:
        if t:
            merged.update(t)
    return merged
