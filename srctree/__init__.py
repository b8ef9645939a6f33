"""Public package surface for srctree.

Exports ``main`` for programmatic CLI invocation. The traversal core lives in
``srctree.tree_model`` and ``srctree.search``; ``srctree.render`` formats it.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
