"""Module entrypoint for ``python -m srctree``.

All argument parsing and report rendering happen in ``srctree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
