"""Module entrypoint for ``python -m lazycwlogs``.

All argument parsing and runtime setup happen in ``lazycwlogs.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
