"""Module entrypoint for ``python -m lazydired``.

All argument parsing and rendering happen in ``lazydired.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
