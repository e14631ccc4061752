"""Module entrypoint for ``python -m foldpreview``.

All argument parsing happens in ``foldpreview.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
