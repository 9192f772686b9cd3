"""Module entrypoint for running sitecopy as ``python -m sitecopy``."""

from __future__ import annotations

from sitecopy.cli import main


if __name__ == "__main__":
    main()
