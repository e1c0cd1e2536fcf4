"""Module entrypoint for running Voice Studio as ``python -m voicestudio``."""

from __future__ import annotations

from voicestudio.cli import main


if __name__ == "__main__":
    main()
