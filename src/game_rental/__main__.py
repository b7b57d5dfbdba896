"""Module entry point for python -m game_rental."""

from __future__ import annotations

from game_rental.app import main


if __name__ == "__main__":
    raise SystemExit(main())
