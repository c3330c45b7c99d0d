"""Punto de entrada: ``python -m hive_tool``."""

from __future__ import annotations

from hive_tool.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
