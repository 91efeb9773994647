#!/usr/bin/env python3
"""Solve a scenario's price system and print/save the report."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sraffa.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
