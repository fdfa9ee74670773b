#!/usr/bin/env python3
"""
CLI entrypoint wrapper for the preference-based group assignment.
"""

from __future__ import annotations

if __package__ is None:
    from pathlib import Path
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[1]))
    from PGA.pga_api import run_assignment, run_assignment_csv
    from PGA.pga_cli import main
else:
    from .pga_api import run_assignment, run_assignment_csv
    from .pga_cli import main

__all__ = ["run_assignment", "run_assignment_csv"]


if __name__ == "__main__":
    raise SystemExit(main())
