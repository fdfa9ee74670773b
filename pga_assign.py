#!/usr/bin/env python3
"""
CLI entrypoint wrapper for the preference-based group assignment.
"""

from __future__ import annotations

from PGA.pga_api import run_assignment, run_assignment_csv
from PGA.pga_cli import main

__all__ = ["run_assignment", "run_assignment_csv"]


if __name__ == "__main__":
    raise SystemExit(main())
