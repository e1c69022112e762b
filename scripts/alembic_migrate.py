#!/usr/bin/env python3
"""Alembic Database Migration Helper.

Usage:
    python scripts/alembic_migrate.py upgrade head    # Upgrade to latest
    python scripts/alembic_migrate.py downgrade -1    # Downgrade one version
    python scripts/alembic_migrate.py history         # Show migration history
    python scripts/alembic_migrate.py current         # Show current version

Any other command is passed through to alembic.
"""

import subprocess
import sys
from pathlib import Path

# Ensure we're in the project root
PROJECT_ROOT = Path(__file__).parent.parent


def run_alembic(*args):
    """Run an alembic command."""
    cmd = ["alembic"] + list(args)
    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=PROJECT_ROOT)
    return result.returncode


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    command = sys.argv[1]
    args = sys.argv[2:]

    if command == "upgrade":
        return run_alembic("upgrade", args[0] if args else "head")

    elif command == "downgrade":
        return run_alembic("downgrade", args[0] if args else "-1")

    elif command == "history":
        return run_alembic("history", "--verbose")

    else:
        # Pass through to alembic
        return run_alembic(command, *args)


if __name__ == "__main__":
    sys.exit(main() or 0)
