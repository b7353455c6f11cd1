"""
Package entry point.

Allows running the application via:

    python -m mytimetable

This simply forwards execution to mytimetable.cli.main().
"""

from mytimetable.cli import main

if __name__ == "__main__":
    main()
