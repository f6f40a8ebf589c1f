"""
`python -m alfred_json` entrypoint.

This is mainly for convenience; the installed console script `alfred-json` calls
the same `alfred_json.cli:main`.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
