"""Entry point for ``python -m smartpatch``."""

from smartpatch.cli import main

raise SystemExit(main())
