"""Allow ``python -m cmm_triage``."""

from .cli import main

raise SystemExit(main())
