"""Root conftest — runs before any test module imports."""

import os

# CI runners may set FORCE_COLOR, which makes Rich inject ANSI escape codes
# into CLI output and breaks tests that parse stdout as JSON. Clearing it
# before folio.cli creates its Console keeps output plain.
os.environ.pop("FORCE_COLOR", None)
os.environ["NO_COLOR"] = "1"
