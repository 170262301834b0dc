"""Root conftest — shared test configuration."""

import os

# Ensure tests never load or write the real snapshot file
os.environ.setdefault("IS_TEST_MODE", "1")
os.environ.setdefault("LOG_FORMAT", "text")
