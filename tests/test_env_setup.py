import os
import tempfile

# ============================================================================
# Test Environment Configuration
# ============================================================================
# This file MUST be imported before any rolegate modules so that settings
# and the module-level engine pick up the test database.

os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["STRICT_SCOPED_PREDICATES"] = "false"

# Ensure project root is in path BEFORE rolegate imports
import sys

current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Use file-based sqlite so the store and fixtures share one database
TEST_DB_DIR = tempfile.mkdtemp()
TEST_DB_PATH = os.path.join(TEST_DB_DIR, "test.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"

# Export for conftest.py
__all__ = ["TEST_DB_DIR", "TEST_DB_PATH"]
