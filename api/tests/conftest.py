"""
Shared pytest configuration for all tests.
Sets up test database settings and common fixtures.
"""
import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load test environment variables before any imports
from dotenv import load_dotenv

# Load test-specific environment variables
test_env_path = Path(__file__).parent.parent / ".env.test"
if test_env_path.exists():
    load_dotenv(test_env_path, override=True)
else:
    # Fallback to hardcoded test values if .env.test doesn't exist
    os.environ["NEO4J_URI"] = "bolt://localhost:7688"
    os.environ["NEO4J_USER"] = "neo4j"
    os.environ["NEO4J_PASSWORD"] = "testpassword123"
    os.environ["NEO4J_QUERY_TIMEOUT"] = "5"
    os.environ["LOG_FILE"] = str(Path(tempfile.gettempdir()) / "truck-leasing-tests" / "api.log")


@pytest.fixture
def mock_db():
    """A connection stand-in for repositories whose queries are patched."""
    db = Mock()
    db.query_timeout = 5.0
    return db
