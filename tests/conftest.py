"""Shared pytest fixtures for hostblock tests."""

import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from hostblock.config import HostblockConfig, PromptPolicy


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def fixed_now():
    """A fixed generation time."""
    return datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def bare_config():
    """Configuration with no default whitelist or blacklist."""
    return HostblockConfig(
        sources=("http://example.com/hosts",),
        whitelist=(),
        blacklist=(),
        prompt=PromptPolicy.YES,
    )


@pytest.fixture
def mock_fetcher():
    """Fetcher mock that reports HTTPS support."""
    fetcher = MagicMock()
    fetcher.available.return_value = True
    return fetcher


@pytest.fixture
def sample_hosts_source():
    """Sample hosts-format source content."""
    return """# Sample hosts blocklist\r
# Comment line\r
127.0.0.1 localhost\r
0.0.0.0 ads.example.com\r
0.0.0.0\ttracker.example.net # inline comment\r
127.0.0.1   Metrics.Example.ORG\r
\r
0.0.0.0 printer.local\r
0.0.0.0 router.localdomain\r
"""


@pytest.fixture
def sample_domains_source():
    """Sample plain-domain source content."""
    return """# One domain per line
ads.example.com
   malware.example.biz
192.168.1.5 lan.example.com
not_a_domain
"""
