"""Test utilities for vanity applications.

    from vanity.testing import TestClient
"""

from vanity.testing.client import TestClient

__all__ = ["TestClient"]
