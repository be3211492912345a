"""Test utilities for tern applications::

    from tern.testing import TestClient, make_site
"""

from tern.testing.client import TestClient
from tern.testing.site import make_site

__all__ = ["TestClient", "make_site"]
