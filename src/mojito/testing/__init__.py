"""Test utilities for mojito applications.

``TestClient`` drives the ASGI interface; ``Tester`` drives the
synchronous pipeline and offers chainable assertions::

    from mojito.testing import Tester, TestClient, new_context
"""

from mojito.testing.client import TestClient
from mojito.testing.tester import Tester, new_context

__all__ = ["TestClient", "Tester", "new_context"]
