"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

# Connection pool chatter from requests/urllib3 is not useful in test output.
logging.getLogger("urllib3").setLevel(logging.WARNING)
