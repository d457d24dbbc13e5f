"""Root pytest configuration for all tests."""

import logging

# urllib3 logs connection retries at WARNING level, which is noise for unit
# tests that never open real connections.
logging.getLogger("urllib3").setLevel(logging.ERROR)
