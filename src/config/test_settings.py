"""Settings for the test suite.

Supplies a throwaway ``SECRET_KEY`` so the base settings' fail-fast check
does not require a ``.env`` file when running pytest.

SQLite test databases live in a file rather than in shared-cache memory, so
threads in ``TransactionTestCase`` suites contend on the same locks as a
deployed SQLite database.
"""

import os

os.environ.setdefault("SECRET_KEY", "insecure-test-secret-key")

from config.settings import *  # noqa: E402,F401,F403
from config.settings import BASE_DIR, DATABASES  # noqa: E402

PRODUCT_API_BASE_URL = "http://testserver/api"

if DATABASES["default"]["ENGINE"].endswith("sqlite3"):
    DATABASES["default"]["TEST"] = {"NAME": str(BASE_DIR / "test_db.sqlite3")}
