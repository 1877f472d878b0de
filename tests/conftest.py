import os
import shutil
import tempfile

import pytest

_db_dir = tempfile.mkdtemp(prefix="accounts-api-tests-")

# Must be set before accounts_api.core.settings is first imported.
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_db_dir, 'accounts.db')}")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ENVIRONMENT", "test")


@pytest.fixture(autouse=True, scope="session")
def _remove_test_database():
    yield
    from accounts_api.db.session import engine

    engine.dispose()
    shutil.rmtree(_db_dir, ignore_errors=True)
