import pytest

from ibanforge import validation
from ibanforge.constants import ENV_NATIONAL_CHECK_DIGITS, ENV_RANDOM_SEED, ENV_STRUCTURES_FILE


@pytest.fixture(autouse=True)
def clean_defaults(monkeypatch):
    # every test starts from the built-in tables and an empty environment
    for name in (ENV_NATIONAL_CHECK_DIGITS, ENV_STRUCTURES_FILE, ENV_RANDOM_SEED):
        monkeypatch.delenv(name, raising=False)
    validation.reset_defaults()
    yield
    validation.reset_defaults()
