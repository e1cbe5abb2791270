import pytest

from holders.repository import HolderRepository
from holders.sample_data import load_sample_data


@pytest.fixture
def sample_data(db):
    """Load the classic pet clinic dataset into the test database."""
    return load_sample_data()


@pytest.fixture
def repo(sample_data):
    return HolderRepository()
