import pytest

from pslconvert.utils import init_logging, close_logging

from psl_builder import PSLImage, two_segment_image


@pytest.fixture(autouse=True)
def fresh_log():
    """Start every test with an empty warning/error tally and no log file."""
    init_logging()
    yield
    close_logging()


@pytest.fixture
def cube_image():
    return PSLImage()


@pytest.fixture
def corridor_image():
    return two_segment_image()
