"""Test configuration for pytest."""

import logging
import os
import pytest

from tests.helpers.photo_factory import BASE_TIME, LEFT_HALF, TOP_HALF, write_burst_folder


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['BURSTPICK_LOG_LEVEL'] = 'WARNING'
    logging.getLogger().setLevel(logging.WARNING)

    for logger_name in ['burstpick.grouping.hash', 'burstpick.grouping.enrich']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)


@pytest.fixture
def burst_folder(tmp_path):
    """
    A folder with one three-shot burst and two unrelated photos.

    a.png, b.png, c.png: same scene within 4 seconds
    d.png: different scene 2 seconds later
    e.png: same scene as the burst but 10 minutes later
    """
    return write_burst_folder(tmp_path / "photos", [
        ("a.png", LEFT_HALF, BASE_TIME),
        ("b.png", LEFT_HALF, BASE_TIME + 2),
        ("c.png", LEFT_HALF, BASE_TIME + 4),
        ("d.png", TOP_HALF, BASE_TIME + 6),
        ("e.png", LEFT_HALF, BASE_TIME + 600),
    ])
