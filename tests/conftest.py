import logging

import pytest


@pytest.fixture(autouse=True)
def _quiet_package_logger():
    # CLI-тесты вызывают setup_logging(); уровень не должен протекать между тестами
    logger = logging.getLogger("simple_templates")
    level = logger.level
    yield
    logger.setLevel(level)
