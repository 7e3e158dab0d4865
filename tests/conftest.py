import pytest
from loguru import logger


@pytest.fixture
def log_messages():
    "Collect loguru messages emitted during the test"
    messages = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]))
    yield messages
    logger.remove(handler_id)
