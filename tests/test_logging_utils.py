import logging

from blocks_world_planner.utils.logging_utils import get_level_from_string, set_logger_level, setup_logger


def test_level_from_string():
    assert get_level_from_string("DEBUG") == logging.DEBUG
    assert get_level_from_string("warning") == logging.WARNING
    assert get_level_from_string("nonsense") == logging.INFO


def test_setup_logger_replaces_handlers_and_writes_file(tmp_path):
    log_file = tmp_path / "planner.log"
    setup_logger("blocks_world_planner.test", level=logging.INFO)
    logger = setup_logger("blocks_world_planner.test", level=logging.INFO, log_file=str(log_file))
    assert len(logger.handlers) == 2

    logger.info("expanded 12 states")
    for h in logger.handlers:
        h.flush()
    assert "expanded 12 states" in log_file.read_text()

    set_logger_level(logger, logging.ERROR)
    assert all(h.level == logging.ERROR for h in logger.handlers)
    for h in logger.handlers:
        h.close()
