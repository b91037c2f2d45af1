"""
tests/test_logger.py

Unit test for logger setup.
"""
import logging

from pystochopt.logs.logger import get_logger


def test_logger_creates_log_file(tmp_path):
    logger = get_logger(run_name="testrun", scenario="testscen", log_dir=str(tmp_path))
    logger.info("Test log entry")
    log_files = list(tmp_path.glob("*.log"))
    assert len(log_files) == 1
    assert log_files[0].name == "testrun_testscen.log"
    with open(log_files[0], "r") as f:
        content = f.read()
    assert "Test log entry" in content


def test_module_loggers_propagate(tmp_path):
    get_logger(run_name="testrun", scenario="modules", log_dir=str(tmp_path))
    logging.getLogger("pystochopt.tree.builder").info("Built grid")
    content = (tmp_path / "testrun_modules.log").read_text()
    assert "Built grid" in content


def test_no_duplicate_handlers(tmp_path):
    first = get_logger(run_name="testrun", scenario="again", log_dir=str(tmp_path))
    count = len(first.handlers)
    second = get_logger(run_name="testrun", scenario="again", log_dir=str(tmp_path))
    assert len(second.handlers) == count
