import json
import logging

import pytest

from specraster.util.logging import ROOT, configure_logging, get_logger, log_exception


@pytest.fixture
def package_logger():
    root = logging.getLogger(ROOT)
    saved = (root.handlers[:], root.level, root.propagate)
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    handlers, level, propagate = saved
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    root.propagate = propagate


def test_getting_a_logger_installs_no_handlers(package_logger) -> None:
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
    package_logger.addHandler(logging.NullHandler())

    logger = get_logger("render.runner")
    assert logger.name == "specraster.render.runner"
    assert get_logger("__main__").name == "specraster.main"
    assert [type(h) for h in package_logger.handlers] == [logging.NullHandler]


def test_json_file_receives_structured_fields(package_logger, tmp_path) -> None:
    path = tmp_path / "log.jsonl"
    configure_logging(level="DEBUG", json_file=str(path))
    logger = get_logger("specraster.cli")
    logger.info("Processing column %d of %d", 3, 10, extra={"column": 2})
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        log_exception(logger, "render failed", error_type="spectrum", stage="spectrum")
    for handler in package_logger.handlers:
        handler.flush()

    records = [json.loads(line) for line in path.read_text().splitlines()]
    assert records[0]["message"] == "Processing column 3 of 10"
    assert records[0]["column"] == 2
    assert records[1]["error_type"] == "spectrum"
    assert records[1]["stage"] == "spectrum"
    assert "RuntimeError: boom" in records[1]["traceback"]


def test_reconfiguring_replaces_handlers(package_logger) -> None:
    configure_logging(level="WARNING")
    configure_logging(level="INFO")
    streams = [h for h in package_logger.handlers if isinstance(h, logging.StreamHandler)]
    assert len(streams) == 1
    assert package_logger.level == logging.INFO
