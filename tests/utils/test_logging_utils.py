import logging

from grocy_api.utils import logging_utils as lu


def test_build_logging_config_contains_handlers():
    config = lu.build_logging_config(level="DEBUG", job_name="test")
    assert "handlers" in config
    assert "stdout" in config["handlers"]
    assert config["root"]["level"] == "DEBUG"
    assert "test" in config["formatters"]["default"]["format"]


def test_get_tagged_logger_injects_tag(caplog):
    caplog.set_level(logging.INFO)
    logger = lu.get_tagged_logger("grocy_api.test", tag="unit")
    logger.info("hello")
    assert any("hello" in message for message in caplog.messages)
    assert caplog.records[-1].tag == "unit"


def test_tag_filter_defaults_missing_tag():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    assert lu.TagFilter().filter(record) is True
    assert record.tag == lu.DEFAULT_TAG
