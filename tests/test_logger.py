import logging

import pytest

from lootserver.logger import LoggerSettings, LogLevel, LogLevelLimit, ServerLogger


def _capturing(settings):
    records = []
    logger = ServerLogger(settings, sink=lambda level, message: records.append((level, message)))
    return logger, records


def test_ignore_is_never_emitted():
    logger, records = _capturing(LoggerSettings(limit_level=LogLevelLimit.VERY_VERBOSE))
    assert logger.log("hidden", LogLevel.IGNORE) is False
    assert records == []


def test_no_logging_suppresses_everything():
    logger, records = _capturing(LoggerSettings(limit_level=LogLevelLimit.NO_LOGGING))
    for level in LogLevel:
        assert logger.effective_level(level) is None
    logger.log("nothing", LogLevel.FATAL)
    assert records == []


def test_limit_filters_more_verbose_levels():
    logger, records = _capturing(LoggerSettings(limit_level=LogLevelLimit.WARNING))
    assert logger.log("warn", LogLevel.WARNING) is True
    assert logger.log("err", LogLevel.ERROR) is True
    assert logger.log("chatty", LogLevel.DISPLAY) is False
    assert logger.log("chattier", LogLevel.VERBOSE) is False
    assert records == [(LogLevel.WARNING, "warn"), (LogLevel.ERROR, "err")]


def test_all_as_normal_maps_to_display():
    logger, records = _capturing(LoggerSettings(limit_level=LogLevelLimit.ALL_AS_NORMAL))
    logger.log("deep", LogLevel.VERY_VERBOSE)
    logger.log("bad", LogLevel.ERROR)
    assert records == [(LogLevel.DISPLAY, "deep"), (LogLevel.DISPLAY, "bad")]


def test_outside_development_needs_opt_in():
    settings = LoggerSettings(limit_level=LogLevelLimit.VERY_VERBOSE, development=False)
    logger, records = _capturing(settings)
    assert logger.log("quiet", LogLevel.ERROR) is False
    settings.log_outside_of_editor = True
    assert logger.log("loud", LogLevel.ERROR) is True
    assert records == [(LogLevel.ERROR, "loud")]


def test_default_verbosity_is_display():
    logger, records = _capturing(LoggerSettings(limit_level=LogLevelLimit.DISPLAY))
    logger.log("plain")
    assert records == [(LogLevel.DISPLAY, "plain")]


@pytest.mark.parametrize("level", [LogLevel.FATAL, LogLevel.LOG, LogLevel.VERY_VERBOSE])
def test_effective_level_passes_through_under_limit(level):
    logger = ServerLogger(LoggerSettings(limit_level=LogLevelLimit.VERY_VERBOSE))
    assert logger.effective_level(level) is level


def test_default_sink_writes_to_stdlib_logging(caplog):
    logger = ServerLogger(LoggerSettings(limit_level=LogLevelLimit.WARNING))
    with caplog.at_level(logging.DEBUG, logger="lootserver"):
        logger.log("something broke", LogLevel.ERROR)
    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [(logging.ERROR, "something broke")]