import logging

from box_downsampler.logger import attach_handler, get_logger, set_level


def test_get_logger_is_child_of_package() -> None:
    logger = get_logger("box_downsampler.sampler")
    assert logger.name == "box_downsampler.sampler"
    assert get_logger("custom").name == "box_downsampler.custom"
    base = logging.getLogger("box_downsampler")
    assert base.handlers
    assert base.propagate is False


def test_set_level_and_attach_handler() -> None:
    records = []

    class _Collect(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = _Collect()
    attach_handler(handler)
    attach_handler(None)
    logger = get_logger("tests")
    try:
        set_level(logging.DEBUG)
        logger.debug("hello")
    finally:
        set_level(logging.WARNING)
        logging.getLogger("box_downsampler").removeHandler(handler)
    assert [r.getMessage() for r in records] == ["hello"]
    assert records[0].scale == "-"
