import logging

from rich.logging import RichHandler

from estoque.logger import CompactFilter, setup_global_logger
from estoque.utils.request_id import request_id_var


def make_record(msg):
    return logging.LogRecord("estoque.test", logging.INFO, __file__, 1, msg, None, None)


def test_compact_filter_shortens_uuids():
    record = make_record("Created table 'Cozinha' (a1e9166a-15f5-4ccf-b2ff-a6a92c37e645)")

    assert CompactFilter().filter(record)
    assert record.msg == "Created table 'Cozinha' (a1e9..)"


def test_compact_filter_prefixes_request_id():
    token = request_id_var.set("0123456789abcdef")
    try:
        record = make_record("login admin@example.com")
        CompactFilter().filter(record)
    finally:
        request_id_var.reset(token)

    assert record.msg == "[01234567] login admin@example.com"


def test_setup_global_logger_is_idempotent():
    logger = setup_global_logger("debug")
    setup_global_logger("debug")

    assert logger.level == logging.DEBUG
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
    setup_global_logger("info")
