import logging

import pytest

from infrastructure.observability import get_log_context, log_step, make_session_tag, set_log_context
from infrastructure.observability.logging import ContextInjectFilter


def test_session_tag_is_stable_and_short() -> None:
    assert make_session_tag("20260101_000000_abcd") == make_session_tag("20260101_000000_abcd")
    assert len(make_session_tag("x")) == 8
    assert make_session_tag("a") != make_session_tag("b")


def test_filter_injects_context_without_raw_seller_id() -> None:
    set_log_context(session_id="session-1", seller_id="seller-42", step="submit")
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)

    assert ContextInjectFilter().filter(record) is True
    assert record.session == make_session_tag("session-1")
    assert record.seller == make_session_tag("seller-42", length=6)
    assert record.step == "submit"

    ctx = get_log_context()
    assert ctx["session_id_full"] == "session-1"
    assert "seller-42" not in ctx.values()


def test_log_step_restores_previous_step_even_on_error() -> None:
    set_log_context(step="load")

    with log_step("submit"):
        assert get_log_context()["step"] == "submit"
    assert get_log_context()["step"] == "load"

    with pytest.raises(RuntimeError):
        with log_step("submit"):
            raise RuntimeError("boom")
    assert get_log_context()["step"] == "load"
