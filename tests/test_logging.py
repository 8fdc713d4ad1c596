from __future__ import annotations

from core.logging import (
    add_correlation_id,
    add_service_info,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)


def test_correlation_id_is_added_while_set() -> None:
    token = set_correlation_id("run-1")
    try:
        event = add_correlation_id(None, "info", {"event": "recalculation_update"})
    finally:
        reset_correlation_id(token)

    assert event["correlation_id"] == "run-1"
    assert get_correlation_id() == ""
    assert "correlation_id" not in add_correlation_id(None, "info", {"event": "visit_added"})


def test_service_info_stamps_every_event() -> None:
    processor = add_service_info("darts-scoring")

    assert processor(None, "info", {"event": "leg_finished"})["service"] == "darts-scoring"
