from sqlmodel import select

from bookstore.models.action_log import ActionLog, ActionType
from bookstore.services.audit_log import record_action


def test_records_entry_with_details(engine, session):
    entry_id = record_action(engine, 3, ActionType.ORDER_PLACED, {"order_id": 11})

    entry = session.get(ActionLog, entry_id)
    assert entry.user_id == 3
    assert entry.action_type == "ORDER_PLACED"
    assert entry.details == {"order_id": 11}


def test_guest_action_has_no_user(engine, session):
    record_action(engine, None, ActionType.ORDER_PLACED)

    entry = session.exec(select(ActionLog)).one()
    assert entry.user_id is None
    assert entry.details == {}


def test_write_failure_is_swallowed(engine):
    ActionLog.__table__.drop(engine)

    assert record_action(engine, 1, ActionType.ORDER_STATUS_UPDATED, {"order_id": 1}) is None
