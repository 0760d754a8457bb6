"""Who may read an order: its owner, or a guest holding its order token."""

from datetime import timedelta

from bookstore.services import order_service
from bookstore.services.order_service import CallerIdentity
from bookstore.utils.token import create_access_token, create_order_token


class TestGetOrder:
    def test_owner_sees_own_order(self, session, make_order, make_user):
        user = make_user()
        order = make_order(user_id=user.id)

        found = order_service.get_order(session, order.id, CallerIdentity(user_id=user.id))

        assert found.id == order.id

    def test_other_user_gets_nothing(self, session, make_order, make_user):
        owner = make_user()
        other = make_user(email="other@bookmail.co.ke")
        order = make_order(user_id=owner.id)

        assert order_service.get_order(session, order.id, CallerIdentity(user_id=other.id)) is None

    def test_logged_in_user_cannot_open_guest_order(self, session, make_order, make_user):
        user = make_user()
        order = make_order()

        assert order_service.get_order(session, order.id, CallerIdentity(user_id=user.id)) is None

    def test_guest_with_order_token(self, session, make_order):
        order = make_order()
        caller = CallerIdentity(order_token=create_order_token(order.id))

        assert order_service.get_order(session, order.id, caller).id == order.id

    def test_token_for_another_order_is_refused(self, session, make_order):
        order = make_order()
        other = make_order()
        caller = CallerIdentity(order_token=create_order_token(other.id))

        assert order_service.get_order(session, order.id, caller) is None

    def test_expired_token_is_refused(self, session, make_order):
        order = make_order()
        caller = CallerIdentity(order_token=create_order_token(order.id, timedelta(seconds=-1)))

        assert order_service.get_order(session, order.id, caller) is None

    def test_guest_without_token_is_refused(self, session, make_order):
        order = make_order()

        assert order_service.get_order(session, order.id, CallerIdentity()) is None

    def test_login_token_does_not_open_orders(self, session, make_order):
        order = make_order()
        caller = CallerIdentity(order_token=create_access_token({"sub": f"order:{order.id}"}))

        assert order_service.get_order(session, order.id, caller) is None

    def test_missing_order(self, session):
        caller = CallerIdentity(order_token=create_order_token(999))

        assert order_service.get_order(session, 999, caller) is None


class TestListing:
    def test_user_listing_only_has_own_orders_newest_first(self, session, make_order, make_user):
        user = make_user()
        other = make_user(email="other@bookmail.co.ke")
        first = make_order(user_id=user.id)
        make_order(user_id=other.id)
        second = make_order(user_id=user.id)

        orders = order_service.list_orders_for_user(session, user.id)

        assert [o.id for o in orders] == [second.id, first.id]

    def test_admin_listing_has_everything(self, session, make_order, make_user):
        user = make_user()
        make_order(user_id=user.id)
        make_order()

        assert len(order_service.list_orders(session)) == 2
