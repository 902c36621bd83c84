"""Tests for points awarding: rounding, balances, history and atomicity."""

from decimal import Decimal

import pytest

from app.errors import NotFoundError
from app.models.points_history import PointsHistory
from app.models.user import User
from app.services import points_service
from app.services.points_service import PointsAward, compute_awarded


class TestComputeAwarded:
    """Test the awarded-points formula."""

    def test_neutral_multiplier(self):
        """A 1.0 multiplier awards the base amount unchanged."""
        assert compute_awarded(50, Decimal("1.0")) == 50

    def test_half_rounds_away_from_zero(self):
        """52.5 rounds up to 53, not to the even 52."""
        assert compute_awarded(50, Decimal("1.05")) == 53

    def test_negative_half_rounds_away_from_zero(self):
        """-52.5 rounds to -53."""
        assert compute_awarded(-50, Decimal("1.05")) == -53

    def test_below_half_rounds_down(self):
        """57.45 rounds to 57."""
        assert compute_awarded(50, Decimal("1.149")) == 57

    def test_float_multiplier_uses_decimal_value(self):
        """A float 1.15 is treated as the decimal 1.15, giving 57.5 -> 58."""
        assert compute_awarded(50, 1.15) == 58


class TestAwardPoints:
    """Test single and dual awards against the ledger."""

    def test_single_award_updates_balance_and_history(self, db, make_user):
        """An award credits balance and lifetime total and records both factors."""
        user = make_user("alice")
        entry = points_service.award_points(db, user.id, 50, Decimal("1.25"), "exchange_completed", 7)

        db.refresh(user)
        assert user.points_balance == 63
        assert user.cumulative_points == 63
        assert entry.points == 63
        assert entry.base_points == 50
        assert entry.multiplier == Decimal("1.25")
        assert entry.action_type == "exchange_completed"
        assert entry.related_id == 7

    def test_awarded_amount_reproducible_from_history(self, db, make_user):
        """Stored base and multiplier reproduce the stored points."""
        user = make_user("bob")
        points_service.award_points(db, user.id, 50, Decimal("1.05"), "exchange_completed")

        entry = db.query(PointsHistory).filter(PointsHistory.user_id == user.id).one()
        assert compute_awarded(entry.base_points, entry.multiplier) == entry.points

    def test_multiplier_stored_at_three_places(self, db, make_user):
        """Extra multiplier precision is dropped before the award is computed."""
        user = make_user("dave")
        # 500 * 1.0009 = 500.45 would round to 500; the stored 1.001 gives 500.5 -> 501
        points_service.award_points(db, user.id, 500, Decimal("1.0009"), "bonus")

        db.expire_all()
        entry = db.query(PointsHistory).filter(PointsHistory.user_id == user.id).one()
        assert entry.multiplier == Decimal("1.001")
        assert entry.points == 501
        assert compute_awarded(entry.base_points, entry.multiplier) == entry.points

    def test_awards_accumulate(self, db, make_user):
        """Consecutive awards add up in balance and lifetime total."""
        user = make_user("carol")
        points_service.award_points(db, user.id, 50, Decimal("1.0"), "exchange_completed")
        points_service.award_points(db, user.id, 10, Decimal("1.5"), "bonus")

        balance = points_service.get_balance(db, user.id)
        assert balance["points_balance"] == 65
        assert balance["cumulative_points"] == 65

    def test_unknown_user_raises_not_found(self, db):
        """Awarding to a missing user fails and records nothing."""
        with pytest.raises(NotFoundError):
            points_service.award_points(db, "no-such-user", 50, Decimal("1.0"), "exchange_completed")
        assert db.query(PointsHistory).count() == 0

    def test_dual_award_credits_both(self, db, make_user):
        """Both participants receive their own scaled award."""
        a = make_user("a")
        b = make_user("b")
        entries = points_service.award_points_both(
            db,
            PointsAward(a.id, 50, Decimal("1.5")),
            PointsAward(b.id, 50, Decimal("1.0")),
            "exchange_completed",
            related_id=3,
        )

        assert [e.points for e in entries] == [75, 50]
        db.refresh(a)
        db.refresh(b)
        assert a.points_balance == 75
        assert b.points_balance == 50

    def test_dual_award_is_all_or_nothing(self, db, make_user):
        """If the second award fails, the first is rolled back."""
        a = make_user("a")
        with pytest.raises(NotFoundError):
            points_service.award_points_both(
                db,
                PointsAward(a.id, 50, Decimal("1.0")),
                PointsAward("ghost", 50, Decimal("1.0")),
                "exchange_completed",
            )

        db.refresh(a)
        assert a.points_balance == 0
        assert a.cumulative_points == 0
        assert db.query(PointsHistory).count() == 0


class TestPointQueries:
    """Test balance and history reads."""

    def test_balance_unknown_user(self, db):
        """Balance lookup for a missing user raises NotFoundError."""
        with pytest.raises(NotFoundError):
            points_service.get_balance(db, "missing")

    def test_history_newest_first(self, db, make_user):
        """History is returned newest first."""
        user = make_user("dave")
        points_service.award_points(db, user.id, 10, Decimal("1.0"), "first")
        points_service.award_points(db, user.id, 20, Decimal("1.0"), "second")

        history = points_service.get_point_history(db, user.id)
        assert [h.action_type for h in history] == ["second", "first"]

    def test_history_scoped_to_user(self, db, make_user):
        """A user's history excludes other users' awards."""
        a = make_user("a")
        b = make_user("b")
        points_service.award_points(db, a.id, 10, Decimal("1.0"), "mine")
        points_service.award_points(db, b.id, 10, Decimal("1.0"), "theirs")

        assert [h.action_type for h in points_service.get_point_history(db, a.id)] == ["mine"]
        assert db.query(User).count() == 2
