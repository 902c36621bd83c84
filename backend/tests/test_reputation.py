"""Tests for reputation and multiplier resolution."""

from decimal import Decimal

import pytest

from app.models.point_multiplier import PointMultiplierTier
from app.services import reputation_service


class TestGetReputation:
    """Test reputation derived from the rating signal."""

    def test_no_ratings_is_neutral(self, db, make_user):
        """A user with zero ratings has reputation exactly 0.0."""
        user = make_user("new")
        assert reputation_service.get_reputation(db, user.id) == 0.0

    def test_unknown_user_is_neutral(self, db):
        """A missing user falls back to 0.0 rather than failing."""
        assert reputation_service.get_reputation(db, "nobody") == 0.0

    def test_average_of_ratings(self, db, make_user):
        """Reputation is rating sum over rating count."""
        user = make_user("rated", reputation_sum=9, reputation_count=2)
        assert reputation_service.get_reputation(db, user.id) == 4.5


class TestResolveMultiplier:
    """Test tier lookup against the seeded tier table."""

    def test_neutral_reputation_tier(self, db):
        """Reputation 0.0 lands in the lowest tier."""
        assert reputation_service.resolve_multiplier(db, 0.0) == Decimal("1.00")

    def test_inclusive_bounds(self, db):
        """Both ends of a tier range match."""
        assert reputation_service.resolve_multiplier(db, 4.5) == Decimal("1.50")
        assert reputation_service.resolve_multiplier(db, 5.0) == Decimal("1.50")
        assert reputation_service.resolve_multiplier(db, 3.0) == Decimal("1.10")

    def test_shared_boundary_resolves_upward(self, db):
        """A value on the edge between two tiers gets the higher tier."""
        assert reputation_service.resolve_multiplier(db, 4.0) == Decimal("1.25")

    @pytest.mark.parametrize("low,high", [
        (2.99, 2.995),
        (2.995, 3.0),
        (3.5, 3.995),
        (3.995, 4.0),
        (4.49, 4.495),
        (4.495, 4.5),
        (4.5, 5.0),
    ])
    def test_multiplier_never_decreases(self, db, low, high):
        """Seeded tiers leave no gap where a better reputation earns less."""
        assert reputation_service.resolve_multiplier(db, high) >= reputation_service.resolve_multiplier(db, low)

    def test_rating_averages_between_tiers(self, db):
        """Averages just below a boundary stay in the lower tier, not the neutral fallback."""
        assert reputation_service.resolve_multiplier(db, 799 / 200) == Decimal("1.10")
        assert reputation_service.resolve_multiplier(db, 899 / 200) == Decimal("1.25")

    def test_gap_falls_back_to_neutral(self, db):
        """A value between configured tiers yields the neutral 1.0 multiplier."""
        db.query(PointMultiplierTier).delete()
        db.add(PointMultiplierTier(min_reputation=0.0, max_reputation=2.99, multiplier=Decimal("1.20")))
        db.add(PointMultiplierTier(min_reputation=3.0, max_reputation=5.0, multiplier=Decimal("1.50")))
        db.commit()
        assert reputation_service.resolve_multiplier(db, 2.995) == Decimal("1.0")

    def test_out_of_range_falls_back_to_neutral(self, db):
        """A value above every tier yields 1.0."""
        assert reputation_service.resolve_multiplier(db, 7.0) == Decimal("1.0")

    def test_empty_tier_table_falls_back_to_neutral(self, db):
        """With no tiers configured every lookup yields 1.0."""
        db.query(PointMultiplierTier).delete()
        db.commit()
        assert reputation_service.resolve_multiplier(db, 4.0) == Decimal("1.0")
