# tests/unit/test_market_domain_models.py
from src.pm_common.enums import MarketStatus, Outcome
from src.pm_market.domain.identity import derive_market_id, derive_pool_account
from src.pm_market.domain.models import Market, Reserves


def _make_market(**kwargs) -> Market:
    defaults = dict(
        id="mkt-1",
        authority="authority",
        reference_mint="usdc",
        yes_mint="yes",
        no_mint="no",
        pool_account="pool",
        fundraising_goal=1_000_000,
        deadline=2_000,
        project_name="Indie Star",
        created_at=1_000,
    )
    defaults.update(kwargs)
    return Market(**defaults)


class TestMarket:
    def test_defaults(self):
        m = _make_market()
        assert (m.yes_reserve, m.no_reserve, m.reference_reserve) == (0, 0, 0)
        assert m.is_settled is False
        assert m.winning_outcome is None
        assert m.status == MarketStatus.OPEN

    def test_status_follows_settled_flag(self):
        m = _make_market(is_settled=True, winning_outcome=Outcome.NO)
        assert m.status == MarketStatus.SETTLED

    def test_outcome_accessors(self):
        m = _make_market(yes_reserve=7, no_reserve=3)
        assert m.reserve_of(Outcome.YES) == 7
        assert m.reserve_of(Outcome.NO) == 3
        assert m.mint_of(Outcome.YES) == "yes"
        assert m.mint_of(Outcome.NO) == "no"


class TestReserves:
    def test_with_outcome_replaces_one_side(self):
        r = Reserves(yes=1, no=2, reference=3)
        assert r.with_outcome(Outcome.YES, 10) == Reserves(10, 2, 3)
        assert r.with_outcome(Outcome.NO, 10) == Reserves(1, 10, 3)

    def test_apply_to(self):
        m = _make_market()
        Reserves(5, 6, 11).apply_to(m)
        assert Reserves.of(m) == Reserves(5, 6, 11)


class TestIdentity:
    def test_deterministic(self):
        assert derive_market_id("auth", "Indie") == derive_market_id("auth", "Indie")

    def test_depends_on_authority_and_project(self):
        base = derive_market_id("auth", "Indie")
        assert derive_market_id("other", "Indie") != base
        assert derive_market_id("auth", "Indie 2") != base

    def test_parts_are_not_concatenated_ambiguously(self):
        assert derive_market_id("ab", "c") != derive_market_id("a", "bc")

    def test_pool_account_distinct_from_market(self):
        market_id = derive_market_id("auth", "Indie")
        pool = derive_pool_account(market_id)
        assert pool != market_id
        assert len(pool) == 64
