"""Tests for life support and the death law."""

import pytest

from wraith.engine.allocation import ResourcePools, labor_initialization
from wraith.engine.life_support import apportion_deaths, life_support
from wraith.models.catalog import build_catalog
from wraith.models.errors import InvariantError
from wraith.models.hull import Hull, HullKind, HullUnit, Population

CATALOG = build_catalog()


def create_hull(kind=HullKind.ORBITAL, lsp_code="LSP-1", lsp_qty=1_000, population=None):
    hull_id = "S1" if kind == HullKind.SHIP else "C1"
    return Hull(
        id=1,
        hull_id=hull_id,
        kind=kind,
        planet_id=1,
        hull_units=[HullUnit(CATALOG["STUN"], 5_000), HullUnit(CATALOG[lsp_code], lsp_qty)],
        population=population or Population(professional=100, soldier=100, unskilled=600, unemployed=200),
    )


class TestApportionDeaths:
    """Each class loses its share of the shortfall, rounded half up."""

    def test_exact_shares(self):
        population = Population(professional=100, soldier=100, unskilled=600, unemployed=200)
        deaths = apportion_deaths(100, population)
        assert deaths == {"PRO": 10, "SLD": 10, "USK": 60, "UEM": 20}

    def test_remainder_goes_to_largest_class(self):
        population = Population(professional=1, soldier=1, unskilled=1)
        deaths = apportion_deaths(2, population)
        # each share rounds 0.667 up to 1; the excess comes back from PRO first
        assert sum(deaths.values()) == 2
        assert deaths == {"PRO": 0, "SLD": 1, "USK": 1, "UEM": 0}

    def test_rounding_down_remainder(self):
        population = Population(professional=3, soldier=3, unskilled=4)
        deaths = apportion_deaths(5, population)
        # shares 1.5, 1.5, 2.0 round to 2, 2, 2; one too many
        assert sum(deaths.values()) == 5
        assert deaths["USK"] == 1

    @pytest.mark.parametrize("shortfall", [0, 1, 7, 333, 999, 1_000])
    def test_sums_to_shortfall(self, shortfall):
        population = Population(professional=17, soldier=250, unskilled=701, unemployed=32)
        deaths = apportion_deaths(shortfall, population)
        assert sum(deaths.values()) == shortfall
        for code, dead in deaths.items():
            assert 0 <= dead <= population.quantity(code)

    def test_capped_at_population(self):
        population = Population(professional=5, unskilled=5)
        deaths = apportion_deaths(50, population)
        assert deaths == {"PRO": 5, "SLD": 0, "USK": 5, "UEM": 0}

    def test_empty_population(self):
        assert sum(apportion_deaths(10, Population()).values()) == 0


class TestLifeSupport:
    def test_enough_capacity(self):
        hull = create_hull(lsp_qty=1_000)
        pools = ResourcePools(fuel=10_000)

        assert life_support(hull, pools) == 0
        assert pools.life_support_capacity == 1_000
        assert pools.fuel == 9_000
        assert hull.population.total == 1_000

    def test_capacity_is_tech_level_squared(self):
        hull = create_hull(lsp_code="LSP-3", lsp_qty=100)
        pools = ResourcePools(fuel=10_000)

        life_support(hull, pools)

        assert pools.life_support_capacity == 900
        assert pools.fuel == 10_000 - 300

    def test_shortfall_kills_proportionally(self):
        hull = create_hull(lsp_qty=900)
        pools = ResourcePools(fuel=10_000)

        died = life_support(hull, pools)

        assert died == 100
        assert pools.non_combat_deaths == 100
        population = hull.population
        assert (population.professional, population.soldier) == (90, 90)
        assert (population.unskilled, population.unemployed) == (540, 180)

    def test_dead_workers_leave_the_labor_pools(self):
        hull = create_hull(lsp_qty=900)
        pools = ResourcePools(fuel=10_000)
        labor_initialization(hull, pools)

        life_support(hull, pools)

        assert (pools.professional, pools.unskilled) == (90, 540)

    def test_pools_already_below_survivors_are_kept(self):
        hull = create_hull(lsp_qty=900)
        pools = ResourcePools(fuel=10_000, professional=10, unskilled=20)

        life_support(hull, pools)

        assert (pools.professional, pools.unskilled) == (10, 20)

    def test_fuel_shortage_reduces_capacity(self):
        hull = create_hull(lsp_qty=1_000)
        pools = ResourcePools(fuel=500)

        died = life_support(hull, pools)

        assert pools.life_support_capacity == 500
        assert died == 500
        assert hull.population.total == 500
        assert pools.fuel == 0

    def test_needs_no_workers(self):
        hull = create_hull(lsp_qty=1_000)
        pools = ResourcePools(fuel=10_000, professional=0, unskilled=0)
        assert life_support(hull, pools) == 0

    def test_ship_needs_life_support(self):
        hull = create_hull(kind=HullKind.SHIP, lsp_qty=0)
        assert life_support(hull, ResourcePools(fuel=10_000)) == 1_000
        assert hull.population.total == 0

    @pytest.mark.parametrize("kind", [HullKind.OPEN, HullKind.SURFACE])
    def test_open_colonies_skip_life_support(self, kind):
        hull = create_hull(kind=kind, lsp_qty=0)
        pools = ResourcePools(fuel=10_000)

        assert life_support(hull, pools) == 0
        assert pools.fuel == 10_000
        assert hull.population.total == 1_000


def test_unknown_population_class_is_an_invariant_error():
    with pytest.raises(InvariantError):
        Population().quantity("XYZ")
    with pytest.raises(InvariantError):
        Population().set_quantity("PRO", -1)
