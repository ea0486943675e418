"""
Shared fixtures: a fresh store per test, a clock the tests control, and a
small bootstrapped staff.

Principals:
  boss    — system admin, restaurant manager
  chef    — cook
  server  — waiter
  intern  — registered user without a restaurant role
  nobody  — never registered (guest)
"""
import pytest
import pytest_asyncio
import httpx

from restopos.core.config import Settings
from restopos.core.security import create_access_token
from restopos.db.store import EntityStore
from restopos.main import create_app
from restopos.ops.restaurant import RestaurantOperations

HOUR_NS = 60 * 60 * 1_000_000_000
DAY_NS = 24 * HOUR_NS
START_NS = 1_760_000_000 * 1_000_000_000


class FakeClock:
    def __init__(self, now: int = START_NS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ns: int) -> None:
        self.now += ns


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def ops(clock):
    ops = RestaurantOperations(EntityStore(), clock=clock)
    ops.initialize_access_control("boss")
    ops.save_caller_profile("boss", "Mira", "manager")
    ops.add_staff_member("boss", "Tomas", "cook", "chef")
    ops.add_staff_member("boss", "Lea", "waiter", "server")
    ops.initialize_access_control("intern")
    return ops


@pytest.fixture()
def menu(ops):
    """Menu item ids keyed by short name."""
    return {
        "burger": ops.add_menu_item("boss", "Burger", "main", 1250),
        "fries": ops.add_menu_item("boss", "Fries", "side", 450),
        "soda": ops.add_menu_item("boss", "Soda", "drink", 300),
    }


@pytest.fixture()
def table(ops):
    return ops.add_table("server", 4, 2)


# ─── HTTP fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture()
def app(ops):
    return create_app(Settings(METRICS_ENABLED=False), restaurant=ops)


@pytest_asyncio.fixture()
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://restaurant.test") as c:
        yield c


def auth_headers(principal: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': principal})}"}


@pytest.fixture()
def as_user():
    return auth_headers
