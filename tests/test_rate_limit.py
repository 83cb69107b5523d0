import pytest
from fastapi.testclient import TestClient

from caravan.core.ratelimit import RenderBudget
from caravan.core.ratelimit import RenderBudgetExceeded
from caravan.main import create_app


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def test_budget_charges_until_exhausted(clock: FakeClock) -> None:
    budget = RenderBudget(budget=3, window_seconds=60, clock=clock)

    budget.charge("octocat", 2)
    budget.charge("octocat", 1)

    assert budget.spent("octocat") == 3
    with pytest.raises(RenderBudgetExceeded) as excinfo:
        budget.charge("octocat", 1)
    assert excinfo.value.login == "octocat"
    assert budget.spent("octocat") == 3


def test_budget_is_keyed_by_login_case_insensitively(clock: FakeClock) -> None:
    budget = RenderBudget(budget=2, window_seconds=60, clock=clock)

    budget.charge("OctoCat", 2)

    with pytest.raises(RenderBudgetExceeded):
        budget.charge("octocat", 1)
    budget.charge("hubot", 2)
    assert budget.spent("hubot") == 2


def test_retry_after_waits_for_oldest_charge_that_frees_room(clock: FakeClock) -> None:
    budget = RenderBudget(budget=3, window_seconds=60, clock=clock)
    budget.charge("octocat", 1)
    clock.now += 10
    budget.charge("octocat", 2)
    clock.now += 5

    with pytest.raises(RenderBudgetExceeded) as excinfo:
        budget.charge("octocat", 2)

    # The first charge (1) expires in 45s but frees too little; the second in 55s.
    assert excinfo.value.retry_after == 55


def test_charges_expire_after_window(clock: FakeClock) -> None:
    budget = RenderBudget(budget=2, window_seconds=60, clock=clock)
    budget.charge("octocat", 2)

    clock.now += 60

    assert budget.spent("octocat") == 0
    budget.charge("octocat", 2)


def test_cost_above_budget_is_always_refused(clock: FakeClock) -> None:
    budget = RenderBudget(budget=1, window_seconds=30, clock=clock)

    with pytest.raises(RenderBudgetExceeded) as excinfo:
        budget.charge("octocat", 2)

    assert excinfo.value.retry_after == 30
    assert budget.spent("octocat") == 0


@pytest.fixture
def logins(monkeypatch, make_calendar) -> dict[str, str]:
    """Map tokens to owners and serve a one week calendar for everyone."""

    owners = {"token-a": "octocat", "token-b": "hubot"}
    calendar = make_calendar([[0, 1, 2, 5, 10, 10, 10]])
    monkeypatch.setattr(
        "caravan.api.routes.caravan.load_viewer_login",
        lambda token, graphql_url: owners[token],
    )
    monkeypatch.setattr(
        "caravan.api.routes.caravan.load_calendar",
        lambda login, token, graphql_url: calendar,
    )
    return owners


@pytest.fixture
def tight_client(monkeypatch) -> TestClient:
    monkeypatch.setenv("RENDER_BUDGET", "2")
    monkeypatch.setenv("RENDER_BUDGET_WINDOW_SECONDS", "60")
    return TestClient(create_app())


def test_svg_render_spends_login_budget(tight_client: TestClient, logins) -> None:
    """An SVG costs two units, so a follow-up summary is refused."""

    first = tight_client.get("/caravan/me.svg", headers={"Authorization": "Bearer token-a"})
    second = tight_client.get("/caravan/me", headers={"Authorization": "Bearer token-a"})

    assert first.status_code == 200
    assert second.status_code == 429
    assert second.json() == {"detail": "Render budget exhausted"}
    assert 1 <= int(second.headers["Retry-After"]) <= 60


def test_budget_is_tracked_per_github_login(tight_client: TestClient, logins) -> None:
    tight_client.get("/caravan/me.svg", headers={"Authorization": "Bearer token-a"})

    other = tight_client.get("/caravan/me.svg", headers={"Authorization": "Bearer token-b"})

    assert other.status_code == 200


def test_missing_token_does_not_spend_budget(tight_client: TestClient, logins) -> None:
    for _ in range(3):
        assert tight_client.get("/caravan/me.svg").status_code == 401

    response = tight_client.get("/caravan/me.svg", headers={"Authorization": "Bearer token-a"})

    assert response.status_code == 200
