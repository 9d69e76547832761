from __future__ import annotations

from dataclasses import dataclass

LOGIN_PATH = "/login"
HOME_PATH = "/dashboard"


@dataclass(frozen=True)
class Route:
    path: str
    title: str
    icon: str
    script: str
    protected: bool = True

    @property
    def url_path(self) -> str:
        return self.path.lstrip("/")


ROUTES = [
    Route(LOGIN_PATH, "Sign in", "🔐", "login.py", protected=False),
    Route(HOME_PATH, "Dashboard", "🏠", "home.py"),
    Route("/skus", "SKUs", "📦", "pages/1_📦_SKUs.py"),
    Route("/inventory", "Inventory", "📊", "pages/2_📊_Inventory.py"),
    Route("/transactions", "Transactions", "🔁", "pages/3_🔁_Transactions.py"),
    Route("/users", "Users", "👥", "pages/4_👥_Users.py"),
    Route("/logs", "Activity Logs", "📜", "pages/5_📜_Activity_Logs.py"),
    Route("/settings", "Settings", "⚙️", "pages/6_⚙️_Settings.py"),
]


def visible_routes(authenticated: bool) -> list[Route]:
    """Pages registered with the navigator. Anything else falls through to the default."""
    return [r for r in ROUTES if r.protected == authenticated]


def default_path(authenticated: bool) -> str:
    return HOME_PATH if authenticated else LOGIN_PATH
