from __future__ import annotations

import logging

from .bootstrap import Route, TaskboardApp

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


def run() -> int:
    app = TaskboardApp()
    if not app.check_health():
        print(f"Taskboard API at {app.config.api_base_url} is not reachable.")
        app.close()
        return 1
    route = app.start()
    if route is Route.LOGIN:
        print("Taskboard client is ready: login required.")
    else:
        user = app.session.state.user
        print(f"Taskboard client restored the session for {user.email if user else 'unknown user'}.")
    app.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
