"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in services.
"""

import importlib

from config import get_settings_module

from src.leave_management.leave_management.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    reviewer = container.users_repo.get_by_username("teacher1")
    if not reviewer:
        raise SystemExit("Run scripts/seed_db.py first")

    for item in container.leave_service.list_pending_for_reviewer(reviewer=reviewer):
        r = item.request
        print(f"{r.submitted_at:%Y-%m-%d %H:%M}  {item.student.name:<20} {r.leave_type.value:<9} {r.from_date}..{r.to_date}")


if __name__ == "__main__":
    main()
