from __future__ import annotations

from lab_hours.database.bootstrap import init_schema, seed_demo_data
from lab_hours.extensions import db
from lab_hours.main import create_app


def main() -> None:
    app = create_app()
    with app.app_context():
        init_schema()
        seed_demo_data()
        print(f"OK: Seeded database -> {db.engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    main()
