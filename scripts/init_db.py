from __future__ import annotations

from lab_hours.database.bootstrap import init_schema
from lab_hours.extensions import db
from lab_hours.main import create_app


def main() -> None:
    app = create_app()
    with app.app_context():
        init_schema()
        print(f"OK: Schema ready -> {db.engine.url.render_as_string(hide_password=True)} (tables={len(db.metadata.tables)})")


if __name__ == "__main__":
    main()
