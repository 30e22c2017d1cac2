from __future__ import annotations

from flask import Flask, render_template

from ..auth.decorators import permission_required
from ..container import Container
from ..core.enums import Permission


def register(app: Flask, container: Container) -> None:
    @app.route("/csv_report", endpoint="csv_report")
    @permission_required(Permission.HOURS_VIEW_REPORT)
    def csv_report():
        return app.response_class(container.report_service.csv_report(), mimetype="text/csv")

    @app.route("/strike_report", endpoint="strike_report")
    @permission_required(Permission.HOURS_VIEW_REPORT)
    def strike_report():
        return render_template("strike_report.html", report=container.report_service.strike_report())
