from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import iso
from ..container import Container


def register(app: Flask, container: Container) -> None:
    summaries = container.summary_service

    @app.route("/api/summary/<work_date>", methods=["GET"], endpoint="daily_summary")
    def daily_summary(work_date: str):
        s = summaries.summarize(work_date)
        return jsonify({
            "success": True,
            "date": iso(s.work_date),
            "total_by_role": {role.value: count for role, count in s.total_by_role.items()},
            "average_worked_hours": s.average_worked_hours,
            "clocked_in": s.clocked_in_count,
            "complete": s.complete_count,
            "status_counts": {status.value: count for status, count in s.status_counts.items()},
        }), 200

    @app.route("/api/summary/person/<identifier>", methods=["GET"], endpoint="person_summary")
    def person_summary(identifier: str):
        s = summaries.person_summary(identifier, start=request.args.get("start"), end=request.args.get("end"))
        return jsonify({
            "success": True,
            "identifier": s.identifier,
            "start": iso(s.start_date),
            "end": iso(s.end_date),
            "days_recorded": s.days_recorded,
            "days_complete": s.days_complete,
            "total_hours": s.total_hours,
            "average_hours": s.average_hours,
        }), 200
