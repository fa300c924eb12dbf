from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import iso, json_body
from ..container import Container
from .model import DtrRecord
from .status import derive_status


def record_to_dict(record: DtrRecord) -> dict:
    return {
        "identifier": record.identifier,
        "date": iso(record.work_date),
        "first_in": iso(record.first_in),
        "last_out": iso(record.last_out),
        "events": [{"kind": e.kind.value, "at": iso(e.at)} for e in record.event_log],
        "status": derive_status(record).value,
    }


def register(app: Flask, container: Container) -> None:
    clock = container.clock_service

    def _clock_response(result):
        return jsonify({
            "success": True,
            "record": record_to_dict(result.record),
            "status": result.status.value,
        }), 200

    @app.route("/api/dtr/clock-in", methods=["POST"], endpoint="dtr_clock_in")
    def clock_in():
        data = json_body()
        return _clock_response(clock.clock_in(data.get("identifier"), data.get("at")))

    @app.route("/api/dtr/clock-out", methods=["POST"], endpoint="dtr_clock_out")
    def clock_out():
        data = json_body()
        return _clock_response(clock.clock_out(data.get("identifier"), data.get("at")))

    @app.route("/api/dtr/<identifier>/<work_date>", methods=["GET"], endpoint="dtr_record")
    def get_record(identifier: str, work_date: str):
        record = clock.get_record(identifier, work_date)
        # no record yet is a normal state, not an error
        return jsonify({
            "success": True,
            "record": record_to_dict(record) if record else None,
            "status": derive_status(record).value,
        }), 200

    @app.route("/api/dtr/<identifier>/<work_date>/status", methods=["GET"], endpoint="dtr_status")
    def get_status(identifier: str, work_date: str):
        return jsonify({"success": True, "status": clock.get_status(identifier, work_date).value}), 200

    @app.route("/api/dtr/<identifier>", methods=["GET"], endpoint="dtr_history")
    def history(identifier: str):
        records = clock.history(identifier, start=request.args.get("start"), end=request.args.get("end"))
        return jsonify({"success": True, "records": [record_to_dict(r) for r in records]}), 200
