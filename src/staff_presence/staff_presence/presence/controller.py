from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.http import iso, json_body, query_bool
from ..container import Container
from .model import PostingView, StaffBoardEntry


def view_to_dict(view: Optional[PostingView]) -> Optional[dict]:
    if view is None:
        return None
    p = view.posting
    return {
        "identifier": p.identifier,
        "location": p.location,
        "reason": p.reason,
        "posted_at": iso(p.posted_at),
        "expires_at": iso(p.expires_at),
        "duration_minutes": p.duration_minutes,
        "role": p.role_at_posting.value,
        "posted_by_identifier": p.posted_by_identifier,
        "posted_by_name": p.posted_by_name,
        "is_expired": view.is_expired,
    }


def entry_to_dict(entry: StaffBoardEntry) -> dict:
    return {
        "identifier": entry.identifier,
        "name": entry.display_name,
        "role": entry.role_class.value,
        "posted": entry.posted,
        "posting": view_to_dict(entry.view),
    }


def register(app: Flask, container: Container) -> None:
    board = container.presence_service

    @app.route("/api/locations", methods=["POST"], endpoint="post_location")
    def post_location():
        data = json_body()
        posting = board.post_location(
            data.get("identifier"),
            data.get("poster_role"),
            data.get("location"),
            data.get("reason"),
            data.get("duration_minutes"),
            data.get("at"),
            posted_by=data.get("posted_by"),
        )
        view = board.view_of(posting)
        return jsonify({"success": True, "posting": view_to_dict(view)}), 200

    @app.route("/api/locations", methods=["GET"], endpoint="active_postings")
    def active_postings():
        return jsonify({"success": True, "postings": [view_to_dict(v) for v in board.active_postings()]}), 200

    @app.route("/api/locations/<identifier>", methods=["GET"], endpoint="current_location")
    def current_location(identifier: str):
        return jsonify({"success": True, "posting": view_to_dict(board.current_location(identifier))}), 200

    @app.route("/api/locations/<identifier>/recent", methods=["GET"], endpoint="recent_postings")
    def recent_postings(identifier: str):
        limit = request.args.get("limit", "5")
        views = board.recent_postings(identifier, limit=limit)
        return jsonify({"success": True, "postings": [view_to_dict(v) for v in views]}), 200

    @app.route("/api/staff-board", methods=["GET"], endpoint="staff_board")
    def staff_board():
        role = request.args.get("role")
        entries = board.staff_board(
            role=None if role in (None, "", "all") else role,
            state=None if request.args.get("state") in (None, "", "all") else request.args.get("state"),
            posted=query_bool("posted"),
        )
        return jsonify({"success": True, "staff": [entry_to_dict(e) for e in entries]}), 200
