from __future__ import annotations

from flask import Flask, request

from ..common.guards import build_guards
from ..common.request_utils import json_body
from ..common.responses import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = build_guards(container.token_service)
    tags = container.tag_service
    sync = container.tag_sync_service

    @app.route("/api/tags", methods=["GET"], endpoint="tags_all")
    @guards.login_required
    def list_tags():
        return ok([t.to_dict() for t in tags.list_all()])

    @app.route("/api/tags/active", methods=["GET"], endpoint="tags_active")
    @guards.login_required
    def list_active_tags():
        return ok([t.to_dict() for t in tags.list_active()])

    @app.route("/api/tags/search", methods=["GET"], endpoint="tags_search")
    @guards.login_required
    def search_tags():
        return ok([t.to_dict() for t in tags.search(request.args.get("q"))])

    def _run_sync():
        result = sync.sync()
        message = f"Notion tag sync completed (new: {result.new_tags}, updated: {result.updated_tags})"
        return ok(result.to_dict(), message=message)

    @app.route("/api/tags/sync", methods=["POST"], endpoint="tags_sync")
    @guards.admin_required
    def sync_tags():
        return _run_sync()

    @app.route("/api/admin/tags/sync", methods=["POST"], endpoint="admin_tags_sync")
    @guards.admin_required
    def admin_sync_tags():
        return _run_sync()

    @app.route("/api/admin/tags/sync-status", methods=["GET"], endpoint="admin_tags_sync_status")
    @guards.admin_required
    def admin_sync_status():
        return ok(sync.get_last_sync())

    @app.route("/api/admin/tags/notion-info", methods=["GET"], endpoint="admin_tags_notion_info")
    @guards.admin_required
    def admin_notion_info():
        return ok(sync.notion_info())

    @app.route("/api/admin/tags", methods=["POST"], endpoint="admin_tags_create")
    @guards.admin_required
    def admin_create_tag():
        data = json_body()
        tag = tags.create(name=data.get("name"), is_active=data.get("is_active", True))
        return ok(tag.to_dict(), message="Tag created", status=201)

    @app.route("/api/admin/tags/<int:tag_id>", methods=["PUT"], endpoint="admin_tags_update")
    @guards.admin_required
    def admin_update_tag(tag_id: int):
        data = json_body()
        tag = tags.update(tag_id, name=data.get("name"), is_active=data.get("is_active"))
        return ok(tag.to_dict(), message="Tag updated")
