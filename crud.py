"""Generic resource layer.

A ``Resource`` describes one entity (model, input schema, admin form fields,
filters) and ``Resource.register(bp)`` attaches the same set of routes for
every entity:

    GET    /api/<key>                 list (filters, ?q= search)
    GET    /api/<key>/<id>            one item
    GET    /api/<key>/slug/<slug>     one item by slug (slug-bearing entities)
    POST   /api/<key>                 create
    PUT    /api/<key>/<id>            update (PATCH merges the same way)
    DELETE /api/<key>/<id>            delete

    /admin/<key>/                     list + search
    /admin/<key>/new                  create form
    /admin/<key>/<id>/edit            edit form
    /admin/<key>/<id>/delete          confirmation page, POST deletes
"""

import logging

from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user
from pydantic import ValidationError
from pydantic_core import PydanticUndefined
from sqlalchemy import or_

from api import ApiError, success_response, validation_errors
from extensions import db
from i18n import gettext as _
from permissions import api_role_required, role_required
from utils import LIKE_ESCAPE, fallback_slug, like_pattern, slugify

logger = logging.getLogger(__name__)

REGISTRY = {}

_TRUE = {"1", "true", "yes", "on"}


def parse_bool(value):
    if value is None or value == "":
        return None
    return str(value).strip().lower() in _TRUE


def parse_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class FormField:
    """One input on the generic admin form."""

    def __init__(self, name, label, kind="text", required=False, choices=None, help_text=None):
        self.name = name
        self.label = label
        self.kind = kind  # text, textarea, richtext, checkbox, select, multiselect, date, email, url, number, password, color
        self.required = required
        self.choices = choices  # callable -> [(value, label)]
        self.help_text = help_text

    def options(self):
        return self.choices() if callable(self.choices) else (self.choices or [])

    def read(self, form):
        if self.kind == "checkbox":
            return self.name in form
        if self.kind == "multiselect":
            return [int(v) for v in form.getlist(self.name) if str(v).isdigit()]
        return form.get(self.name, "")


class Resource:
    def __init__(
        self,
        key,
        model,
        schema,
        *,
        label,
        label_plural,
        fields,
        slug_source=None,
        display_field="name",
        list_columns=None,
        filters=None,
        search_fields=(),
        order_by=None,
        unique_fields=None,
        write_only=(),
        write_roles=("admin", "editor"),
        delete_roles=("admin",),
        read_roles=None,
        allow_delete=True,
        before_save=None,
        serializer=None,
        current_extra=None,
        on_view=None,
        public_create=False,
        created_message="created",
        creatable=True,
        on_delete=None,
    ):
        self.key = key
        self.ep = key.replace("-", "_")
        self.model = model
        self.schema = schema
        self.label = label
        self.label_plural = label_plural
        self.fields = fields
        self.slug_source = slug_source
        self.display_field = display_field
        self.list_columns = list_columns or [display_field]
        self.filters = filters or {}
        self.search_fields = search_fields
        self.order_by = order_by
        self.unique_fields = dict(unique_fields or {})
        if slug_source:
            self.unique_fields.setdefault("slug", "slug_taken")
        self.write_only = set(write_only)  # accepted on input, applied by before_save only
        self.write_roles = write_roles
        self.delete_roles = delete_roles
        self.read_roles = read_roles  # None means public reads
        self.allow_delete = allow_delete
        self.before_save = before_save
        self.serializer = serializer
        self.current_extra = current_extra
        self.on_view = on_view  # called when a single item is opened by slug
        self.public_create = public_create  # anonymous POST allowed (newsletter signup)
        self.created_message = created_message
        self.creatable = creatable  # False when items come from a dedicated route (uploads)
        self.on_delete = on_delete  # called with the deleted row's dict after commit
        self.blueprint_name = None

    # ---------- naming ----------
    @property
    def api_path(self):
        return f"/api/{self.key}"

    def endpoint(self, kind):
        return f"{self.blueprint_name}.{self.ep}_{kind}"

    def display(self, obj):
        return getattr(obj, self.display_field, None) or f"#{obj.id}"

    # ---------- queries ----------
    def _hide_unpublished(self):
        return hasattr(self.model, "is_published") and not current_user.is_authenticated

    def base_query(self):
        query = self.model.query
        if self._hide_unpublished():
            query = query.filter(self.model.is_published.is_(True))
        return query

    def list_items(self, args):
        query = self.base_query()
        for name, kind in self.filters.items():
            raw = args.get(name)
            value = parse_bool(raw) if kind is bool else parse_int(raw) if kind is int else raw
            if value is not None and value != "":
                query = query.filter(getattr(self.model, name) == value)

        keyword = (args.get("q") or "").strip()
        if keyword and self.search_fields:
            like = like_pattern(keyword)
            query = query.filter(or_(*[
                getattr(self.model, f).ilike(like, escape=LIKE_ESCAPE) for f in self.search_fields
            ]))

        if self.order_by is not None:
            query = query.order_by(*self.order_by(self.model))
        elif hasattr(self.model, "created_at"):
            query = query.order_by(self.model.created_at.desc(), self.model.id.desc())
        else:
            query = query.order_by(self.model.id.desc())

        limit = parse_int(args.get("limit"))
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_or_404(self, item_id):
        obj = self.base_query().filter(self.model.id == item_id).first()
        if obj is None:
            raise ApiError(404, _("not_found"), code="not_found")
        return obj

    def get_by_slug_or_404(self, slug):
        obj = self.base_query().filter(self.model.slug == slug).first()
        if obj is None:
            raise ApiError(404, _("not_found"), code="not_found")
        return obj

    def serialize(self, obj):
        return self.serializer(obj) if self.serializer else obj.to_dict()

    def record_view(self, obj):
        if self.on_view:
            self.on_view(obj)

    # ---------- mutations ----------
    def _current_values(self, obj):
        values = {}
        exclude = getattr(obj, "serialize_exclude", ())
        for column in obj.__table__.columns:
            if column.key in ("id", "created_at", "updated_at") or column.key in exclude:
                continue
            values[column.key] = getattr(obj, column.key)
        if self.current_extra:
            values.update(self.current_extra(obj))
        return values

    def _fill_slug(self, payload):
        if self.slug_source and not (payload.get("slug") or "").strip():
            derived = slugify(payload.get(self.slug_source) or "")[:120].strip("-")
            payload["slug"] = derived if len(derived) >= 2 else fallback_slug(self.key)

    def _check_unique(self, data, obj=None):
        for field, message_key in self.unique_fields.items():
            value = data.get(field)
            if value is None:
                continue
            query = self.model.query.filter(getattr(self.model, field) == value)
            if obj is not None:
                query = query.filter(self.model.id != obj.id)
            if query.first() is not None:
                raise ApiError(409, _(message_key), code=f"{field}_taken")

    def _apply(self, obj, data, creating):
        columns = {c.key for c in self.model.__table__.columns}
        for name, value in data.items():
            if name in columns and name not in self.write_only and name not in ("id", "created_at", "updated_at"):
                setattr(obj, name, value)
        if self.before_save:
            self.before_save(obj, data, creating)

    def create(self, payload):
        payload = dict(payload or {})
        self._fill_slug(payload)
        data = self.schema.model_validate(payload).model_dump()
        self._check_unique(data)
        obj = self.model()
        self._apply(obj, data, creating=True)
        db.session.add(obj)
        db.session.commit()
        logger.info("%s #%s created by %s", self.key, obj.id, getattr(current_user, "username", "-"))
        return obj

    def update(self, obj, payload):
        merged = self._current_values(obj)
        merged.update(payload or {})
        self._fill_slug(merged)
        data = self.schema.model_validate(merged).model_dump()
        self._check_unique(data, obj)
        self._apply(obj, data, creating=False)
        db.session.commit()
        logger.info("%s #%s updated by %s", self.key, obj.id, getattr(current_user, "username", "-"))
        return obj

    def delete(self, obj):
        if not self.allow_delete:
            raise ApiError(403, _("delete_not_allowed"), code="delete_not_allowed")
        item_id = obj.id
        snapshot = obj.to_dict() if self.on_delete else None
        db.session.delete(obj)
        db.session.commit()
        if self.on_delete:
            self.on_delete(snapshot)
        logger.info("%s #%s deleted by %s", self.key, item_id, getattr(current_user, "username", "-"))

    # ---------- route registration ----------
    def register(self, bp):
        self.blueprint_name = bp.name
        REGISTRY[self.key] = self
        self._register_api(bp)
        self._register_admin(bp)
        return self

    def _guard_read(self, view):
        return api_role_required(*self.read_roles)(view) if self.read_roles else view

    def _register_api(self, bp):
        resource = self
        path = self.api_path

        def api_list():
            return success_response([resource.serialize(o) for o in resource.list_items(request.args)])

        def api_get(item_id):
            return success_response(resource.serialize(resource.get_or_404(item_id)))

        def api_create():
            obj = resource.create(request.get_json(silent=True) or {})
            return success_response(resource.serialize(obj), _(resource.created_message), 201)

        def api_update(item_id):
            obj = resource.update(resource.get_or_404(item_id), request.get_json(silent=True) or {})
            return success_response(resource.serialize(obj), _("updated"))

        def api_delete(item_id):
            resource.delete(resource.get_or_404(item_id))
            return success_response({"id": item_id}, _("deleted"))

        bp.add_url_rule(path, f"{self.ep}_api_list", self._guard_read(api_list), methods=["GET"])
        bp.add_url_rule(f"{path}/<int:item_id>", f"{self.ep}_api_get", self._guard_read(api_get), methods=["GET"])
        if self.creatable:
            create_view = api_create if self.public_create else api_role_required(*self.write_roles)(api_create)
            bp.add_url_rule(path, f"{self.ep}_api_create", create_view, methods=["POST"])
        bp.add_url_rule(
            f"{path}/<int:item_id>",
            f"{self.ep}_api_update",
            api_role_required(*self.write_roles)(api_update),
            methods=["PUT", "PATCH"],
        )
        bp.add_url_rule(
            f"{path}/<int:item_id>",
            f"{self.ep}_api_delete",
            api_role_required(*self.delete_roles)(api_delete),
            methods=["DELETE"],
        )

        if self.slug_source:
            def api_get_by_slug(slug):
                obj = resource.get_by_slug_or_404(slug)
                resource.record_view(obj)
                return success_response(resource.serialize(obj))

            bp.add_url_rule(f"{path}/slug/<slug>", f"{self.ep}_api_get_by_slug", self._guard_read(api_get_by_slug))

    def form_defaults(self):
        """Schema defaults for an empty create form (default factories included)."""
        defaults = {}
        for name, field in self.schema.model_fields.items():
            if field.is_required():
                continue
            value = field.get_default(call_default_factory=True)
            if value is not None and value is not PydanticUndefined:
                defaults[name] = value
        return defaults

    def _render_form(self, item=None, values=None, errors=None, status=200):
        return render_template(
            "admin/resource_form.html",
            resource=self,
            item=item,
            values=values or {},
            errors=errors or {},
        ), status

    def _handle_form(self, item=None):
        values = {f.name: f.read(request.form) for f in self.fields}
        try:
            if item is None:
                obj = self.create(values)
                flash(_("created"), "success")
            else:
                obj = self.update(item, values)
                flash(_("updated"), "success")
        except ValidationError as exc:
            db.session.rollback()
            errors = {e["field"]: e["message"] for e in validation_errors(exc)}
            flash(_("validation_failed"), "danger")
            return self._render_form(item, values, errors, 400)
        except ApiError as exc:
            db.session.rollback()
            flash(exc.message, "danger")
            return self._render_form(item, values, {}, exc.status)
        return redirect(url_for(self.endpoint("admin_list"), highlight=obj.id))

    def _register_admin(self, bp):
        resource = self
        base = f"/admin/{self.key}"
        read_roles = self.read_roles or self.write_roles

        def admin_list():
            items = resource.list_items(request.args)
            return render_template("admin/resource_list.html", resource=resource, items=items,
                                   q=request.args.get("q", ""))

        def admin_create():
            if request.method == "POST":
                return resource._handle_form()
            return resource._render_form(values=resource.form_defaults())

        def admin_edit(item_id):
            item = resource.get_or_404(item_id)
            if request.method == "POST":
                return resource._handle_form(item)
            return resource._render_form(item, resource._current_values(item))

        def admin_delete(item_id):
            item = resource.get_or_404(item_id)
            if request.method == "POST":
                if request.form.get("confirm") != "yes":
                    return redirect(url_for(resource.endpoint("admin_list")))
                resource.delete(item)
                flash(_("deleted"), "success")
                return redirect(url_for(resource.endpoint("admin_list")))
            return render_template("admin/confirm_delete.html", resource=resource, item=item)

        bp.add_url_rule(f"{base}/", f"{self.ep}_admin_list", role_required(read_roles)(admin_list))
        if self.creatable:
            bp.add_url_rule(f"{base}/new", f"{self.ep}_admin_create", role_required(self.write_roles)(admin_create),
                            methods=["GET", "POST"])
        bp.add_url_rule(f"{base}/<int:item_id>/edit", f"{self.ep}_admin_edit",
                        role_required(self.write_roles)(admin_edit), methods=["GET", "POST"])
        if self.allow_delete:
            bp.add_url_rule(f"{base}/<int:item_id>/delete", f"{self.ep}_admin_delete",
                            role_required(self.delete_roles)(admin_delete), methods=["GET", "POST"])
