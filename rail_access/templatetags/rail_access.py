"""
Template tags for permission gates.

Usage:
    {% load rail_access %}

    {% can "user.edit" %}
        <button>Edit</button>
    {% endcan %}

    {% can "user.edit" "user.view" mode="any" %}
        <button>View or Edit</button>
    {% else %}
        <span>Read only</span>
    {% endcan %}

    {% has_permission "user.delete" as can_delete %}
"""

from django import template
from django.template.base import FilterExpression, NodeList

from ..access.context import AccessContext, get_current_access
from ..config_proxy import get_setting
from ..exceptions import AccessContextError
from ..policies.types import normalize_permissions

register = template.Library()


def _get_access(context) -> AccessContext:
    access = context.get("access")
    if isinstance(access, AccessContext):
        return access
    request = context.get("request")
    if request is not None:
        attribute = get_setting("access_settings.request_attribute", "access")
        access = getattr(request, attribute, None)
        if isinstance(access, AccessContext):
            return access
    access = get_current_access()
    if access is None:
        raise AccessContextError(
            "Permission tags need an access context; enable "
            "AccessContextMiddleware or pass 'access' to the template"
        )
    return access


def _flatten(values) -> list[str]:
    permissions: list[str] = []
    for value in values:
        permissions.extend(normalize_permissions(value))
    return permissions


class CanNode(template.Node):
    def __init__(
        self,
        permissions: list[FilterExpression],
        mode: FilterExpression,
        nodelist_true: NodeList,
        nodelist_false: NodeList,
    ):
        self.permissions = permissions
        self.mode = mode
        self.nodelist_true = nodelist_true
        self.nodelist_false = nodelist_false

    def render(self, context):
        permissions = _flatten(p.resolve(context) for p in self.permissions)
        mode = self.mode.resolve(context) if self.mode is not None else None
        if _get_access(context).can(permissions, mode):
            return self.nodelist_true.render(context)
        return self.nodelist_false.render(context)


@register.tag(name="can")
def do_can(parser, token):
    bits = token.split_contents()
    tag_name = bits[0]
    permissions = []
    mode = None
    for bit in bits[1:]:
        if bit.startswith("mode="):
            mode = parser.compile_filter(bit[len("mode="):])
        else:
            permissions.append(parser.compile_filter(bit))
    if not permissions:
        raise template.TemplateSyntaxError(
            f"'{tag_name}' tag requires at least one permission"
        )

    nodelist_true = parser.parse(("else", "endcan"))
    token = parser.next_token()
    if token.contents == "else":
        nodelist_false = parser.parse(("endcan",))
        parser.delete_first_token()
    else:
        nodelist_false = NodeList()
    return CanNode(permissions, mode, nodelist_true, nodelist_false)


@register.simple_tag(takes_context=True)
def has_permission(context, *permissions, mode=None):
    return _get_access(context).can(_flatten(permissions), mode)
