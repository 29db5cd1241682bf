"""Structural predicates deciding what the node under the cursor refers to.

Every predicate takes a ``NodePath`` and answers with a plain bool. Missing or
misshaped ancestors are a ``False`` answer, never an exception.
"""

from collections.abc import Collection, Sequence
from typing import Any, Literal, TypeGuard

from ember_definitions.core.navigator import NodePath
from ember_definitions.models import SyntaxNode

RELATION_DECLARATION_NAMES = frozenset({"belongsTo", "hasMany"})
ATTRIBUTE_DECLARATION_NAME = "attr"
SERVICE_INJECTION_NAME = "service"
LOCALIZATION_HELPER_NAME = "t"
TEMPLATE_TAG_NAME = "hbs"
LINK_TO_HELPER_NAME = "link-to"
ON_MODIFIER_NAME = "on"
OUTLET_NAME = "outlet"
LINK_COMPONENT_ROUTE_ATTRIBUTE = "@route"

SPECIAL_HELPER_NAMES = frozenset({"component", "helper", "modifier"})

ROUTE_TRANSITION_NAMES = frozenset(
    {
        "transitionTo",
        "replaceWith",
        "replaceRoute",
        "modelFor",
        "controllerFor",
        "intermediateTransitionTo",
        "paramsFor",
        "transitionToRoute",
    }
)

STORE_LOOKUP_NAMES = frozenset(
    {
        "findRecord",
        "createRecord",
        "findAll",
        "queryRecord",
        "peekAll",
        "query",
        "peekRecord",
        "adapterFor",
        "hasRecordForId",
    }
)

COMPUTED_MACRO_NAMES = frozenset(
    {
        "computed",
        "and",
        "alias",
        "bool",
        "collect",
        "deprecatingAlias",
        "empty",
        "equal",
        "filter",
        "filterBy",
        "gt",
        "gte",
        "intersect",
        "lt",
        "lte",
        "map",
        "mapBy",
        "match",
        "max",
        "min",
        "none",
        "not",
        "notEmpty",
        "oneWay",
        "or",
        "readOnly",
        "reads",
        "setDiff",
        "sort",
        "sum",
        "union",
        "uniq",
        "uniqBy",
        "notifyPropertyChange",
        "toggleProperty",
        "cacheFor",
        "addObserver",
        "removeObserver",
        "incrementProperty",
        "decrementProperty",
        "set",
        "get",
        "getWithDefault",
    }
)

EXCLUDED_TAG_PREFIXES = ("@", "this.", ":")

# fmt: off
HTML_TAGS = frozenset({
    "a", "abbr", "address", "area", "article", "aside", "audio", "b", "base", "bdi", "bdo",
    "blockquote", "body", "br", "button", "canvas", "caption", "cite", "code", "col", "colgroup",
    "data", "datalist", "dd", "del", "details", "dfn", "dialog", "div", "dl", "dt", "em", "embed",
    "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
    "head", "header", "hgroup", "hr", "html", "i", "iframe", "img", "input", "ins", "kbd", "label",
    "legend", "li", "link", "main", "map", "mark", "math", "menu", "menuitem", "meta", "meter",
    "nav", "noscript", "object", "ol", "optgroup", "option", "output", "p", "param", "picture",
    "pre", "progress", "q", "rb", "rp", "rt", "rtc", "ruby", "s", "samp", "script", "section",
    "select", "slot", "small", "source", "span", "strong", "style", "sub", "summary", "sup", "svg",
    "table", "tbody", "td", "template", "textarea", "tfoot", "th", "thead", "time", "title", "tr",
    "track", "u", "ul", "var", "video", "wbr",
})
# fmt: on


# ---------------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------------


def _has_type(node: Any, node_type: str) -> TypeGuard[SyntaxNode]:
    return isinstance(node, SyntaxNode) and node.type == node_type


def _is_string(node: Any) -> TypeGuard[SyntaxNode]:
    return _has_type(node, "StringLiteral")


def _is_call_expression(node: Any) -> TypeGuard[SyntaxNode]:
    return _has_type(node, "CallExpression")


def _is_block(node: Any) -> TypeGuard[SyntaxNode]:
    return _has_type(node, "BlockStatement")


def is_path_expression(node: Any) -> TypeGuard[SyntaxNode]:
    return _has_type(node, "PathExpression")


def _index_of(items: Any, node: SyntaxNode) -> int:
    """Identity-based index of ``node`` in a node list, -1 when absent."""
    if not isinstance(items, list):
        return -1
    for index, item in enumerate(items):
        if item is node:
            return index
    return -1


def _has_argument(call: Any, node: SyntaxNode, position: int | None = None) -> bool:
    if not isinstance(call, SyntaxNode):
        return False
    index = _index_of(call.get("arguments"), node)
    if index == -1:
        return False
    return position is None or index == position


def _callee_name(call: SyntaxNode) -> str | None:
    """Name of a plain ``fn()`` callee or of the method in ``obj.fn()``."""
    callee = call.get("callee")
    if _has_type(callee, "Identifier"):
        identifier = callee
    elif _has_type(callee, "MemberExpression"):
        identifier = callee.get("property")
    else:
        return None
    if not _has_type(identifier, "Identifier"):
        return None
    name = identifier.get("name")
    return name if isinstance(name, str) else None


def _callee_matches(call: Any, names: str | Collection[str]) -> bool:
    if not _is_call_expression(call):
        return False
    name = _callee_name(call)
    if name is None:
        return False
    if isinstance(names, str):
        return name == names
    return name in names


def _path_original(node: Any) -> str | None:
    if not is_path_expression(node):
        return None
    original = node.get("original")
    return original if isinstance(original, str) else None


def _element_tag(node: Any) -> str | None:
    if not _has_type(node, "ElementNode"):
        return None
    tag = node.get("tag")
    return tag if isinstance(tag, str) and tag else None


def closest_parent(path: NodePath, node_type: str, ignore_parents: Sequence[str] = ()) -> SyntaxNode | None:
    """Nearest node of ``node_type`` on the chain, starting at the node itself.

    Matches whose own parent has a type listed in ``ignore_parents`` are skipped.
    """
    for entry in (path, *path.ancestors()):
        if not _has_type(entry.node, node_type):
            continue
        parent = entry.parent
        if parent is None or parent.type not in ignore_parents:
            return entry.node
    return None


# ---------------------------------------------------------------------------
# Script predicates
# ---------------------------------------------------------------------------


def _is_first_argument_of(path: NodePath, names: str | Collection[str]) -> bool:
    node = path.node
    parent = path.parent
    if not _is_string(node) or not _is_call_expression(parent):
        return False
    if not _has_argument(parent, node, 0):
        return False
    return _callee_matches(parent, names)


def _is_first_string_param_in_member_call(path: NodePath) -> bool:
    node = path.node
    parent = path.parent
    if not _is_string(node) or not _is_call_expression(parent):
        return False
    if not _has_argument(parent, node, 0):
        return False
    return _has_type(parent.get("callee"), "MemberExpression")


def is_model_reference(path: NodePath) -> bool:
    """``belongsTo('user')`` / ``hasMany('user')``: the string names a model."""
    return _is_first_argument_of(path, RELATION_DECLARATION_NAMES)


def is_transform_reference(path: NodePath) -> bool:
    """``attr('date')``: the string names a transform."""
    return _is_first_argument_of(path, ATTRIBUTE_DECLARATION_NAME)


def is_import_path_declaration(path: NodePath) -> bool:
    return _is_string(path.node) and _has_type(path.parent, "ImportDeclaration")


def is_import_specifier(path: NodePath) -> bool:
    return _has_type(path.parent, "ImportSpecifier")


def is_import_default_specifier(path: NodePath) -> bool:
    return _has_type(path.parent, "ImportDefaultSpecifier")


def is_route_lookup(path: NodePath) -> bool:
    if not _is_first_string_param_in_member_call(path):
        return False
    return _callee_matches(path.parent, ROUTE_TRANSITION_NAMES)


def is_store_model_lookup(path: NodePath) -> bool:
    if not _is_first_string_param_in_member_call(path):
        return False
    return _callee_matches(path.parent, STORE_LOOKUP_NAMES)


def is_computed_property_argument(path: NodePath) -> bool:
    """A dependent-key string passed anywhere in a computed macro call."""
    node = path.node
    parent = path.parent
    if not _is_string(node) or not _is_call_expression(parent):
        return False
    if not _has_argument(parent, node):
        return False
    return _callee_matches(parent, COMPUTED_MACRO_NAMES)


def is_template_element(path: NodePath) -> bool:
    """A quasi of an inline ``hbs`...``` template."""
    if not _has_type(path.node, "TemplateElement"):
        return False
    if not _has_type(path.parent, "TemplateLiteral"):
        return False
    grandparent = path.grandparent
    if not _has_type(grandparent, "TaggedTemplateExpression"):
        return False
    tag = grandparent.get("tag")
    return _has_type(tag, "Identifier") and tag.get("name") == TEMPLATE_TAG_NAME


def is_service_injection(path: NodePath) -> bool:
    """The key of ``session: service()`` in an object literal."""
    if not _has_type(path.node, "Identifier"):
        return False
    parent = path.parent
    if not _has_type(parent, "ObjectProperty"):
        return False
    return _callee_matches(parent.get("value"), SERVICE_INJECTION_NAME)


def is_named_service_injection(path: NodePath) -> bool:
    """The string in ``service('session')``."""
    if not _is_string(path.node):
        return False
    return _callee_matches(path.parent, SERVICE_INJECTION_NAME)


def is_localization_helper_translation_name(path: NodePath, kind: Literal["script", "template"]) -> bool:
    """Translation key passed to ``this.intl.t('key')`` or ``{{t "key"}}``."""
    node = path.node
    parent = path.parent
    if parent is None or not _is_string(node):
        return False

    if kind == "script":
        if not _is_call_expression(parent) or not _has_type(parent.get("callee"), "MemberExpression"):
            return False
        return _callee_matches(parent, LOCALIZATION_HELPER_NAME) and _has_argument(parent, node, 0)

    if parent.type not in ("MustacheStatement", "SubExpression"):
        return False
    return _path_original(parent.get("path")) == LOCALIZATION_HELPER_NAME


# ---------------------------------------------------------------------------
# Template predicates
# ---------------------------------------------------------------------------


def _has_excluded_prefix(tag: str) -> bool:
    return tag.startswith(EXCLUDED_TAG_PREFIXES)


def is_angle_component_path(path: NodePath) -> bool:
    """``<FooBar />``: uppercase first letter, not a standard HTML tag."""
    tag = _element_tag(path.node)
    if tag is None or _has_excluded_prefix(tag):
        return False
    first = tag[0]
    return first.isalpha() and first.isupper() and tag not in HTML_TAGS


def is_plain_element_path(path: NodePath) -> bool:
    """``<div>`` and other lowercase tags."""
    tag = _element_tag(path.node)
    if tag is None or _has_excluded_prefix(tag):
        return False
    first = tag[0]
    return first.isalpha() and first.islower()


def is_scoped_angle_tag_name(path: NodePath) -> bool:
    """A tag that may resolve to something in scope, e.g. a yielded block param."""
    tag = _element_tag(path.node)
    if tag is None or _has_excluded_prefix(tag):
        return False
    return tag not in HTML_TAGS


def is_named_block_name(path: NodePath) -> bool:
    """``<:header>`` inside a component invocation."""
    tag = _element_tag(path.node)
    if tag is None or path.parent is None:
        return False
    return tag.startswith(":")


def is_modifier_path(path: NodePath) -> bool:
    node = path.node
    if not is_path_expression(node):
        return False
    if _has_type(node.get("head"), "AtHead"):
        return False
    parent = path.parent
    if not _has_type(parent, "ElementModifierStatement"):
        return False
    return parent.get("path") is node


def is_first_param_of_on_modifier(path: NodePath) -> bool:
    """The event name in ``{{on "click" this.save}}``."""
    node = path.node
    parent = path.parent
    if not _is_string(node) or not _has_type(parent, "ElementModifierStatement"):
        return False
    if _path_original(parent.get("path")) != ON_MODIFIER_NAME:
        return False
    return _index_of(parent.get("params"), node) == 0


def is_mustache_path(path: NodePath) -> bool:
    node = path.node
    if not is_path_expression(node):
        return False
    parent = path.parent
    return _has_type(parent, "MustacheStatement") and parent.get("path") is node


def is_block_path(path: NodePath) -> bool:
    node = path.node
    if not is_path_expression(node):
        return False
    parent = path.parent
    return _is_block(parent) and parent.get("path") is node


def is_sub_expression_path(path: NodePath) -> bool:
    node = path.node
    if not is_path_expression(node):
        return False
    parent = path.parent
    return _has_type(parent, "SubExpression") and parent.get("path") is node


def is_hash_pair(path: NodePath) -> bool:
    return _has_type(path.node, "HashPair")


def is_hash_pair_value(path: NodePath) -> bool:
    parent_path = path.parent_path
    if parent_path is None or not is_hash_pair(parent_path):
        return False
    return parent_path.node.get("value") is path.node


def is_special_helper_string_positional_param(helper_name: str, path: NodePath) -> bool:
    """The name string in ``(component "foo-bar")``, ``(helper ...)`` or ``(modifier ...)``."""
    if helper_name not in SPECIAL_HELPER_NAMES:
        return False
    node = path.node
    parent = path.parent
    if not _is_string(node) or not _has_type(parent, "SubExpression"):
        return False
    if _index_of(parent.get("params"), node) != 0:
        return False
    return _path_original(parent.get("path")) == helper_name


def is_inline_link_to_target(path: NodePath) -> bool:
    """Route name in ``{{link-to "About" "about"}}``."""
    node = path.node
    parent = path.parent
    if not _is_string(node) or not _has_type(parent, "MustacheStatement"):
        return False
    if _path_original(parent.get("path")) != LINK_TO_HELPER_NAME:
        return False
    return _index_of(parent.get("params"), node) == 1


def is_block_link_to_target(path: NodePath) -> bool:
    """Route name in ``{{#link-to "about"}}...{{/link-to}}``."""
    node = path.node
    parent = path.parent
    if not _is_string(node) or not _is_block(parent):
        return False
    if _path_original(parent.get("path")) != LINK_TO_HELPER_NAME:
        return False
    return _index_of(parent.get("params"), node) == 0


def is_link_to_target(path: NodePath) -> bool:
    return is_inline_link_to_target(path) or is_block_link_to_target(path)


def is_outlet(path: NodePath) -> bool:
    node = path.node
    if _path_original(node) != OUTLET_NAME:
        return False
    return _has_type(node.get("head"), "VarHead")


def is_local_path_expression(path: NodePath) -> bool:
    """``{{this.foo}}``"""
    return is_path_expression(path.node) and path.node.get("this") is True


def is_argument_path_expression(path: NodePath) -> bool:
    """``{{@foo}}``"""
    return is_path_expression(path.node) and path.node.get("data") is True


def is_scoped_path_expression(path: NodePath) -> bool:
    """``{{foo}}``: neither ``this.`` nor ``@``, so resolved by scope."""
    node = path.node
    return is_path_expression(node) and node.get("this") is False and node.get("data") is False


def is_element_attribute(path: NodePath) -> bool:
    return _has_type(path.node, "AttrNode")


def is_component_argument_name(path: NodePath) -> bool:
    if not is_element_attribute(path):
        return False
    name = path.node.get("name")
    return isinstance(name, str) and name.startswith("@")


def is_link_component_route_target(path: NodePath) -> bool:
    """The text of ``@route="about"`` on ``<LinkTo>``."""
    if not _has_type(path.node, "TextNode"):
        return False
    parent = path.parent
    return _has_type(parent, "AttrNode") and parent.get("name") == LINK_COMPONENT_ROUTE_ATTRIBUTE
