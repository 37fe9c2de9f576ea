"""
Canonical form of PayOS payout payloads.

A payload is rebuilt as a tree of tagged nodes with every mapping key-sorted,
then flattened into the ``key=value&key=value`` string that PayOS signs.
Numbers and strings are written out here the way the gateway renders them,
so the result never depends on ``json.dumps`` defaults.
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Set, Tuple, Union
from urllib.parse import quote

from ..constants import URI_COMPONENT_SAFE
from ..exceptions import SerializationError


class _Unset:
    """Marker for a value that is absent, as opposed to null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'UNSET'

    def __bool__(self):
        return False


UNSET = _Unset()


@dataclass(frozen=True)
class ScalarNode:
    """A string, number or boolean leaf."""
    value: Union[str, int, float, bool, Decimal]


@dataclass(frozen=True)
class NullNode:
    """A null leaf. ``absent`` marks a value that was never set."""
    absent: bool = False


@dataclass(frozen=True)
class SequenceNode:
    items: Tuple['Node', ...]


@dataclass(frozen=True)
class MappingNode:
    """Key-sorted mapping; ``entries`` is a tuple of (key, node) pairs."""
    entries: Tuple[Tuple[str, 'Node'], ...]

    def keys(self):
        return [key for key, _ in self.entries]


Node = Union[ScalarNode, NullNode, SequenceNode, MappingNode]

_SCALAR_TYPES = (str, bool, int, float, Decimal)

_JSON_ESCAPES = {
    '"': '\\"',
    '\\': '\\\\',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}
_JSON_ESCAPE_RE = re.compile(r'["\\\x00-\x1f\ud800-\udfff]')

# Largest magnitude written without an exponent
_MAX_PLAIN_DIGITS = 21


def canonicalize(value: Any, sort_arrays: bool = False) -> Node:
    """
    Rebuild a payload as a canonical node tree.

    Mapping keys are sorted by code point at every depth. Sequence order is
    kept unless ``sort_arrays`` is set, in which case each element is ordered
    by its own key: text for scalars and null, compact JSON for composites,
    with compact JSON breaking ties.

    Args:
        value: Payload made of dicts, lists/tuples, scalars and None/UNSET
        sort_arrays: Whether to reorder sequence elements

    Returns:
        Canonical node tree sharing nothing with the input containers

    Raises:
        SerializationError: On cyclic references or unsupported value types
    """
    return _canonicalize(value, sort_arrays, set())


def _canonicalize(value: Any, sort_arrays: bool, ancestors: Set[int]) -> Node:
    if value is None:
        return NullNode()
    if value is UNSET:
        return NullNode(absent=True)

    if isinstance(value, _SCALAR_TYPES):
        if isinstance(value, float) and not math.isfinite(value):
            raise SerializationError(f"Non-finite number in payload: {value!r}")
        if isinstance(value, Decimal) and not value.is_finite():
            raise SerializationError(f"Non-finite number in payload: {value!r}")
        return ScalarNode(value)

    if isinstance(value, (Mapping, list, tuple)):
        marker = id(value)
        if marker in ancestors:
            raise SerializationError("Cyclic reference detected in payload")

        ancestors.add(marker)
        try:
            if isinstance(value, Mapping):
                return _canonicalize_mapping(value, sort_arrays, ancestors)
            return _canonicalize_sequence(value, sort_arrays, ancestors)
        finally:
            ancestors.discard(marker)

    raise SerializationError(
        f"Unsupported value type in payload: {type(value).__name__}"
    )


def _canonicalize_mapping(value: Mapping, sort_arrays: bool, ancestors: Set[int]) -> MappingNode:
    for key in value:
        if not isinstance(key, str):
            raise SerializationError(
                f"Payload keys must be strings. Got: {type(key).__name__}"
            )

    return MappingNode(tuple(
        (key, _canonicalize(value[key], sort_arrays, ancestors))
        for key in sorted(value)
    ))


def _canonicalize_sequence(value, sort_arrays: bool, ancestors: Set[int]) -> SequenceNode:
    items = [_canonicalize(item, sort_arrays, ancestors) for item in value]
    if sort_arrays:
        items.sort(key=_sort_key)
    return SequenceNode(tuple(items))


def _is_composite(node: Node) -> bool:
    return isinstance(node, (SequenceNode, MappingNode))


def _sort_key(node: Node) -> Tuple[str, str]:
    # Composites order by compact JSON, leaves by text; JSON breaks ties like 1 vs "1"
    text = to_json(node) if _is_composite(node) else _leaf_text(node)
    return text, to_json(node)


def _leaf_text(node: Node) -> str:
    if isinstance(node, NullNode):
        return 'null'
    return format_scalar(node.value)


def format_number(value: Union[int, float, Decimal]) -> str:
    """
    Render a number the way JavaScript's ``String(number)`` does.

    Integral floats lose their fraction (``100.0`` -> ``100``), very large
    and very small magnitudes switch to ``1e+21`` / ``1e-7`` notation, and
    negative zero renders as ``0``.
    """
    if isinstance(value, int):
        if abs(value) < 10 ** _MAX_PLAIN_DIGITS:
            return str(value)
        return _format_decimal(Decimal(value))

    if value == 0:
        return '0'
    if isinstance(value, float):
        return _format_decimal(Decimal(repr(value)))
    return _format_decimal(value)


def _format_decimal(value: Decimal) -> str:
    sign, digit_tuple, exponent = value.as_tuple()
    digits = ''.join(str(d) for d in digit_tuple)
    stripped = digits.rstrip('0')
    exponent += len(digits) - len(stripped)
    digits = stripped

    k = len(digits)
    n = exponent + k
    if k <= n <= _MAX_PLAIN_DIGITS:
        text = digits + '0' * (n - k)
    elif 0 < n <= _MAX_PLAIN_DIGITS:
        text = digits[:n] + '.' + digits[n:]
    elif -6 < n <= 0:
        text = '0.' + '0' * (-n) + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"

    return f"-{text}" if sign else text


def format_scalar(value: Any) -> str:
    """Plain text of a scalar: raw strings, ``true``/``false``, number text."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, Decimal)):
        return format_number(value)
    raise SerializationError(f"Not a scalar value: {type(value).__name__}")


def _quote_json(text: str) -> str:
    def escape(match):
        char = match.group(0)
        return _JSON_ESCAPES.get(char) or '\\u{0:04x}'.format(ord(char))

    return '"' + _JSON_ESCAPE_RE.sub(escape, text) + '"'


def to_json(node: Node) -> str:
    """
    Compact JSON text of a canonical node.

    Absent values are dropped from mappings and become ``null`` inside
    sequences.
    """
    if isinstance(node, ScalarNode):
        if isinstance(node.value, str):
            return _quote_json(node.value)
        return format_scalar(node.value)

    if isinstance(node, NullNode):
        return 'null'

    if isinstance(node, SequenceNode):
        return '[' + ','.join(to_json(item) for item in node.items) + ']'

    if isinstance(node, MappingNode):
        members = [
            f"{_quote_json(key)}:{to_json(child)}"
            for key, child in node.entries
            if not (isinstance(child, NullNode) and child.absent)
        ]
        return '{' + ','.join(members) + '}'

    raise SerializationError(f"Unknown node type: {type(node).__name__}")


def stringify(node: Node) -> str:
    """
    Signable text of a single field value.

    Sequences and mappings become compact JSON, null and absent values become
    an empty string, and scalars use their plain text.
    """
    if isinstance(node, (SequenceNode, MappingNode)):
        return to_json(node)
    if isinstance(node, NullNode):
        return ''
    if isinstance(node, ScalarNode):
        return format_scalar(node.value)

    raise SerializationError(f"Unknown node type: {type(node).__name__}")


def encode_uri_component(text: str) -> str:
    """Percent-encode text like JavaScript's ``encodeURIComponent``."""
    try:
        return quote(text, safe=URI_COMPONENT_SAFE, encoding='utf-8', errors='strict')
    except UnicodeEncodeError as e:
        raise SerializationError(f"Value cannot be encoded as UTF-8: {text!r}") from e


def build_query_string(node: MappingNode) -> str:
    """
    Join a canonical mapping into ``key=value&key=value`` form.

    Keys and stringified values are percent-encoded. An empty mapping gives
    an empty string.
    """
    if not isinstance(node, MappingNode):
        raise SerializationError(
            f"Query string needs a mapping at the top level. Got: {type(node).__name__}"
        )

    return '&'.join(
        f"{encode_uri_component(key)}={encode_uri_component(stringify(child))}"
        for key, child in node.entries
    )
