"""Query parameter codec.

Native Python values are lifted once into tagged variants and serialized by a
single function, so every coercion rule lives in one place:

- ``Flag``: ``True`` -> ``"1"``, ``False`` -> ``"0"``
- ``Timestamp``: ``%Y-%m-%dT%H:%M:%S``
- ``ChannelRef``: the channel name
- ``Scalar``: ``str(value)``
- ``Many``: each element serialized by the rules above

Multi-valued parameters are sent as repeated ``key=value`` URL query pairs,
never in the request body and never with indexed keys; the API does not
understand ``key[0]=...`` style arrays.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from redux.models.channel import Channel


TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


@dataclass(frozen=True)
class Scalar:
    """Plain value sent as its string form."""

    value: str


@dataclass(frozen=True)
class Flag:
    """Boolean sent as ``"1"`` or ``"0"``."""

    value: bool


@dataclass(frozen=True)
class Timestamp:
    """Date or datetime sent without timezone suffix."""

    value: date


@dataclass(frozen=True)
class ChannelRef:
    """Channel referenced by name."""

    name: str


@dataclass(frozen=True)
class Many:
    """Ordered list of single values, sent as repeated query pairs."""

    items: tuple["Single", ...]


Single = Scalar | Flag | Timestamp | ChannelRef
ParamValue = Single | Many


@dataclass(frozen=True)
class EncodedParams:
    """Wire-ready parameters.

    Attributes:
        body: Single-valued parameters for the form-encoded POST body.
        query: Repeated ``(key, value)`` pairs for the URL query string.
    """

    body: dict[str, str] = field(default_factory=dict)
    query: list[tuple[str, str]] = field(default_factory=list)


def _to_single(value: Any) -> Single:
    # bool before anything else: bool is an int subclass
    if isinstance(value, bool):
        return Flag(value)
    if isinstance(value, date):
        return Timestamp(value)
    if isinstance(value, Channel):
        return ChannelRef(value.name)
    return Scalar(str(value))


def to_param(value: Any) -> ParamValue | None:
    """Lift a native value into a parameter variant.

    Args:
        value: Native value (str, int, bool, date, datetime, channel,
            or a list/tuple of those).

    Returns:
        The parameter variant, or None when the value is None.
    """
    if value is None:
        return None
    if isinstance(value, ParamValue):
        return value
    if isinstance(value, (list, tuple)):
        return Many(tuple(_to_single(item) for item in value if item is not None))
    return _to_single(value)


def serialize(param: ParamValue) -> str | list[str]:
    """Serialize a parameter variant to its wire form.

    Args:
        param: Parameter variant.

    Returns:
        A string for single values, a list of strings for ``Many``.

    Raises:
        TypeError: If ``param`` is not a known variant.
    """
    if isinstance(param, Many):
        return [_serialize_single(item) for item in param.items]
    return _serialize_single(param)


def _serialize_single(param: Single) -> str:
    if isinstance(param, Flag):
        return "1" if param.value else "0"
    if isinstance(param, Timestamp):
        return param.value.strftime(TIMESTAMP_FORMAT)
    if isinstance(param, ChannelRef):
        return param.name
    if isinstance(param, Scalar):
        return param.value
    msg = f"Unsupported parameter variant: {type(param).__name__}"
    raise TypeError(msg)


def encode_params(
    params: Mapping[str, Any] | Iterable[tuple[str, Any]] | None,
) -> EncodedParams:
    """Split parameters into body fields and URL query pairs.

    None values are dropped. Multi-valued parameters only ever appear in
    ``query``; single values only ever appear in ``body``.

    Args:
        params: Parameter name to native value or variant.

    Returns:
        EncodedParams ready for the transport.
    """
    encoded = EncodedParams()
    if not params:
        return encoded

    items = params.items() if isinstance(params, Mapping) else params
    for key, raw in items:
        param = to_param(raw)
        if param is None:
            continue
        wire = serialize(param)
        if isinstance(wire, list):
            encoded.query.extend((str(key), value) for value in wire)
        else:
            encoded.body[str(key)] = wire

    return encoded
