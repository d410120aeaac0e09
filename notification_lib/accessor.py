"""
Accessor resolution - recover an attribute's name and value from a selector.

Rules are written against selectors rather than hard-coded field names:

    rules.if_null_or_empty(lambda c: c.name)

so renaming the attribute keeps the check and its notification in sync.

## How the name is recovered

The selector is called once against an AccessRecorder, a stand-in for the
target that records every attribute read and hands back a MemberRef
marker instead of a real value. A well-formed selector performs exactly
one read and returns that marker untouched. The recorded name is then
read from the real target with getattr().

Anything else fails fast with InvalidSelectorError:

    lambda c: c.name.strip()     # nested access
    lambda c: c.age + 1          # arithmetic on the member
    lambda c: c.first or c.last  # two reads
    lambda c: "name"             # no read at all

Selectors may also be plain attribute names ("name") or
operator.attrgetter("name").
"""

from typing import Any, Callable, List, Tuple, Union

Selector = Union[str, Callable[[Any], Any]]


class InvalidSelectorError(ValueError):
    """Selector is not a single, direct attribute access."""


class MemberRef:
    """Marker returned by AccessRecorder for a recorded attribute read."""

    __slots__ = ("_name",)

    def __init__(self, name: str):
        object.__setattr__(self, "_name", name)

    def __getattribute__(self, attr: str):
        if attr == "__class__":
            return object.__getattribute__(self, attr)
        name = object.__getattribute__(self, "_name")
        raise InvalidSelectorError(
            f"Selector must access the attribute directly, "
            f"got nested access {name}.{attr}"
        )

    def __setattr__(self, attr: str, value: Any):
        raise InvalidSelectorError("Selectors must not assign attributes")

    def __call__(self, *args, **kwargs):
        name = object.__getattribute__(self, "_name")
        raise InvalidSelectorError(
            f"Selector must access the attribute, not call it: {name}()"
        )

    def __bool__(self):
        name = object.__getattribute__(self, "_name")
        raise InvalidSelectorError(
            f"Selector must return the attribute unchanged, "
            f"got a truth test on {name}"
        )

    def __repr__(self) -> str:
        return f"MemberRef({object.__getattribute__(self, '_name')!r})"


class AccessRecorder:
    """Stand-in target that records attribute reads."""

    __slots__ = ("_accesses",)

    def __init__(self):
        object.__setattr__(self, "_accesses", [])

    def __getattribute__(self, name: str):
        if name == "__class__":
            return object.__getattribute__(self, name)
        object.__getattribute__(self, "_accesses").append(name)
        return MemberRef(name)

    def __setattr__(self, name: str, value: Any):
        raise InvalidSelectorError("Selectors must not assign attributes")

    def get_accesses(self) -> List[str]:
        """Return attribute names read so far, in order."""
        return list(object.__getattribute__(self, "_accesses"))


def member_name(selector: Selector) -> str:
    """
    Resolve the attribute name a selector points to.

    Args:
        selector: Attribute name, or a callable performing one direct
            attribute read on its argument

    Returns:
        The attribute name

    Raises:
        InvalidSelectorError: If the selector is not a single direct
            attribute access
    """
    if isinstance(selector, str):
        if not selector.isidentifier():
            raise InvalidSelectorError(
                f"Selector string must be an attribute name, got {selector!r}"
            )
        return selector

    if not callable(selector):
        raise InvalidSelectorError(
            f"Selector must be an attribute name or a callable, "
            f"got {type(selector).__name__}"
        )

    recorder = AccessRecorder()
    try:
        result = selector(recorder)
    except InvalidSelectorError:
        raise
    except Exception as e:
        raise InvalidSelectorError(
            f"Selector is not a direct attribute access: {type(e).__name__}: {e}"
        ) from e

    accesses = AccessRecorder.get_accesses(recorder)

    if not isinstance(result, MemberRef):
        raise InvalidSelectorError(
            f"Selector must return an attribute of its argument, "
            f"got {type(result).__name__}"
        )
    if len(accesses) != 1:
        raise InvalidSelectorError(
            f"Selector must read exactly one attribute, read {accesses}"
        )

    return accesses[0]


def resolve(target: Any, selector: Selector) -> Tuple[str, Any]:
    """
    Resolve a selector against a target.

    The getter on the real target runs once; its exceptions propagate
    unchanged.

    Returns:
        Tuple of (attribute name, current value)
    """
    name = member_name(selector)
    return name, getattr(target, name)
