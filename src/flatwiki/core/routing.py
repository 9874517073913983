"""Request path grammar.

Maps a URL path to the wiki operation it names. Titled operations take the
form ``/{operation}/{title}`` where the title must match ``TITLE_PATTERN``
in full; anything else resolves to ``None``, which callers treat as 404.
"""

import re
from enum import Enum
from typing import NamedTuple

from flatwiki.core.models import TITLE_PATTERN


class Operation(str, Enum):
    """Operations reachable through the path grammar."""

    LIST = "list"
    CREATE = "create"
    STORE = "store"
    VIEW = "view"
    EDIT = "edit"
    SAVE = "save"
    DELETE = "delete"


TITLED_OPERATIONS = (
    Operation.VIEW,
    Operation.EDIT,
    Operation.SAVE,
    Operation.DELETE,
)

_FIXED_PATHS = {
    "/": Operation.LIST,
    "/create": Operation.CREATE,
    "/store": Operation.STORE,
}

_TITLED_PATH_RE = re.compile(
    r"/({ops})/({title})".format(
        ops="|".join(op.value for op in TITLED_OPERATIONS),
        title=TITLE_PATTERN,
    )
)


class Route(NamedTuple):
    """A resolved path: the operation and, for titled operations, the title."""

    operation: Operation
    title: str | None = None


def resolve(path: object) -> Route | None:
    """Resolve a request path to a Route, or None if nothing matches."""
    if not isinstance(path, str):
        return None

    operation = _FIXED_PATHS.get(path)
    if operation is not None:
        return Route(operation)

    m = _TITLED_PATH_RE.fullmatch(path)
    if m is None:
        return None
    return Route(Operation(m.group(1)), m.group(2))
