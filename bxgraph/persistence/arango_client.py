"""ArangoDB connection for bxgraph.

create_arango_client() returns a GraphDatabase: the handful of python-arango
calls the persistence layer makes (AQL, collection lookup, schema checks,
server version), with entity enums in bind vars converted to their stored
strings on the way out.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from arango import ArangoClient
from arango.collection import StandardCollection
from arango.database import StandardDatabase

_SCALARS = (str, int, float, bool, type(None))


def to_bind_value(obj: Any, path: str = "$") -> Any:
    """Convert a bind var to plain JSON, unwrapping BinaryFormat, FunctionType and CallType.

    Raises:
        TypeError: obj holds something other than scalars, enums with scalar
            values, dicts, lists or tuples (path names the offending entry)
    """
    if isinstance(obj, Enum):
        if isinstance(obj.value, _SCALARS):
            return obj.value
        raise TypeError(f"Enum at {path} has non-scalar value: {obj!r}")
    if isinstance(obj, _SCALARS):
        return obj
    if isinstance(obj, dict):
        return {str(key): to_bind_value(value, f"{path}.{key}") for key, value in obj.items()}
    if isinstance(obj, list | tuple):
        return [to_bind_value(value, f"{path}[{index}]") for index, value in enumerate(obj)]
    raise TypeError(f"Bind var at {path} is not JSON-serializable: {type(obj).__name__}")


class _GraphAQL:
    def __init__(self, aql: Any) -> None:
        self._aql = aql

    def execute(self, query: str, bind_vars: dict[str, Any] | None = None, **kwargs: Any) -> Any:
        return self._aql.execute(query, bind_vars=to_bind_value(bind_vars or {}), **kwargs)


class GraphDatabase:
    """The python-arango database surface bxgraph uses."""

    def __init__(self, db: StandardDatabase) -> None:
        self._db = db
        self.aql = _GraphAQL(db.aql)

    @property
    def name(self) -> str:
        return self._db.name

    def version(self) -> str:
        return str(self._db.version())

    def collection(self, name: str) -> StandardCollection:
        return self._db.collection(name)

    def has_collection(self, name: str) -> bool:
        return bool(self._db.has_collection(name))

    def create_collection(self, name: str, edge: bool = False) -> StandardCollection:
        return self._db.create_collection(name, edge=edge)


DatabaseLike = StandardDatabase | GraphDatabase


def create_arango_client(
    hosts: str = "http://localhost:8529",
    username: str = "root",
    password: str = "",
    db_name: str = "bxgraph",
) -> GraphDatabase:
    """Open the bxgraph database. No request is made until the first query.

    Raises:
        ServerConnectionError: on first use, if the server is unreachable
    """
    client = ArangoClient(hosts=hosts)
    return GraphDatabase(client.db(db_name, username=username, password=password))
