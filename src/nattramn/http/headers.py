"""Immutable, case-insensitive request headers.

Built from the raw ASGI byte pairs once; lookups never re-decode.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Case-insensitive view over request headers.

    ``headers["Accept-Encoding"]`` and ``headers["accept-encoding"]`` are the
    same lookup.  Repeated headers keep every value; indexing returns the
    first, ``get_list`` returns all of them.
    """

    __slots__ = ("_values",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        values: dict[str, list[str]] = {}
        for name, value in raw:
            values.setdefault(name.decode("latin-1").lower(), []).append(value.decode("latin-1"))
        self._values = values

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> "Headers":
        """Build headers from a plain ``str -> str`` mapping."""
        return cls((k.encode("latin-1"), v.encode("latin-1")) for k, v in headers.items())

    def __getitem__(self, key: str) -> str:
        return self._values[key.lower()][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        first = {k: v[0] for k, v in self._values.items()}
        return f"Headers({first!r})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._values.get(key.lower(), ()))
