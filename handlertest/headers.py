from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


def _sanitize_header(name: str, value: str) -> tuple[str, str]:
    """
    Sanitize header name and value to prevent HTTP header injection (CRLF injection).
    Strips CR, LF, and null bytes from both name and value.
    """
    clean_name = name.replace("\r", "").replace("\n", "").replace("\x00", "")
    clean_value = value.replace("\r", "").replace("\n", "").replace("\x00", "")
    return clean_name, clean_value


class Headers:
    """
    Ordered, case-insensitive header collection.

    Insertion order and the original spelling of each name are kept so the
    handler sees headers the way the test wrote them. ``set`` replaces every
    value stored under a name, ``add`` appends another one.
    """

    def __init__(
        self,
        headers: Headers | Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> None:
        self._items: list[tuple[str, str]] = []
        if headers is None:
            return
        if isinstance(headers, Mapping):
            pairs: Iterable[tuple[str, str]] = headers.items()
        else:
            pairs = headers
        for name, value in pairs:
            self.add(name, value)

    def add(self, name: str, value: str) -> None:
        self._items.append(_sanitize_header(name, str(value)))

    def set(self, name: str, value: str) -> None:
        name, value = _sanitize_header(name, str(value))
        key = name.lower()
        for index, (existing, _) in enumerate(self._items):
            if existing.lower() == key:
                # Keep the slot of the first occurrence, drop the rest.
                self._items[index] = (name, value)
                self._items = [
                    item
                    for pos, item in enumerate(self._items)
                    if pos <= index or item[0].lower() != key
                ]
                return
        self._items.append((name, value))

    def setdefault(self, name: str, value: str) -> str:
        current = self.get(name)
        if current is None:
            self.set(name, value)
            return value
        return current

    def get(self, name: str, default: str | None = None) -> str | None:
        key = name.lower()
        found = default
        for existing, value in self._items:
            if existing.lower() == key:
                found = value
        return found

    def get_all(self, name: str) -> list[str]:
        key = name.lower()
        return [value for existing, value in self._items if existing.lower() == key]

    def has(self, name: str) -> bool:
        key = name.lower()
        return any(existing.lower() == key for existing, _ in self._items)

    def remove(self, name: str) -> None:
        key = name.lower()
        self._items = [item for item in self._items if item[0].lower() != key]

    def update(
        self, other: Headers | Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> None:
        """
        Merge ``other`` into this collection; its values win on conflict.

        Every name present in ``other`` is replaced by all of its values from
        ``other``, so repeated headers survive the merge.
        """
        incoming = Headers(other)
        for name in {name.lower() for name, _ in incoming}:
            self.remove(name)
        for name, value in incoming:
            self.add(name, value)

    def copy(self) -> Headers:
        return Headers(self._items)

    def items(self) -> list[tuple[str, str]]:
        return list(self._items)

    def to_dict(self) -> dict[str, str]:
        """
        Plain dict keyed by the first spelling of each name. Last value wins,
        matching what most WSGI/ASGI style parsers expect.
        """
        out: dict[str, str] = {}
        spelling: dict[str, str] = {}
        for name, value in self._items:
            key = spelling.setdefault(name.lower(), name)
            out[key] = value
        return out

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __getitem__(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __setitem__(self, name: str, value: str) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        if not self.has(name):
            raise KeyError(name)
        self.remove(name)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return [(n.lower(), v) for n, v in self._items] == [
            (n.lower(), v) for n, v in other._items
        ]

    def __repr__(self) -> str:
        return f"<Headers {self._items}>"
