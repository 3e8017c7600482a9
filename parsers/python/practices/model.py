from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

# Longest topic key a caller may submit; longer input is rejected unread.
MAX_TOPIC_LENGTH = 50


@dataclass(frozen=True)
class Topic:
    key: str
    display_name: str
    description: str
    content_ref: str


@dataclass(frozen=True)
class Catalog:
    name: str
    version: str
    topics: tuple[Topic, ...]
    catalog_version: Optional[str] = None
    _index: Mapping[str, Topic] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        topics = tuple(self.topics)
        index: dict[str, Topic] = {}
        for topic in topics:
            if topic.key in index:
                raise ValueError(f"Duplicate topic key: {topic.key!r}")
            index[topic.key] = topic
        object.__setattr__(self, "topics", topics)
        object.__setattr__(self, "_index", MappingProxyType(index))

    def keys(self) -> tuple[str, ...]:
        return tuple(t.key for t in self.topics)

    def get(self, key: str) -> Optional[Topic]:
        return self._index.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[Topic]:
        return iter(self.topics)

    def __len__(self) -> int:
        return len(self.topics)
