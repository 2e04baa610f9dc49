from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class MediaTags:
    """
    The metadata fields the converter rewrites.
    """
    title: Optional[str] = None
    performers: List[str] = field(default_factory=list)
    album_artists: List[str] = field(default_factory=list)
    album: Optional[str] = None

    def to_dict(self):
        return {
            "title": self.title,
            "performers": list(self.performers),
            "album_artists": list(self.album_artists),
            "album": self.album,
        }


class TagStore:
    """
    Reads and writes media tags for a file. Implementations wrap whatever
    tagging library is available; the converter only uses this interface.
    """

    def load(self, path: str) -> MediaTags:
        raise NotImplementedError

    def save(self, path: str, tags: MediaTags) -> None:
        raise NotImplementedError


class InMemoryTagStore(TagStore):
    """Dictionary-backed store, keyed by path. Used for dry runs and tests."""

    def __init__(self, tags: Optional[Dict[str, MediaTags]] = None):
        self.tags: Dict[str, MediaTags] = dict(tags or {})

    def load(self, path: str) -> MediaTags:
        return self.tags.get(path, MediaTags())

    def save(self, path: str, tags: MediaTags) -> None:
        self.tags[path] = tags
