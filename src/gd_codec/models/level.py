"""
Level aggregate with lazily decoded objects.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from .object_list import ObjectList

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OfficialSong:
    """One of the built-in soundtrack songs."""
    song_id: int


@dataclass(frozen=True)
class CustomSong:
    """A user-uploaded song referenced by its server id."""
    song_id: int


Song = Union[OfficialSong, CustomSong]


@dataclass
class Level:
    """A level's metadata and object store.

    The object string is kept in its compressed form until `objects` is
    first accessed; after that the decoded list is cached and the string is
    rebuilt from it on `encoded_objects()`.
    """

    name: str
    encoded: str = field(repr=False)
    description: str = ""
    song: Song = field(default_factory=lambda: OfficialSong(0))
    version: int = 1
    length: int = 0
    is_two_player: bool = False
    object_count: int = 0
    has_low_detail: bool = False
    strict_objects: bool = False
    _decoded: Optional[ObjectList] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def is_decoded(self) -> bool:
        return self._decoded is not None

    @property
    def objects(self) -> ObjectList:
        """Decoded object list, decoded on first access."""
        if self._decoded is None:
            self.logger.debug(f"Decoding objects of level '{self.name}'")
            self._decoded = ObjectList.decode(self.encoded, strict=self.strict_objects)
        return self._decoded

    def set_objects(self, objects: ObjectList) -> None:
        """Replace the object list; it will be encoded on save."""
        self._decoded = objects
        self.object_count = len(objects.objects)

    def encoded_objects(self) -> str:
        """Compressed object string, re-encoded only if it was decoded."""
        if self._decoded is None:
            return self.encoded
        self.encoded = self._decoded.encode()
        return self.encoded
