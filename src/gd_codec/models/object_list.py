"""
Object list: the decoded content of a compressed level string.

The decompressed text is a sequence of `;`-terminated segments. The first
segment is the level header, every following one is an object record:

    kS38,1_40_2_125,kA13,0;1,1,2,15,3,15;1,8,2,45,3,15;

Decoding is permissive by default: an object record that fails to decode is
dropped and the rest of the list is kept. A missing header or an undecodable
envelope aborts the whole operation.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..codec.framing import compress, decompress
from ..codec.kv import deserialize_kv, serialize_kv
from ..errors import InvalidObjectError, LevelError, MissingObjectHeaderError
from .level_object import OBJECT_SEPARATOR, LevelObject

logger = logging.getLogger(__name__)

SEGMENT_TERMINATOR = ";"

ObjectFailure = Tuple[int, LevelError]
"""(record index, error) for an object record that failed to decode."""


def split_segments(text: str) -> List[str]:
    """Split on the `;` terminator; a trailing terminator adds no empty segment."""
    segments = text.split(SEGMENT_TERMINATOR)
    if segments and segments[-1] == "":
        segments.pop()
    return segments


@dataclass
class ObjectList:
    """Level header plus the ordered list of objects."""

    header: Dict[str, str]
    objects: List[LevelObject] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str, strict: bool = False) -> Tuple["ObjectList", List[ObjectFailure]]:
        """Decode already-decompressed level text.

        Args:
            text: Decompressed `;`-terminated segments
            strict: Raise on the first failing object record instead of
                dropping it

        Returns:
            The object list and the failures of dropped records

        Raises:
            MissingObjectHeaderError: If the header segment is absent or empty
            InvalidObjectError: In strict mode, for the first failing record
        """
        segments = split_segments(text)
        header = deserialize_kv(segments[0], OBJECT_SEPARATOR) if segments else {}
        if not header:
            raise MissingObjectHeaderError()

        objects: List[LevelObject] = []
        failures: List[ObjectFailure] = []
        for index, segment in enumerate(segments[1:]):
            try:
                objects.append(LevelObject.from_map(deserialize_kv(segment, OBJECT_SEPARATOR)))
            except LevelError as e:
                if strict:
                    raise InvalidObjectError("could not decode object", cause=e, index=index) from e
                logger.debug(f"Dropping object #{index}: {e}")
                failures.append((index, e))

        logger.debug(
            f"Decoded object list: {len(header)} header keys, {len(objects)} objects, "
            f"{len(failures)} dropped"
        )
        return cls(header=header, objects=objects), failures

    @classmethod
    def decode(cls, blob: str, strict: bool = False) -> "ObjectList":
        """Decode a compressed level string.

        Raises:
            FramingError: If the base64/gzip envelope is invalid
            MissingObjectHeaderError: If the header segment is absent or empty
            InvalidObjectError: In strict mode, for the first failing record
        """
        object_list, _ = cls.from_text(decompress(blob), strict=strict)
        return object_list

    @classmethod
    def decode_report(cls, blob: str) -> Tuple["ObjectList", List[ObjectFailure]]:
        """Permissive decode that also returns the dropped records' errors."""
        return cls.from_text(decompress(blob))

    def to_text(self) -> str:
        """Serialize header and objects, each followed by `;`."""
        parts = [serialize_kv(self.header, OBJECT_SEPARATOR) + SEGMENT_TERMINATOR]
        parts.extend(obj.to_string() + SEGMENT_TERMINATOR for obj in self.objects)
        return "".join(parts)

    def encode(self) -> str:
        """Serialize and compress into a level string."""
        return compress(self.to_text())
