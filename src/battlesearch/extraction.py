"""Top-level field extraction for battle log documents.

A :class:`FieldExtractor` answers ``extract(doc) -> [bytes | None]`` for a fixed
list of ``$.field`` paths: the raw JSON text of each value, or ``None`` when the
field is missing or ``null``. During its first few documents it learns the key
layout of the logs it sees and afterwards tracks how many documents keep that
layout. The learned shape is bookkeeping only and never changes a result.

Extractors keep mutable state and are not thread-safe; each worker owns one.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, List, Optional

from .errors import MalformedDocumentError

LOGGER = logging.getLogger(__name__)

BATTLE_FIELD_PATHS = (
    "$.p1",  # idx 0
    "$.p2",  # idx 1
    "$.winner",  # idx 2
    "$.endType",  # idx 3
)

DEFAULT_TRAINING_ROUNDS = 2


def parse_field_path(path: str) -> str:
    """Return the top-level key named by a ``$.key`` path."""
    if not path.startswith("$.") or len(path) == 2:
        raise ValueError(f"Unsupported field path {path!r}; expected '$.<key>'")
    key = path[2:]
    if "." in key or "[" in key:
        raise ValueError(f"Only top-level field paths are supported (got {path!r})")
    return key


def _raw_value(value: Any) -> Optional[bytes]:
    if value is None:
        return None
    # Lone surrogates survive here and are replaced when the value is decoded.
    return json.dumps(value, ensure_ascii=False, separators=(",", ":")).encode("utf-8", errors="surrogatepass")


class FieldExtractor:
    def __init__(
        self,
        paths: Sequence[str] = BATTLE_FIELD_PATHS,
        training_rounds: int = DEFAULT_TRAINING_ROUNDS,
    ) -> None:
        if training_rounds < 0:
            raise ValueError("training_rounds must not be negative")
        self.paths = tuple(paths)
        self._keys = [parse_field_path(path) for path in self.paths]
        self.training_rounds = training_rounds
        self.documents = 0
        self.shape_hits = 0
        self._learned_shape: Optional[tuple[str, ...]] = None

    @property
    def trained(self) -> bool:
        return self.documents >= self.training_rounds

    def extract(self, doc: bytes) -> List[Optional[bytes]]:
        try:
            data = json.loads(doc.decode("utf-8-sig", errors="replace"))
        except (ValueError, RecursionError) as exc:
            raise MalformedDocumentError(f"Invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise MalformedDocumentError(
                f"Expected a JSON object at the top level, found {type(data).__name__}"
            )

        self._observe_shape(data)
        try:
            return [_raw_value(data.get(key)) for key in self._keys]
        except (ValueError, UnicodeError, RecursionError) as exc:
            raise MalformedDocumentError(f"Unserializable field value: {exc}") from exc

    def _observe_shape(self, data: dict[str, Any]) -> None:
        shape = tuple(key for key in data if key in self._keys)
        if not self.trained:
            if self._learned_shape is None:
                self._learned_shape = shape
            elif self._learned_shape != shape:
                LOGGER.debug("Battle log field layout varies during training: %s vs %s", self._learned_shape, shape)
        elif shape == self._learned_shape:
            self.shape_hits += 1
        self.documents += 1
