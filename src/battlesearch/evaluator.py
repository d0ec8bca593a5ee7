"""Decide whether a battle should be reported and build its report line."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from .errors import MalformedDocumentError
from .identity import bytes_to_id, decode_string
from .models import SearchOptions

FORFEIT_END_TYPE = "forfeit"
LOG_SUFFIX = ".log.json"


@dataclass(frozen=True, slots=True)
class ExtractedFields:
    player1_raw: Optional[bytes]
    player2_raw: Optional[bytes]
    winner_raw: Optional[bytes] = None
    end_type_raw: Optional[bytes] = None

    @classmethod
    def from_values(cls, values: Sequence[Optional[bytes]]) -> "ExtractedFields":
        if len(values) != 4:
            raise MalformedDocumentError(f"Found {len(values)} elements in parsed JSON (expected 4)")
        return cls(*values)


@dataclass(frozen=True, slots=True)
class MatchReport:
    context_label: str
    room_name: str
    player1_id: str
    player2_id: str
    outcome_description: str

    def format_line(self) -> str:
        return (
            f"({self.context_label}) <<{self.room_name}>> "
            f"{self.player1_id} vs. {self.player2_id} ({self.outcome_description})"
        )


def room_name_for(file_name: str) -> str:
    return file_name.removesuffix(LOG_SUFFIX)


def is_forfeit(end_type_raw: Optional[bytes]) -> bool:
    if end_type_raw is None:
        return False
    return decode_string(end_type_raw) == FORFEIT_END_TYPE


def describe_outcome(winner_id: Optional[str], forfeit: bool) -> str:
    if winner_id is None:
        return "there was no winner"
    return f"{winner_id} won {'by forfeit' if forfeit else 'normally'}"


def evaluate(
    fields: ExtractedFields,
    options: SearchOptions,
    *,
    file_name: str,
    context_label: str,
) -> Optional[MatchReport]:
    """Return a report for a battle the search selects, else ``None``.

    Raises:
        MalformedDocumentError: if either player field is missing.
    """
    if fields.player1_raw is None:
        raise MalformedDocumentError("No p1 value")
    if fields.player2_raw is None:
        raise MalformedDocumentError("No p2 value")

    p1_id = bytes_to_id(fields.player1_raw)
    p2_id = bytes_to_id(fields.player2_raw)
    if options.searched_user_id not in (p1_id, p2_id):
        return None

    winner_id = bytes_to_id(fields.winner_raw)
    searched_user_won = winner_id is not None and winner_id == options.searched_user_id
    if options.wins_only and not searched_user_won:
        return None

    forfeit = is_forfeit(fields.end_type_raw)
    if options.forfeits_only and not forfeit:
        return None

    return MatchReport(
        context_label=context_label,
        room_name=room_name_for(file_name),
        player1_id=p1_id,
        player2_id=p2_id,
        outcome_description=describe_outcome(winner_id, forfeit),
    )
