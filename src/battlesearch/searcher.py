from __future__ import annotations

from typing import Optional

from .evaluator import ExtractedFields, MatchReport, evaluate
from .extraction import BATTLE_FIELD_PATHS, DEFAULT_TRAINING_ROUNDS, FieldExtractor
from .models import FileTask, SearchOptions


class BattleSearcher:
    """Per-worker search state: the shared options plus a private extractor."""

    def __init__(self, options: SearchOptions, training_rounds: int = DEFAULT_TRAINING_ROUNDS) -> None:
        self.options = options
        self.extractor = FieldExtractor(BATTLE_FIELD_PATHS, training_rounds)

    def check_log(self, task: FileTask) -> Optional[MatchReport]:
        """Read one battle log and evaluate it against the search.

        Raises:
            OSError: if the file cannot be read.
            MalformedDocumentError: if the log is not a usable battle record.
        """
        data = task.path.read_bytes()
        fields = ExtractedFields.from_values(self.extractor.extract(data))
        return evaluate(
            fields,
            self.options,
            file_name=task.path.name,
            context_label=task.context_label,
        )
