"""Generation counters that let a newer request invalidate an in-flight one.

Starting an analysis records a fresh generation for the client session; when
the model answers, the result is only handed back if no newer analysis (or an
explicit cancel) happened in the meantime. Generations come from one counter
per tracker so they never repeat, which lets finished sessions be forgotten.
"""
import itertools


class StaleAnalysisError(Exception):
    def __init__(self, session_id: str):
        super().__init__(f"Analysis for session {session_id} was superseded")
        self.session_id = session_id


class AnalysisTracker:
    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._generations: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._generations)

    def begin(self, session_id: str) -> int:
        generation = next(self._counter)
        self._generations[session_id] = generation
        return generation

    def cancel(self, session_id: str) -> None:
        """Invalidate whatever analysis the session has in flight."""
        self._generations.pop(session_id, None)

    def is_current(self, session_id: str, generation: int) -> bool:
        return self._generations.get(session_id) == generation

    def check(self, session_id: str, generation: int) -> None:
        if not self.is_current(session_id, generation):
            raise StaleAnalysisError(session_id)

    def release(self, session_id: str, generation: int) -> None:
        """Forget the session once its current analysis has finished."""
        if self.is_current(session_id, generation):
            del self._generations[session_id]


tracker = AnalysisTracker()
