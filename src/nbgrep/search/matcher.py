"""Line matching against the search pattern."""

from typing import Iterable, Iterator, Optional

from nbgrep.models import CandidateLine, Match, SearchConfig


class Matcher:
    """Select candidate lines using the configured pattern.

    Works like a line-oriented grep: a line is reported at most once no
    matter how many times the pattern occurs in it.
    """

    def __init__(self, config: SearchConfig):
        self.config = config

    def is_hit(self, text: str) -> bool:
        """Return True if the line should be reported under the current mode."""
        found = self.config.pattern.search(text) is not None
        return found != self.config.invert_match

    def match(self, candidate: CandidateLine) -> Optional[Match]:
        """Match one candidate line.

        Args:
            candidate: Line to test

        Returns:
            Optional[Match]: The match, or None if the line is not reported
        """
        if not self.is_hit(candidate.text):
            return None

        # Spans are only useful for highlighting readable text
        if self.config.invert_match or not candidate.origin.is_text:
            return Match.from_candidate(candidate)

        spans = tuple(
            (m.start(), m.end())
            for m in self.config.pattern.finditer(candidate.text)
            if m.end() > m.start()
        )
        return Match.from_candidate(candidate, spans=spans)

    def iter_matches(self, candidates: Iterable[CandidateLine]) -> Iterator[Match]:
        """Yield matches for a stream of candidate lines, preserving order."""
        for candidate in candidates:
            result = self.match(candidate)
            if result is not None:
                yield result
