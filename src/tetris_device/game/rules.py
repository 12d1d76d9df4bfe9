from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        # Four or more lines in one lock all score the top entry
        return self.line_clear_scores[min(lines, len(self.line_clear_scores)) - 1]
