from __future__ import annotations

import unittest

from lazypicker.fuzzy import fuzzy_score, rank_candidates


class FuzzyScoreTests(unittest.TestCase):
    def test_characters_must_appear_in_order(self) -> None:
        self.assertIsNotNone(fuzzy_score("apy", "app.py"))
        self.assertIsNone(fuzzy_score("ypa", "app.py"))

    def test_matching_is_case_insensitive(self) -> None:
        self.assertEqual(fuzzy_score("README", "readme.md"), fuzzy_score("readme", "README.md"))

    def test_empty_query_scores_zero(self) -> None:
        self.assertEqual(fuzzy_score("", "anything"), 0)

    def test_contiguous_match_beats_scattered_one(self) -> None:
        self.assertGreater(fuzzy_score("main", "main.py"), fuzzy_score("main", "my_animation.py"))

    def test_word_boundary_hit_beats_mid_word_hit(self) -> None:
        self.assertGreater(fuzzy_score("cfg", "lib/cfg.py"), fuzzy_score("cfg", "libxcfg.py"))


class RankCandidatesTests(unittest.TestCase):
    def test_empty_query_keeps_source_order(self) -> None:
        self.assertEqual(rank_candidates("", ["b", "a", "c"]), [0, 1, 2])
        self.assertEqual(rank_candidates("", ["b", "a", "c"], limit=2), [0, 1])

    def test_best_match_first_and_non_matches_dropped(self) -> None:
        labels = ["docs/notes.txt", "picker.py", "tests/test_picker.py", "README"]
        ranked = rank_candidates("picker", labels)
        self.assertEqual(ranked[0], 1)
        self.assertEqual(set(ranked), {1, 2})

    def test_ties_keep_source_order(self) -> None:
        self.assertEqual(rank_candidates("a", ["xa", "ya", "za"]), [0, 1, 2])

    def test_limit_returns_best_prefix(self) -> None:
        labels = ["tests/test_picker.py", "picker.py", "picker_app.py"]
        full = rank_candidates("picker", labels)
        self.assertEqual(rank_candidates("picker", labels, limit=2), full[:2])
        self.assertEqual(rank_candidates("picker", labels, limit=0), [])


if __name__ == "__main__":
    unittest.main()
