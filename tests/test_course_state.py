import json
import unittest

from pydantic import ValidationError

from course_state import CourseState, LectureMetadata
from course_state.models import Assumption


class NotationRegistryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = CourseState(course_name="Microeconomics")

    def test_conflicting_meanings_are_reported_once_per_symbol(self) -> None:
        self.state.register_notation("Q", "quantity", 1)
        self.state.register_notation("Q", "quality", 4)

        consistent, conflicts = self.state.verify_notation_consistency()

        self.assertFalse(consistent)
        self.assertEqual(conflicts, ['Symbol "Q" has conflicting meanings: quantity, quality'])

    def test_live_view_takes_latest_meaning_and_first_lecture(self) -> None:
        self.state.register_notation("Q", "quantity", 1, context="demand")
        self.state.register_notation("Q", "quality", 4)

        (entry,) = self.state.notation_registry

        self.assertEqual(entry.meaning, "quality")
        self.assertEqual(entry.introduced_in, 1)
        self.assertEqual(entry.context, "demand")
        self.assertEqual([e.meaning for e in self.state.notation_history("Q")], ["quantity", "quality"])

    def test_identical_reregistration_is_a_noop(self) -> None:
        self.state.register_notation("p", "price", 2)
        self.state.register_notation("p", "price", 2)

        self.assertEqual(len(self.state.notation_log), 1)
        self.assertEqual(self.state.verify_notation_consistency(), (True, []))

    def test_same_meaning_across_lectures_is_consistent(self) -> None:
        self.state.register_notation("p", "price", 1)
        self.state.register_notation("p", "price", 3)

        self.assertEqual(len(self.state.notation_log), 2)
        self.assertEqual(self.state.verify_notation_consistency(), (True, []))
        self.assertEqual(self.state.find_notation_conflicts(), [])

    def test_notation_up_to_lecture(self) -> None:
        self.state.register_notation("p", "price", 1)
        self.state.register_notation("w", "wage", 3)

        self.assertEqual([e.symbol for e in self.state.notation_up_to_lecture(2)], ["p"])
        self.assertEqual([e.symbol for e in self.state.notation_up_to_lecture(3)], ["p", "w"])

    def test_symbols_are_stripped(self) -> None:
        entry = self.state.register_notation("  Q ", " quantity ", 1)
        self.assertEqual((entry.symbol, entry.meaning), ("Q", "quantity"))


class AssumptionTests(unittest.TestCase):
    def test_sequential_ids_and_activity_window(self) -> None:
        state = CourseState(course_name="Macro")
        first = state.register_assumption("Perfect competition", introduced_in=1, valid_from=1, valid_to=3)
        second = state.register_assumption("Rational expectations", introduced_in=2, valid_from=2)

        self.assertEqual((first, second), ("assumption_1", "assumption_2"))
        self.assertEqual([a.id for a in state.active_assumptions(3)], ["assumption_1", "assumption_2"])
        self.assertEqual([a.id for a in state.active_assumptions(4)], ["assumption_2"])
        self.assertEqual(state.active_assumptions(0), [])

    def test_inverted_range_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Assumption(id="assumption_1", description="x", introduced_in=1, valid_from=5, valid_to=2)


class LectureTests(unittest.TestCase):
    def test_update_replaces_wholesale(self) -> None:
        state = CourseState(course_name="Micro")
        state.update_lecture(LectureMetadata(number=2, title="Demand", files=["a.tex"]))
        state.update_lecture(LectureMetadata(number=2, title="Demand II"))

        lecture = state.get_lecture(2)
        self.assertEqual(lecture.title, "Demand II")
        self.assertEqual(lecture.files, [])

    def test_prerequisites_follow_lecture_order(self) -> None:
        state = CourseState(course_name="Micro")
        state.update_lecture(LectureMetadata(number=2, title="Supply", objectives=["supply curves"]))
        state.update_lecture(LectureMetadata(number=1, title="Demand", objectives=["demand curves"]))
        state.update_lecture(LectureMetadata(number=4, title="Welfare", objectives=["surplus"]))

        self.assertEqual(state.prerequisites_for(4), ["demand curves", "supply curves"])
        self.assertEqual(state.prerequisites_for(1), [])

    def test_set_fields_are_deduplicated(self) -> None:
        lecture = LectureMetadata(number=1, notation_introduced=["Q", "p", "Q"])
        self.assertEqual(lecture.notation_introduced, ["Q", "p"])

    def test_lecture_number_must_be_positive(self) -> None:
        with self.assertRaises(ValidationError):
            LectureMetadata(number=0)


class DocumentRoundTripTests(unittest.TestCase):
    def test_round_trip_rebuilds_lecture_map(self) -> None:
        state = CourseState(course_name="Mikroökonomik", language="de", syllabus="Weeks 1-12")
        state.add_learning_objective("Explain market equilibrium", level="understand", lecture_number=1)
        state.register_notation("Q", "quantity", 1)
        state.register_assumption("Ceteris paribus", introduced_in=1, valid_from=1)
        state.update_lecture(LectureMetadata(number=3, title="Elasticity", files=["lecture3.tex"]))
        state.update_lecture(LectureMetadata(number=1, title="Markets", notation_introduced=["Q"]))

        restored = CourseState.from_json(state.to_json())

        self.assertEqual(restored, state)
        self.assertEqual(sorted(restored.lectures), [1, 3])
        self.assertEqual(restored.lectures[3].files, ["lecture3.tex"])

    def test_document_uses_camel_case_keys_and_lecture_pairs(self) -> None:
        state = CourseState(course_name="Micro")
        state.register_notation("p", "price", 1)
        state.update_lecture(LectureMetadata(number=1, title="Markets"))

        document = json.loads(state.to_json())

        self.assertEqual(document["courseName"], "Micro")
        self.assertEqual(document["notationRegistry"][0]["introducedIn"], 1)
        self.assertEqual(document["lectures"][0][0], 1)
        self.assertEqual(document["lectures"][0][1]["title"], "Markets")
        self.assertIn("notationIntroduced", document["lectures"][0][1])

    def test_accepts_documents_written_by_hand(self) -> None:
        payload = {
            "courseName": "Macro",
            "language": "en",
            "notationRegistry": [{"symbol": "Y", "meaning": "output", "introducedIn": 1}],
            "lectures": [[1, {"number": 1, "title": "GDP", "objectives": ["measure output"]}]],
        }

        state = CourseState.from_json(json.dumps(payload))

        self.assertEqual(state.lectures[1].objectives, ["measure output"])
        self.assertEqual(state.notation_registry[0].meaning, "output")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
