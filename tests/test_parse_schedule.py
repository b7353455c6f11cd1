import unittest

from mytimetable.model import ScheduleFragment
from mytimetable.parse import (
    TIME_SLOT_LABELS,
    fill2,
    parse_fragment,
    parse_schedule,
    time_slot_label,
)


class TestParseFragment(unittest.TestCase):
    def test_range_with_room(self) -> None:
        f = parse_fragment("Mon1~2(101)")

        self.assertIsNotNone(f)
        assert f is not None

        self.assertEqual(f.day, "Mon")
        self.assertEqual(f.range, (1, 2))
        self.assertEqual(f.room, "101")

    def test_range_is_filled_in(self) -> None:
        f = parse_fragment("Wed3~6(Science Hall 202)")
        assert f is not None
        self.assertEqual(f.range, (3, 4, 5, 6))
        self.assertEqual(f.room, "Science Hall 202")

    def test_single_slot_without_room(self) -> None:
        f = parse_fragment("Fri7")
        assert f is not None
        self.assertEqual(f, ScheduleFragment(day="Fri", range=(7,), room=""))

    def test_non_latin_day_label(self) -> None:
        f = parse_fragment("월1~3(7-B101)")
        assert f is not None
        self.assertEqual(f.day, "월")
        self.assertEqual(f.range, (1, 2, 3))

    def test_reversed_range_returns_none(self) -> None:
        self.assertIsNone(parse_fragment("Mon4~2(101)"))

    def test_missing_slot_returns_none(self) -> None:
        self.assertIsNone(parse_fragment("Mon(101)"))

    def test_slots_outside_grid_return_none(self) -> None:
        self.assertIsNone(parse_fragment("Mon0~1"))
        self.assertIsNone(parse_fragment("Mon24~25"))
        self.assertIsNone(parse_fragment("Mon23~26(101)"))

    def test_grid_edges_are_accepted(self) -> None:
        first = parse_fragment("Mon1")
        last = parse_fragment("Fri23~24")
        assert first is not None and last is not None
        self.assertEqual(first.range, (1,))
        self.assertEqual(last.range, (23, 24))


class TestParseSchedule(unittest.TestCase):
    def test_empty_descriptor(self) -> None:
        self.assertEqual(parse_schedule(""), ())
        self.assertEqual(parse_schedule(None), ())
        self.assertEqual(parse_schedule("   "), ())

    def test_fragments_split_on_p_markup(self) -> None:
        frags = parse_schedule("Mon1~2(101)<p>Wed3~4(202)")
        self.assertEqual([f.day for f in frags], ["Mon", "Wed"])
        self.assertEqual(frags[1].range, (3, 4))
        self.assertEqual(frags[1].room, "202")

    def test_closed_p_markup(self) -> None:
        frags = parse_schedule("<p>Tue5(301)</p><p>Thu5(301)</p>")
        self.assertEqual([(f.day, f.range) for f in frags], [("Tue", (5,)), ("Thu", (5,))])

    def test_unparsable_fragment_is_skipped(self) -> None:
        frags = parse_schedule("Mon1~2(101)<p>TBA")
        self.assertEqual(len(frags), 1)


class TestTimeSlotLabels(unittest.TestCase):
    def test_daytime_slots(self) -> None:
        self.assertEqual(time_slot_label(1), "09:00~09:30")
        self.assertEqual(time_slot_label(18), "17:30~18:00")

    def test_evening_slots(self) -> None:
        self.assertEqual(time_slot_label(19), "18:00~18:50")
        self.assertEqual(time_slot_label(20), "18:55~19:45")
        self.assertEqual(time_slot_label(24), "22:35~23:25")

    def test_out_of_range_raises(self) -> None:
        with self.assertRaises(ValueError):
            time_slot_label(0)
        with self.assertRaises(ValueError):
            time_slot_label(25)

    def test_label_table(self) -> None:
        self.assertEqual(len(TIME_SLOT_LABELS), 24)
        self.assertEqual(fill2(7), "07")


if __name__ == "__main__":
    unittest.main()
