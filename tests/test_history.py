"""Unit tests for the bounded history ring."""

import unittest

from contracts import Detection
from track.history import HistoryRing


def _det(det_id: int, predecessor=None) -> Detection:
    return Detection(id=det_id, predecessor=predecessor)


class TestHistoryRing(unittest.TestCase):
    """Test HistoryRing ordering and bounds."""

    def test_empty(self):
        ring = HistoryRing(4)
        self.assertEqual(len(ring), 0)
        self.assertIsNone(ring.newest())
        self.assertEqual(list(ring.newest_first()), [])

    def test_order_before_wrap(self):
        ring = HistoryRing(4)
        for i in range(3):
            ring.append(_det(i))
        self.assertEqual([d.id for d in ring.newest_first()], [2, 1, 0])
        self.assertEqual(ring.newest().id, 2)

    def test_wraparound_keeps_newest(self):
        ring = HistoryRing(3)
        prev = None
        for i in range(7):
            d = _det(i, predecessor=prev)
            ring.append(d)
            prev = d
        self.assertEqual(len(ring), 3)
        self.assertEqual(ring.capacity, 3)
        self.assertEqual([d.id for d in ring.newest_first()], [6, 5, 4])

    def test_overflow_severs_oldest_link(self):
        ring = HistoryRing(2)
        d0 = _det(0)
        d1 = _det(1, predecessor=d0)
        d2 = _det(2, predecessor=d1)
        for d in (d0, d1, d2):
            ring.append(d)
        self.assertIs(d2.predecessor, d1)
        self.assertIsNone(d1.predecessor)

    def test_clear(self):
        ring = HistoryRing(2)
        ring.append(_det(0))
        ring.clear()
        self.assertEqual(len(ring), 0)
        self.assertIsNone(ring.newest())

    def test_rejects_zero_capacity(self):
        with self.assertRaises(ValueError):
            HistoryRing(0)

    def test_rejects_single_slot(self):
        """One slot would cut the newest detection's own back-link."""
        with self.assertRaises(ValueError):
            HistoryRing(1)

    def test_newest_keeps_link_at_minimum_capacity(self):
        ring = HistoryRing(2)
        prev = None
        for i in range(5):
            d = _det(i, predecessor=prev)
            ring.append(d)
            prev = d
            if i > 0:
                self.assertEqual(d.predecessor.id, i - 1)


if __name__ == "__main__":
    unittest.main()
