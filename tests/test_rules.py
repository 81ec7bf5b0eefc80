import unittest

from spider_core.card import Card, Suit
from spider_core.pile import Pile
from spider_core.rules import can_move_stack, can_place_on, flip_card, should_flip_top_card


def card(id, rank, suit=Suit.SPADE, face_up=True):
    return Card(id=id, rank=rank, suit=suit, face_up=face_up)


class RulesTestCase(unittest.TestCase):
    def test_anything_starts_an_empty_column(self):
        self.assertTrue(can_place_on(card(1, 13), None))
        self.assertTrue(can_place_on(card(2, 4), None))

    def test_placement_needs_one_rank_higher_of_any_suit(self):
        self.assertTrue(can_place_on(card(1, 5, Suit.HEART), card(2, 6, Suit.SPADE)))
        self.assertFalse(can_place_on(card(1, 5), card(2, 7)))
        self.assertFalse(can_place_on(card(1, 6), card(2, 5)))

    def test_placement_on_face_down_card_is_refused(self):
        self.assertFalse(can_place_on(card(1, 5), card(2, 6, face_up=False)))

    def test_can_move_stack_checks_run_and_landing_card(self):
        src = Pile([card(1, 9, face_up=False), card(2, 8), card(3, 7)])
        dest = Pile([card(4, 9, Suit.CLUB)])
        self.assertTrue(can_move_stack(src, 2, dest))
        self.assertFalse(can_move_stack(src, 1, dest))
        self.assertFalse(can_move_stack(src, 3, dest))
        self.assertFalse(can_move_stack(src, 0, dest))
        self.assertFalse(can_move_stack(src, 4, dest))
        self.assertTrue(can_move_stack(src, 1, Pile()))

    def test_face_down_destination_refuses_matching_rank(self):
        src = Pile([card(1, 8)])
        self.assertFalse(can_move_stack(src, 1, Pile([card(2, 9, face_up=False)])))
        self.assertTrue(can_move_stack(src, 1, Pile([card(3, 9)])))

    def test_should_flip_top_card(self):
        self.assertFalse(should_flip_top_card(Pile()))
        self.assertTrue(should_flip_top_card(Pile([card(1, 3, face_up=False)])))
        self.assertFalse(should_flip_top_card(Pile([card(1, 3)])))

    def test_flip_card_returns_new_card(self):
        hidden = card(7, 10, Suit.DIAMOND, face_up=False)
        shown = flip_card(hidden)
        self.assertTrue(shown.face_up)
        self.assertFalse(hidden.face_up)
        self.assertEqual((7, 10, Suit.DIAMOND), (shown.id, shown.rank, shown.suit))


if __name__ == "__main__":
    unittest.main()
