import random
import unittest as ut

from keyboard_and_plugboard import KEYBOARD, Keyboard, Plugboard
from rotor_and_reflector import ALPHABET


class KeyboardTest(ut.TestCase):
    def test_round_trip(self):
        kb = Keyboard()
        for i, ch in enumerate(ALPHABET):
            self.assertEqual(kb.forward(ch), i)
            self.assertEqual(kb.backward(i), ch)

    def test_rejects_anything_but_uppercase_letters(self):
        for bad in ("a", "1", " ", "Ä"):
            with self.assertRaises(ValueError):
                KEYBOARD.forward(bad)
        with self.assertRaises(ValueError):
            KEYBOARD.backward(26)

    def test_validate_names_position(self):
        self.assertEqual(KEYBOARD.validate("ABC"), "ABC")
        with self.assertRaisesRegex(ValueError, "position 2"):
            KEYBOARD.validate("ABc")


class PlugboardTest(ut.TestCase):
    def test_empty_is_identity(self):
        board = Plugboard()
        self.assertEqual(board.wiring, tuple(range(26)))
        self.assertEqual(Plugboard.decode([]), tuple(range(26)))
        self.assertTrue(all(board.unplugged()))
        self.assertEqual(str(board), "")

    def test_decode_swaps_pairs(self):
        board = Plugboard("AF TV")
        self.assertEqual(board.forward(0), 5)
        self.assertEqual(board.forward(5), 0)
        self.assertEqual(board.backward(19), 21)
        self.assertEqual(board.forward(1), 1)
        for x in range(26):
            self.assertEqual(board.wiring[board.wiring[x]], x)

    def test_pair_forms(self):
        self.assertEqual(Plugboard("AF TV"), Plugboard(["AF", "TV"]))
        self.assertEqual(Plugboard("AF TV"), Plugboard([("A", "F"), ("T", "V")]))

    def test_invalid_pairs(self):
        for pairs in (["Af"], ["A1"], ["AB", "BC"], ["AB", "CA"], ["AA"], ["ABC"]):
            with self.assertRaises(ValueError, msg=pairs):
                Plugboard(pairs)

    def test_generate_connections_round_trip(self):
        pairs = ["QZ", "AF", "TV", "KO", "BL", "RW", "CM"]
        board = Plugboard(pairs)
        connections = board.generate_connections()
        self.assertEqual(len(connections), len(pairs))
        self.assertEqual(Plugboard.decode(connections), Plugboard.decode(pairs))
        # emitted by wiring index, each pair once
        self.assertEqual(connections[0], ("A", "F"))

    def test_random_pair_sets_round_trip(self):
        for seed in range(200):
            rng = random.Random(seed)
            k = rng.randint(0, 13)
            letters = rng.sample(ALPHABET, 2 * k)
            pairs = [letters[i] + letters[i + 1] for i in range(0, 2 * k, 2)]
            wiring = Plugboard.decode(pairs)
            connections = Plugboard(pairs).generate_connections()
            self.assertEqual(len(connections), k)
            self.assertEqual(Plugboard.decode(connections), wiring, msg=pairs)

    def test_full_board_round_trip(self):
        pairs = [ALPHABET[i] + ALPHABET[25 - i] for i in range(13)]
        board = Plugboard(pairs)
        self.assertFalse(any(board.unplugged()))
        self.assertEqual(Plugboard.from_wiring(board.wiring), board)

    def test_from_wiring_rejects_non_involution(self):
        wiring = list(range(26))
        wiring[0], wiring[1], wiring[2] = 1, 2, 0
        with self.assertRaises(ValueError):
            Plugboard.from_wiring(wiring)

    def test_unplugged(self):
        unplugged = Plugboard("AF").unplugged()
        self.assertFalse(unplugged[0])
        self.assertFalse(unplugged[5])
        self.assertEqual(sum(unplugged), 24)

    def test_plug_keeps_discovery_order(self):
        board = Plugboard().plug("R", "W").plug("A", "F")
        self.assertEqual(str(board), "RW AF")
        self.assertEqual(board.pairs, (("R", "W"), ("A", "F")))
        self.assertEqual(len(board), 2)
        with self.assertRaises(ValueError):
            board.plug("A", "B")


if __name__ == "__main__":
    ut.main()
