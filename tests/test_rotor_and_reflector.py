import unittest as ut

from rotor_and_reflector import (
    ALPHABET,
    ROTOR_BACKWARD_WIRING,
    ROTOR_FORWARD_WIRING,
    ReflectorId,
    Rotor,
    RotorId,
    encypher,
)


class ReflectorTest(ut.TestCase):
    def test_every_reflector_is_an_involution_without_fixed_points(self):
        for reflector in ReflectorId:
            wiring = reflector.wiring
            self.assertEqual(sorted(wiring), list(range(26)))
            for x in range(26):
                self.assertNotEqual(wiring[x], x, reflector.name)
                self.assertEqual(wiring[wiring[x]], x, reflector.name)

    def test_reflect_b(self):
        self.assertEqual(ALPHABET[ReflectorId.B.reflect(0)], "Y")
        self.assertEqual(ALPHABET[ReflectorId.B.reflect(24)], "A")


class RotorTest(ut.TestCase):
    def test_forward_and_backward_are_inverse_for_all_settings(self):
        for rotor_id in RotorId:
            rotor = Rotor(rotor_id)
            for pos in range(26):
                for ring in range(26):
                    rotor.set_position(pos).set_ring(ring)
                    for c in range(26):
                        self.assertEqual(rotor.backward(rotor.forward(c)), c)

    def test_wiring_tables(self):
        self.assertEqual("".join(ALPHABET[i] for i in ROTOR_FORWARD_WIRING[RotorId.I]),
                         "EKMFLGDQVZNTOWYHXUSPAIBRCJ")
        self.assertEqual(ROTOR_FORWARD_WIRING[RotorId.IDENTITY], tuple(range(26)))
        for fwd, bwd in zip(ROTOR_FORWARD_WIRING, ROTOR_BACKWARD_WIRING):
            self.assertTrue(all(bwd[fwd[i]] == i for i in range(26)))

    def test_encypher_matches_modular_arithmetic(self):
        mapping = ROTOR_FORWARD_WIRING[RotorId.III]
        for pos in (0, 5, 25):
            for ring in (0, 7, 25):
                shift = (pos - ring) % 26
                for c in range(26):
                    expected = (mapping[(c + shift) % 26] - shift) % 26
                    self.assertEqual(encypher(c, pos, ring, mapping), expected)

    def test_notches(self):
        self.assertTrue(Rotor(RotorId.I, 16).is_at_notch())      # Q
        self.assertFalse(Rotor(RotorId.I, 17).is_at_notch())
        self.assertTrue(Rotor(RotorId.V, 25).is_at_notch())      # Z
        for rotor_id in (RotorId.VI, RotorId.VII, RotorId.VIII):
            at_notch = [p for p in range(26) if Rotor(rotor_id, p).is_at_notch()]
            self.assertEqual(at_notch, [12, 25])                 # M and Z

    def test_notch_by_rotor_type(self):
        expected = {
            RotorId.I: [16], RotorId.II: [4], RotorId.III: [21], RotorId.IV: [9],
            RotorId.V: [25], RotorId.VI: [12, 25], RotorId.VII: [12, 25],
            RotorId.VIII: [12, 25], RotorId.IDENTITY: [0],
        }
        for rotor_id, notches in expected.items():
            self.assertEqual([p for p in range(26) if rotor_id.is_at_notch(p)], notches)
            for p in range(26):
                self.assertEqual(Rotor(rotor_id, p).is_at_notch(), rotor_id.is_at_notch(p))

    def test_turnover_wraps(self):
        rotor = Rotor(RotorId.II, 25)
        rotor.turnover()
        self.assertEqual(rotor.position, 0)
        rotor.turnover()
        self.assertEqual(rotor.position, 1)

    def test_out_of_range_settings_are_rejected(self):
        with self.assertRaises(ValueError):
            Rotor(RotorId.I, 26)
        with self.assertRaises(ValueError):
            Rotor(RotorId.I, 0, -1)
        with self.assertRaises(ValueError):
            Rotor(RotorId.I).set_ring(30)

    def test_parse(self):
        self.assertIs(RotorId.parse(" viii "), RotorId.VIII)
        with self.assertRaises(ValueError):
            RotorId.parse("IX")


if __name__ == "__main__":
    ut.main()
