import random
import unittest

from psmp import zkp
from psmp.group import SMP_GROUP
from psmp.sm import SMState
from psmp.utils import bytes_to_long

from smptest import TEST_GROUP


def flip(n):
    return n ^ (1 << random.randrange(max(n.bit_length(), 1)))


class KnownLogTest(unittest.TestCase):
    def setUp(self):
        self.group = SMP_GROUP
        self.g = self.group.generator
        self.x = self.group.random_exponent()
        self.y = self.group.pow(self.g, self.x)

    def testAccept(self):
        c, d = zkp.proof_known_log(self.group, self.g, self.x, 1)
        self.assertTrue(zkp.check_known_log(self.group, c, d, self.g, self.y, 1))
        self.assertTrue(0 <= d < self.group.order)

    def testMutation(self):
        c, d = zkp.proof_known_log(self.group, self.g, self.x, 1)
        for i in range(20):
            self.assertFalse(zkp.check_known_log(self.group, flip(c), d,
                    self.g, self.y, 1))
            self.assertFalse(zkp.check_known_log(self.group, c, flip(d),
                    self.g, self.y, 1))

    def testWrongPublicValue(self):
        c, d = zkp.proof_known_log(self.group, self.g, self.x, 1)
        y = self.group.mul(self.y, self.g)
        self.assertFalse(zkp.check_known_log(self.group, c, d, self.g, y, 1))

    def testVersionBinding(self):
        c, d = zkp.proof_known_log(self.group, self.g, self.x, 1)
        self.assertFalse(zkp.check_known_log(self.group, c, d, self.g, self.y, 3))

    def testOtherGroup(self):
        group = TEST_GROUP
        x = group.random_exponent()
        y = group.pow(group.generator, x)
        c, d = zkp.proof_known_log(group, group.generator, x, 2)
        self.assertTrue(zkp.check_known_log(group, c, d, group.generator, y, 2))


class HashTest(unittest.TestCase):
    def testHash(self):
        h = zkp.smp_hash(1, 2)
        self.assertTrue(0 <= h < 2**256)
        self.assertNotEqual(h, zkp.smp_hash(2, 2))
        self.assertNotEqual(h, zkp.smp_hash(1, 2, 3))
        self.assertEqual(zkp.smp_hash(5, 7, 11), zkp.smp_hash(5, 7, 11))


class EqualCoordsTest(unittest.TestCase):
    def setUp(self):
        self.state = SMState(SMP_GROUP)
        group = self.state.group
        self.state.g2 = group.pow(group.generator, group.random_exponent())
        self.state.g3 = group.pow(group.generator, group.random_exponent())
        self.state.secret = bytes_to_long(b'sesame')

        self.r = group.random_exponent()
        self.p = group.pow(self.state.g3, self.r)
        self.q = group.mul(group.pow(self.state.g1, self.r),
                group.pow(self.state.g2, self.state.secret))

    def testAccept(self):
        c, d1, d2 = zkp.proof_equal_coords(self.state, self.r, 5)
        self.assertTrue(zkp.check_equal_coords(self.state, c, d1, d2,
                self.p, self.q, 5))

    def testVersionBinding(self):
        c, d1, d2 = zkp.proof_equal_coords(self.state, self.r, 5)
        self.assertFalse(zkp.check_equal_coords(self.state, c, d1, d2,
                self.p, self.q, 6))

    def testMutation(self):
        c, d1, d2 = zkp.proof_equal_coords(self.state, self.r, 5)
        for i in range(10):
            self.assertFalse(zkp.check_equal_coords(self.state, flip(c), d1, d2,
                    self.p, self.q, 5))
            self.assertFalse(zkp.check_equal_coords(self.state, c, flip(d1), d2,
                    self.p, self.q, 5))
            self.assertFalse(zkp.check_equal_coords(self.state, c, d1, flip(d2),
                    self.p, self.q, 5))

    def testDifferentR(self):
        group = self.state.group
        c, d1, d2 = zkp.proof_equal_coords(self.state, self.r, 5)
        p = group.pow(self.state.g3, self.r + 1)
        self.assertFalse(zkp.check_equal_coords(self.state, c, d1, d2,
                p, self.q, 5))


class EqualLogsTest(unittest.TestCase):
    def setUp(self):
        group = SMP_GROUP
        self.prover = SMState(group)
        self.prover.x3 = group.random_exponent()
        self.prover.qab = group.pow(group.generator, group.random_exponent())

        self.verifier = SMState(group)
        self.verifier.g3o = group.pow(group.generator, self.prover.x3)
        self.verifier.qab = self.prover.qab

        self.r = group.pow(self.prover.qab, self.prover.x3)

    def testAccept(self):
        c, d = zkp.proof_equal_logs(self.prover, 7)
        self.assertTrue(zkp.check_equal_logs(self.verifier, c, d, self.r, 7))

    def testVersionBinding(self):
        c, d = zkp.proof_equal_logs(self.prover, 7)
        self.assertFalse(zkp.check_equal_logs(self.verifier, c, d, self.r, 8))

    def testWrongExponent(self):
        group = self.prover.group
        c, d = zkp.proof_equal_logs(self.prover, 7)
        r = group.pow(self.prover.qab, self.prover.x3 + 1)
        self.assertFalse(zkp.check_equal_logs(self.verifier, c, d, r, 7))

    def testMutation(self):
        c, d = zkp.proof_equal_logs(self.prover, 7)
        for i in range(10):
            self.assertFalse(zkp.check_equal_logs(self.verifier, flip(c), d,
                    self.r, 7))
            self.assertFalse(zkp.check_equal_logs(self.verifier, c, flip(d),
                    self.r, 7))


if __name__ == '__main__':
    unittest.main()
