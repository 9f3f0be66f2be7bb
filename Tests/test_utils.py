import struct
import unittest

from psmp.errors import SerializationError
from psmp.utils import pack_data, read_data, pack_mpi, read_mpi, \
        pack_mpis, read_mpis, long_to_bytes, bytes_to_long


class UtilsTest(unittest.TestCase):
    def testPackData(self):
        self.assertEqual(b'\0\0\0\0', pack_data(b''))
        self.assertEqual(b'\0\0\0\x0afoobarbazx', pack_data(b'foobarbazx'))

    def testUnpackData(self):
        encMsg = b'\0\0\0\1q\0\0\0\x0afoobarbazx'
        (decMsg, encMsg) = read_data(encMsg)
        self.assertEqual(b'q', decMsg)
        (decMsg, encMsg) = read_data(encMsg)
        self.assertEqual(b'foobarbazx', decMsg)
        self.assertEqual(b'', encMsg)

    def testEncodeMpi(self):
        self.assertEqual(b'\0\0\0\2\xff\0', pack_mpi(65280))
        # no leading zeros, so 0 is the empty string
        self.assertEqual(b'\0\0\0\0', pack_mpi(0))
        self.assertEqual(b'\0\0\1\1\1' + 256*b'\0', pack_mpi(0x100**0x100))
        self.assertRaises(SerializationError, pack_mpi, -1)

    def testDecodeMpi(self):
        self.assertEqual((0, b'foo'), read_mpi(b'\0\0\0\0foo'))
        self.assertEqual((0, b''), read_mpi(b'\0\0\0\1\0'))
        self.assertEqual((65280, b''), read_mpi(b'\0\0\0\2\xff\0'))
        self.assertEqual((255, b''), read_mpi(b'\0\0\0\3\0\0\xff'))
        self.assertEqual((0x100**0x100-1, b'\xff'),
                read_mpi(b'\0\0\1\0'+257*b'\xff'))

    def testLongBytes(self):
        self.assertEqual(b'', long_to_bytes(0))
        self.assertEqual(b'\0\0\1\0', long_to_bytes(256, 4))
        self.assertEqual(0x0102, bytes_to_long(b'\0\1\2'))

    def testPackMpis(self):
        self.assertEqual(b'\0\0\0\0', pack_mpis([]))
        self.assertEqual(b'\0\0\0\2' b'\0\0\0\0' b'\0\0\0\1\x07',
                pack_mpis([0, 7]))

    def testMpisRoundTrip(self):
        values = [0, 1, 255, 256, 65280, 2**1536 - 1, 2**64]
        self.assertEqual(values, read_mpis(pack_mpis(values)))
        self.assertEqual([], read_mpis(pack_mpis([])))
        hundred = list(range(100))
        self.assertEqual(hundred, read_mpis(pack_mpis(hundred)))

    def testLeadingZeroBytes(self):
        data = b'\0\0\0\2' b'\0\0\0\2\0\x01' b'\0\0\0\3\0\0\0'
        self.assertEqual([1, 0], read_mpis(data))

    def testTooManyMpis(self):
        data = struct.pack(b'!I', 101) + b'\0\0\0\0' * 101
        self.assertRaises(SerializationError, read_mpis, data)
        # checked before anything is read
        self.assertRaises(SerializationError, read_mpis, b'\xff\xff\xff\xff')

    def testTruncated(self):
        self.assertRaises(SerializationError, read_mpis, b'')
        self.assertRaises(SerializationError, read_mpis, b'\0\0\0')
        self.assertRaises(SerializationError, read_mpis, b'\0\0\0\1')
        self.assertRaises(SerializationError, read_mpis, b'\0\0\0\1\0\0')
        self.assertRaises(SerializationError, read_mpis,
                b'\0\0\0\1\0\0\0\4\1\2\3')
        self.assertRaises(SerializationError, read_mpis,
                pack_mpis([1, 2, 3])[:-1])

    def testTrailingGarbage(self):
        self.assertRaises(SerializationError, read_mpis,
                pack_mpis([1, 2]) + b'\0')


if __name__ == '__main__':
    unittest.main()
