# -*-coding:Utf-8 -*
#    Copyright 2012 Kjell Braden <afflux@pentabarf.de>
#
#    This file is part of the python-psmp library.
#
#    python-psmp is free software; you can redistribute it and/or modify
#    it under the terms of the GNU Lesser General Public License as published by
#    the Free Software Foundation; either version 3 of the License, or
#    any later version.
#
#    python-psmp is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU Lesser General Public License for more details.
#
#    You should have received a copy of the GNU Lesser General Public License
#    along with this library.  If not, see <http://www.gnu.org/licenses/>.

import struct

from psmp.errors import SerializationError

# peers may not make us allocate more than this many MPIs per message
MAX_MPIS = 100

# Stocke un nombre sous forme packée
def pack_mpi(n):
    if n < 0:
        raise SerializationError('cannot pack negative MPI')
    return pack_data(long_to_bytes(n))

# Lit un nombre et retourne un tuple (nombre, reste_des_donnees)
def read_mpi(data):
    n, data = read_data(data)
    return bytes_to_long(n), data

# Stocke des données sous la forme (taille_donnees | donnees)
def pack_data(data):
    return struct.pack(b'!I', len(data)) + data

# Lire des données packées sous le format (taille_donnees | donnees)
# Retourne les données
def read_data(data):
    datalen, data = unpack(b'!I', data)
    if datalen > len(data):
        raise SerializationError('truncated data: expected {0} bytes, got {1}'
                .format(datalen, len(data)))
    return data[:datalen], data[datalen:]

def unpack(fmt, buf):
    s = struct.Struct(fmt)
    if len(buf) < s.size:
        raise SerializationError('truncated data: need {0} bytes for {1!r}'
                .format(s.size, fmt))
    return s.unpack(buf[:s.size]) + (buf[s.size:],)

def pack_mpis(values):
    """Serialize a sequence of non-negative integers: a 4 byte big endian
    count followed by one MPI per value."""
    return struct.pack(b'!I', len(values)) \
            + b''.join(pack_mpi(v) for v in values)

def read_mpis(data):
    """Inverse of pack_mpis. Trailing bytes after the last MPI are
    malformed input."""
    count, data = unpack(b'!I', data)
    if count > MAX_MPIS:
        raise SerializationError('too many MPIs ({0} > {1})'
                .format(count, MAX_MPIS))

    values = []
    for i in range(count):
        n, data = read_mpi(data)
        values.append(n)

    if data:
        raise SerializationError('{0} trailing bytes after {1} MPIs'
                .format(len(data), count))
    return values

# Transforme une suite d'octets en un entier
def bytes_to_long(b):
    return int.from_bytes(b, 'big')

# n definit le nombre d'octets sur lequel on souhaite stocker le long
# l correspond à l'entier à encoder
def long_to_bytes(l, n=0):
    return l.to_bytes(max(n, (l.bit_length() + 7) // 8), 'big')
