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

"""Fiat-Shamir zero-knowledge proofs used by the SMP steps.

Every proof hashes a one byte version tag in front of its commitments. The
tag is the position of the proof inside the exchange (1..8), so a proof lifted
from one message never verifies in another. Verifiers return booleans.
"""

import struct

from psmp.compatcrypto import SHA256
from psmp.utils import bytes_to_long, pack_mpi

def smp_hash(version, a, b=None):
	data = struct.pack(b'B', version) + pack_mpi(a)
	if b is not None:
		data += pack_mpi(b)
	return bytes_to_long(SHA256(data))

def proof_known_log(group, g, x, version):
	"""Schnorr proof of knowledge of x such that y = g^x."""
	r = group.random_exponent()
	c = smp_hash(version, group.pow(g, r))
	d = (r - x * c) % group.order
	return c, d

def check_known_log(group, c, d, g, y, version):
	gdyc = group.mul(group.pow(g, d), group.pow(y, c))
	return smp_hash(version, gdyc) == c

def proof_equal_coords(state, r, version):
	"""Prove that p = g3^r and q = g1^r * g2^secret share the same r."""
	group = state.group
	r1 = group.random_exponent()
	r2 = group.random_exponent()

	temp1 = group.pow(state.g3, r1)
	temp2 = group.mul(group.pow(state.g1, r1), group.pow(state.g2, r2))
	c = smp_hash(version, temp1, temp2)

	d1 = (r1 - r * c) % group.order
	d2 = (r2 - state.secret * c) % group.order
	return c, d1, d2

def check_equal_coords(state, c, d1, d2, p, q, version):
	# hash(g3^d1 * p^c, g1^d1 * g2^d2 * q^c) == c
	group = state.group
	temp1 = group.mul(group.pow(state.g3, d1), group.pow(p, c))

	temp2 = group.mul(group.pow(state.g1, d1), group.pow(state.g2, d2))
	temp2 = group.mul(temp2, group.pow(q, c))

	return smp_hash(version, temp1, temp2) == c

def proof_equal_logs(state, version):
	"""Prove that r = qab^x3 uses the x3 behind our g3 contribution g1^x3."""
	group = state.group
	r = group.random_exponent()

	temp1 = group.pow(state.g1, r)
	temp2 = group.pow(state.qab, r)
	c = smp_hash(version, temp1, temp2)

	d = (r - state.x3 * c) % group.order
	return c, d

def check_equal_logs(state, c, d, r, version):
	# g3o is the peer's g1^x3, so hash(g1^d * g3o^c, qab^d * r^c) == c
	group = state.group
	temp1 = group.mul(group.pow(state.g1, d), group.pow(state.g3o, c))
	temp2 = group.mul(group.pow(state.qab, d), group.pow(r, c))
	return smp_hash(version, temp1, temp2) == c
