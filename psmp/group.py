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

from collections import namedtuple

from psmp.compatcrypto import random_bytes
from psmp.utils import bytes_to_long

# RFC 3526 group 5, the OTR Diffie-Hellman group
DH_MODULUS = 2410312426921032588552076022197566074856950548502459942654116941958108831682612228890093858261341614673227141477904012196503648957050582631942730706805009223062734745341073406696246014589361659774041027169249453200378729434170325843778659198143763193776859869524088940195577346119843545301547043747207749969763750084308926339295559968882457872412993810129130294592999947926365264059284647209730384947211681434464714438488520940127459844288859336526896320919633919
DH_GENERATOR = 2
DH_BITS = 1536
MOD_LEN_BYTES = DH_BITS // 8

class Group(namedtuple('Group', 'modulus generator order')):
	"""Prime order subgroup of the integers modulo a safe prime.

	Group values are immutable and are handed to every function that does
	arithmetic, so a protocol run can be pointed at a different (e.g.
	smaller) group without touching module state.
	"""

	__slots__ = ()

	def __new__(cls, modulus, generator=DH_GENERATOR):
		order = (modulus - 1) // 2
		if modulus != 2 * order + 1:
			raise ValueError('modulus must be odd')
		return super(Group, cls).__new__(cls, modulus, generator, order)

	def __repr__(self):
		return '<{cls}({bits} bits, g={g})>'.format(cls=self.__class__.__name__,
				bits=self.modulus.bit_length(), g=self.generator)

	@property
	def bytelen(self):
		return (self.modulus.bit_length() + 7) // 8

	def pow(self, base, exponent):
		return pow(base, exponent, self.modulus)

	def mul(self, a, b):
		return a * b % self.modulus

	def inv(self, n):
		return pow(n, self.modulus - 2, self.modulus)

	def check_group(self, n):
		# rejects 0, 1 and p-1, which would collapse the proof equations
		return 2 <= n <= self.modulus - 2

	def check_exp(self, n):
		return 1 <= n < self.order

	def random_exponent(self):
		# as wide as the modulus, not reduced mod order
		return bytes_to_long(random_bytes(self.bytelen))

SMP_GROUP = Group(DH_MODULUS, DH_GENERATOR)
