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

import argparse
import logging
import sys

from psmp.compatcrypto import SHA256
from psmp.group import SMP_GROUP
from psmp.handler import SMPHandler, SMPHost, compute_session_id

EXIT_SUCCESS = 0
EXIT_ERROR = 1

class DemoHost(SMPHost):

	def __init__(self, name):
		self.name = name
		self.question = None
		self.result = None

	def askForSecret(self, question):
		self.question = question
		if question is not None:
			print('{0}: peer asks "{1}"'.format(self.name, question))

	def verify(self, approved):
		self.result = True
		print('{0}: secrets match (approved={1})'.format(self.name, approved))

	def unverify(self):
		self.result = False
		print('{0}: secrets do not match'.format(self.name))

	def smpError(self, tlvType, cheated):
		self.result = False
		print('{0}: SMP error on TLV {1} (cheated={2})'.format(self.name,
				tlvType, cheated))

	def smpAborted(self):
		self.result = False
		print('{0}: SMP aborted'.format(self.name))

def run(secretA, secretB, question=None, group=SMP_GROUP):
	"""Run one exchange between two in-process parties. Returns the two
	hosts so the caller can inspect the results."""
	alice, bob = DemoHost('alice'), DemoHost('bob')
	fpA = SHA256(b'alice')[:20]
	fpB = SHA256(b'bob')[:20]

	# stand-in for the Diffie-Hellman secret of the encrypted session
	a, b = group.random_exponent(), group.random_exponent()
	ssid = compute_session_id(group.pow(group.pow(group.generator, a), b))

	smpA = SMPHandler(alice, fpA, fpB, ssid, group)
	smpB = SMPHandler(bob, fpB, fpA, ssid, group)

	tlv = smpA.initiate(secretA, question)
	smpB.handle(*tlv)
	if bob.result is None:
		tlv = smpB.respond(secretB)
		tlv = smpA.handle(*tlv)
		if tlv is not None:
			tlv = smpB.handle(*tlv)
		if tlv is not None:
			smpA.handle(*tlv)
	return alice, bob

def main(argv=None):
	parser = argparse.ArgumentParser(
			description='Compare two secrets with the Socialist Millionaires\' Protocol')
	parser.add_argument('secretA', help='secret of the initiating party')
	parser.add_argument('secretB', help='secret of the responding party')
	parser.add_argument('-q', '--question', help='question shown to the responder')
	parser.add_argument('-v', '--verbose', action='store_true',
			help='log protocol steps')
	args = parser.parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
			format='%(asctime)s %(levelname)s %(name)s %(message)s')

	alice, bob = run(args.secretA, args.secretB, args.question)
	if alice.result and bob.result:
		return EXIT_SUCCESS
	return EXIT_ERROR

if __name__ == '__main__':
	sys.exit(main())
