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

import logging

from psmp import sm
from psmp.compatcrypto import SHA256
from psmp.errors import SMPError, ProtocolStateError
from psmp.group import SMP_GROUP
from psmp.utils import pack_mpi

logger = logging.getLogger(__name__)

TLV_SMP1 = 2
TLV_SMP2 = 3
TLV_SMP3 = 4
TLV_SMP4 = 5
TLV_SMP_ABORT = 6
TLV_SMP1Q = 7

# the stage a TLV may arrive in
EXPECTED_STAGE = {
	TLV_SMP1: sm.EXPECT1,
	TLV_SMP1Q: sm.EXPECT1,
	TLV_SMP2: sm.EXPECT2,
	TLV_SMP3: sm.EXPECT3,
	TLV_SMP4: sm.EXPECT4,
}

def compute_session_id(s):
	"""Secure session id: the first 8 bytes of SHA256(0x00 || MPI(s)) for
	the shared Diffie-Hellman secret s."""
	return SHA256(b'\x00' + pack_mpi(s))[:8]

def combine_secret(initiatorFp, responderFp, ssid, secret):
	if not isinstance(secret, bytes):
		secret = secret.encode('utf-8')
	return SHA256(b'\x01' + initiatorFp + responderFp + ssid + secret)

class SMPHost(object):
	"""Callbacks through which an SMPHandler reports to the application.
	Subclasses override what they need."""

	def askForSecret(self, question):
		pass

	def verify(self, approved):
		pass

	def unverify(self):
		pass

	def smpError(self, tlvType, cheated):
		pass

	def smpAborted(self):
		pass

class SMPHandler(object):
	"""Runs SMP exchanges over one encrypted session.

	TLVs go in and out as (type, payload) tuples; framing and encryption are
	the caller's business. ourFp and theirFp are the raw public key
	fingerprints, ssid the secure session id of the session.
	"""

	def __init__(self, host, ourFp, theirFp, ssid, group=SMP_GROUP):
		self.host = host
		self.ourFp = ourFp
		self.theirFp = theirFp
		self.ssid = ssid
		self.state = sm.SMState(group)

	def __repr__(self):
		return '<{cls}({s!r})>'.format(cls=self.__class__.__name__,
				s=self.state)

	@property
	def inProgress(self):
		return self.state.stage != sm.EXPECT1

	def reset(self):
		self.state.init()

	def initiate(self, secret, question=None):
		if self.inProgress:
			logger.info('abandoning running SMP exchange')
			self.reset()

		combSecret = combine_secret(self.ourFp, self.theirFp, self.ssid, secret)
		msg = sm.step1(self.state, combSecret)
		self.state.approved = True

		if question is None:
			return TLV_SMP1, msg
		return TLV_SMP1Q, question.encode('utf-8') + b'\0' + msg

	def respond(self, secret):
		if not self.state.asked:
			raise ProtocolStateError('There is no question to be answered.')

		combSecret = combine_secret(self.theirFp, self.ourFp, self.ssid, secret)
		msg = sm.step2b(self.state, combSecret)
		self.state.approved = not self.state.receivedQuestion
		return TLV_SMP2, msg

	def abort(self):
		self.reset()
		return TLV_SMP_ABORT, b''

	def handle(self, tlvType, payload):
		"""Feed a received SMP TLV. Returns the TLV to send back, if any."""
		logger.debug('handling SMP TLV type {0}'.format(tlvType))

		if tlvType == TLV_SMP_ABORT:
			self.host.smpAborted()
			self.reset()
			return None

		if tlvType not in EXPECTED_STAGE:
			return None

		if tlvType in (TLV_SMP1, TLV_SMP1Q) \
				and self.state.stage == sm.EXPECT_SECRET:
			logger.info('peer restarted SMP before we answered')
			self.reset()

		if self.state.stage != EXPECTED_STAGE[tlvType]:
			logger.warning('unexpected SMP TLV type %d in stage %s', tlvType,
					sm.STAGE_NAMES[self.state.stage])
			self.host.smpError(tlvType, False)
			return None

		try:
			return self._process(tlvType, payload)
		except SMPError as e:
			logger.error('invalid SMP TLV type %d received: %s', tlvType, e)
			self.host.smpError(tlvType, True)
			self.reset()
			return None

	def _process(self, tlvType, payload):
		if tlvType == TLV_SMP1Q:
			question, sep, msg = payload.partition(b'\0')
			if not sep:
				question, msg = b'', payload
			sm.step2a(self.state, msg, 1)
			self.state.asked = True
			self.host.askForSecret(question.decode('utf-8', 'replace'))
			return None

		if tlvType == TLV_SMP1:
			sm.step2a(self.state, payload, 0)
			self.state.asked = True
			self.host.askForSecret(None)
			return None

		if tlvType == TLV_SMP2:
			return TLV_SMP3, sm.step3(self.state, payload)

		if tlvType == TLV_SMP3:
			msg = sm.step4(self.state, payload)
			self._report()
			return TLV_SMP4, msg

		if tlvType == TLV_SMP4:
			sm.step5(self.state, payload)
			self._report()
			return None

	def _report(self):
		if self.state.progress == sm.SMPPROG_SUCCEEDED:
			logger.info('secrets matched')
			self.host.verify(self.state.approved)
		else:
			logger.error('secrets don\'t match')
			self.host.unverify()
		self.reset()
