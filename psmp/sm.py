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

import functools
import logging

from psmp.errors import InvalidParameterError, ProofCheckFailedError, \
		ProtocolStateError
from psmp.group import SMP_GROUP
from psmp.utils import bytes_to_long, pack_mpis, read_mpis
from psmp.zkp import proof_known_log, check_known_log, proof_equal_coords, \
		check_equal_coords, proof_equal_logs, check_equal_logs

logger = logging.getLogger(__name__)

SMPPROG_OK = 0
SMPPROG_CHEATED = -2
SMPPROG_FAILED = -1
SMPPROG_SUCCEEDED = 1

EXPECT1 = 0
EXPECT2 = 1
EXPECT3 = 2
EXPECT4 = 3
EXPECT_SECRET = 4
DONE = 5
ABORTED = 6

STAGE_NAMES = {
	EXPECT1: 'EXPECT1',
	EXPECT2: 'EXPECT2',
	EXPECT3: 'EXPECT3',
	EXPECT4: 'EXPECT4',
	EXPECT_SECRET: 'EXPECT_SECRET',
	DONE: 'DONE',
	ABORTED: 'ABORTED',
}

MSG1_LEN = 6
MSG2_LEN = 11
MSG3_LEN = 8
MSG4_LEN = 3

# challenges are SHA-256 digests
HASH_BITS = 256

class SMState(object):
	"""Everything one party remembers between the steps of a single SMP
	exchange. Not safe for concurrent use; call init() before reusing it
	for a new exchange."""

	def __init__(self, group=SMP_GROUP):
		self.group = group
		self.init()

	def init(self):
		self.secret = None
		self.x2 = None
		self.x3 = None
		self.g1 = self.group.generator
		self.g2 = None
		self.g3 = None
		self.g3o = None
		self.p = None
		self.q = None
		self.pab = None
		self.qab = None
		self.stage = EXPECT1
		self.receivedQuestion = 0
		self.approved = False
		self.asked = False
		self.progress = SMPPROG_OK

	def __repr__(self):
		return '<{cls}(stage={s}, progress={p})>'.format(
				cls=self.__class__.__name__,
				s=STAGE_NAMES[self.stage], p=self.progress)

def smp_step(stage):
	"""Guard a step: reject it unless the state sits in the given stage, then
	assume cheating until the step body completes. Anything raised from the
	body aborts the exchange."""
	def decorator(func):
		@functools.wraps(func)
		def wrapper(state, *args, **kwargs):
			if state.stage != stage:
				raise ProtocolStateError('{0} called in stage {1}'.format(
						func.__name__, STAGE_NAMES[state.stage]))
			logger.debug('%s: entering from %s', func.__name__,
					STAGE_NAMES[state.stage])
			state.progress = SMPPROG_CHEATED
			try:
				return func(state, *args, **kwargs)
			except Exception as e:
				logger.error('%s failed: %s', func.__name__, e)
				state.stage = ABORTED
				raise
		return wrapper
	return decorator

def read_message(data, length):
	msg = read_mpis(data)
	if len(msg) != length:
		raise ProtocolStateError('expected {0} values, got {1}'
				.format(length, len(msg)))
	return msg

def check_params(group, elems=(), exps=(), hashes=()):
	if not all(group.check_group(n) for n in elems) \
			or not all(group.check_exp(n) for n in exps) \
			or not all(c.bit_length() <= HASH_BITS for c in hashes):
		raise InvalidParameterError('invalid parameter')

@smp_step(EXPECT1)
def step1(state, secret):
	"""Start an exchange with our secret (bytes). Returns message 1:

	[0] = g2a, [1] = c2, [2] = d2 proof of knowledge of log(g2a)
	[3] = g3a, [4] = c3, [5] = d3 proof of knowledge of log(g3a)
	"""
	group = state.group
	state.secret = bytes_to_long(secret)
	state.receivedQuestion = 0

	state.x2 = group.random_exponent()
	state.x3 = group.random_exponent()

	msg = [group.pow(state.g1, state.x2)]
	msg += proof_known_log(group, state.g1, state.x2, 1)
	msg.append(group.pow(state.g1, state.x3))
	msg += proof_known_log(group, state.g1, state.x3, 2)

	state.stage = EXPECT2
	state.progress = SMPPROG_OK
	return pack_mpis(msg)

@smp_step(EXPECT1)
def step2a(state, data, receivedQuestion=0):
	"""Verify message 1 and derive g2 and g3. Produces no output; the caller
	runs step2b once the user has entered a secret."""
	group = state.group
	state.receivedQuestion = receivedQuestion

	msg = read_message(data, MSG1_LEN)
	check_params(group, elems=(msg[0], msg[3]), exps=(msg[2], msg[5]),
			hashes=(msg[1], msg[4]))

	state.g3o = msg[3]

	if not check_known_log(group, msg[1], msg[2], state.g1, msg[0], 1) \
			or not check_known_log(group, msg[4], msg[5], state.g1, msg[3], 2):
		raise ProofCheckFailedError('proof of known log failed')

	state.x2 = group.random_exponent()
	state.x3 = group.random_exponent()

	state.g2 = group.pow(msg[0], state.x2)
	state.g3 = group.pow(msg[3], state.x3)

	state.stage = EXPECT_SECRET
	state.progress = SMPPROG_OK

@smp_step(EXPECT_SECRET)
def step2b(state, secret):
	"""Answer message 1 with our secret (bytes). Returns message 2:

	[0] = g2b, [1] = c2, [2] = d2
	[3] = g3b, [4] = c3, [5] = d3
	[6] = pb, [7] = qb
	[8] = cp, [9] = d5, [10] = d6 proof that pb and qb share r
	"""
	group = state.group
	state.secret = bytes_to_long(secret)

	msg = [group.pow(state.g1, state.x2)]
	msg += proof_known_log(group, state.g1, state.x2, 3)
	msg.append(group.pow(state.g1, state.x3))
	msg += proof_known_log(group, state.g1, state.x3, 4)

	r = group.random_exponent()
	state.p = group.pow(state.g3, r)
	msg.append(state.p)

	qb1 = group.pow(state.g1, r)
	qb2 = group.pow(state.g2, state.secret)
	state.q = group.mul(qb1, qb2)
	msg.append(state.q)

	msg += proof_equal_coords(state, r, 5)

	state.stage = EXPECT3
	state.progress = SMPPROG_OK
	return pack_mpis(msg)

@smp_step(EXPECT2)
def step3(state, data):
	"""Verify message 2. Returns message 3:

	[0] = pa, [1] = qa
	[2] = cp, [3] = d5, [4] = d6 proof that pa and qa share r
	[5] = ra = (qa/qb)^x3
	[6] = cr, [7] = d7 proof that ra was formed with our x3
	"""
	group = state.group
	msg = read_message(data, MSG2_LEN)
	check_params(group, elems=(msg[0], msg[3], msg[6], msg[7]),
			exps=(msg[2], msg[5], msg[9], msg[10]),
			hashes=(msg[1], msg[4], msg[8]))

	state.g3o = msg[3]

	if not check_known_log(group, msg[1], msg[2], state.g1, msg[0], 3) \
			or not check_known_log(group, msg[4], msg[5], state.g1, msg[3], 4):
		raise ProofCheckFailedError('proof of known log failed')

	state.g2 = group.pow(msg[0], state.x2)
	state.g3 = group.pow(msg[3], state.x3)

	if not check_equal_coords(state, msg[8], msg[9], msg[10], msg[6], msg[7], 5):
		raise ProofCheckFailedError('proof of equal coordinates failed')

	r = group.random_exponent()
	state.p = group.pow(state.g3, r)
	out = [state.p]
	qa1 = group.pow(state.g1, r)
	qa2 = group.pow(state.g2, state.secret)
	state.q = group.mul(qa1, qa2)
	out.append(state.q)
	out += proof_equal_coords(state, r, 6)

	state.pab = group.mul(state.p, group.inv(msg[6]))
	state.qab = group.mul(state.q, group.inv(msg[7]))

	out.append(group.pow(state.qab, state.x3))
	out += proof_equal_logs(state, 7)

	state.stage = EXPECT4
	state.progress = SMPPROG_OK
	return pack_mpis(out)

@smp_step(EXPECT3)
def step4(state, data):
	"""Verify message 3, learn the result and return message 4:

	[0] = rb = (qa/qb)^x3
	[1] = cr, [2] = d7 proof that rb was formed with our x3
	"""
	group = state.group
	msg = read_message(data, MSG3_LEN)
	check_params(group, elems=(msg[0], msg[1], msg[5]),
			exps=(msg[3], msg[4], msg[7]), hashes=(msg[2], msg[6]))

	if not check_equal_coords(state, msg[2], msg[3], msg[4], msg[0], msg[1], 6):
		raise ProofCheckFailedError('proof of equal coordinates failed')

	state.pab = group.mul(msg[0], group.inv(state.p))
	state.qab = group.mul(msg[1], group.inv(state.q))

	if not check_equal_logs(state, msg[6], msg[7], msg[5], 7):
		raise ProofCheckFailedError('proof of equal logs failed')

	out = [group.pow(state.qab, state.x3)]
	out += proof_equal_logs(state, 8)

	rab = group.pow(msg[5], state.x3)
	state.progress = SMPPROG_SUCCEEDED if rab == state.pab \
			else SMPPROG_FAILED
	state.stage = DONE
	return pack_mpis(out)

@smp_step(EXPECT4)
def step5(state, data):
	"""Verify message 4 and learn the result."""
	group = state.group
	msg = read_message(data, MSG4_LEN)
	check_params(group, elems=(msg[0],), exps=(msg[2],), hashes=(msg[1],))

	if not check_equal_logs(state, msg[1], msg[2], msg[0], 8):
		raise ProofCheckFailedError('proof of equal logs failed')

	rab = group.pow(msg[0], state.x3)
	state.progress = SMPPROG_SUCCEEDED if rab == state.pab \
			else SMPPROG_FAILED
	state.stage = DONE
