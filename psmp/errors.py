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

class SMPError(RuntimeError):
	"""Base class of everything an SMP step may raise. Any of these leaves
	the exchange in the cheated state."""

class SerializationError(SMPError):
	pass

class InvalidParameterError(SMPError):
	pass

class ProofCheckFailedError(SMPError):
	pass

class ProtocolStateError(SMPError):
	"""A step was invoked out of order or with the wrong number of values."""
