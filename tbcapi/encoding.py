# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    ENCODING - Lookup keys and hashes used by the explorer service
#    © 2024 October - TbcApi developers
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU Affero General Public License as
#    published by the Free Software Foundation, either version 3 of the
#    License, or (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU Affero General Public License for more details.
#
#    You should have received a copy of the GNU Affero General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

from tbcapi.main import *
from tbcapi.services.baseclient import InvalidInputError

_logger = logging.getLogger(__name__)

HASH_HEX_LENGTH = 40


def address_or_hash_to_lookup(address_or_hash, toolkit):
    """
    Convert an address or a 20 byte hash to the tagged hash used as lookup key by the balance and UTXO endpoints.

    Addresses are converted to their public key hash with tag '00' appended, other strings of 40 characters are
    used as hash with tag '01'.

    :param address_or_hash: Address or hexadecimal hash
    :type address_or_hash: str
    :param toolkit: Toolkit used to validate and decode addresses
    :type toolkit: ChainToolkit

    :return str:
    """
    if toolkit.is_valid_address(address_or_hash):
        return toolkit.address_hash(address_or_hash) + LOOKUP_TAG_ADDRESS
    if isinstance(address_or_hash, str) and len(address_or_hash) == HASH_HEX_LENGTH:
        return address_or_hash + LOOKUP_TAG_HASH
    raise InvalidInputError("Invalid address or hash: %s" % address_or_hash)


def script_hash(script, toolkit):
    """
    Hash of a locking script as used by the 'script/hash' endpoints: SHA256 of the script in reversed byte order.

    :param script: Locking script as hexadecimal string
    :type script: str
    :param toolkit: Toolkit which provides the hash function
    :type toolkit: ChainToolkit

    :return str:
    """
    try:
        script_bytes = bytes.fromhex(script)
    except (TypeError, ValueError):
        raise InvalidInputError("Script must be a hexadecimal string: %s" % script)
    return toolkit.sha256(script_bytes)[::-1].hex()
