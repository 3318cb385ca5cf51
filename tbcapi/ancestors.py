# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    ANCESTORS - Pre-pre transaction data for fungible token transfers
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

_logger = logging.getLogger(__name__)

EMPTY_SLOT = '0' * PREPRE_SLOT_LENGTH


def tape_slots(tape_script):
    """
    Split the amount field of a token tape script in 8 byte slots.

    The field is found at bytes 3 to 51 of the tape script. Returns a list of (input_n, slot) tuples, starting with
    the last slot.

    :param tape_script: Tape locking script
    :type tape_script: bytes

    :return list of tuple:
    """
    field = tape_script[PREPRE_TAPE_START:PREPRE_TAPE_END].hex()
    slots = []
    for pos in range(len(field) - PREPRE_SLOT_LENGTH, -1, -PREPRE_SLOT_LENGTH):
        slots.append((pos // PREPRE_SLOT_LENGTH, field[pos:pos + PREPRE_SLOT_LENGTH]))
    return slots


def build_prepre_txdata(parent_tx, parent_output_n, fetch_transaction, toolkit):
    """
    Build the pre-pre transaction data which a token transfer needs to unlock output parent_output_n of
    parent_tx.

    The tape output following the token output holds an amount slot per input of the parent transaction. For every
    non-empty slot the transaction spent by that input is fetched and its fragment is added, last slot first. The
    result is prefixed with marker byte 0x57.

    :param parent_tx: Transaction holding the token output, as parsed by the toolkit
    :param parent_output_n: Output number of the token output
    :type parent_output_n: int
    :param fetch_transaction: Function which fetches and parses a transaction by its transaction ID
    :type fetch_transaction: function
    :param toolkit: Toolkit used to access transaction fields and build the fragments
    :type toolkit: ChainToolkit

    :return str: Hexadecimal string
    """
    tape_script = toolkit.output_script(parent_tx, parent_output_n + 1)
    txdata = PREPRE_TXDATA_MARKER
    for input_n, slot in tape_slots(tape_script):
        if slot == EMPTY_SLOT:
            continue
        prev_txid, prev_output_n = toolkit.input_outpoint(parent_tx, input_n)
        _logger.debug("Fetch pre-pre transaction %s for input %d" % (prev_txid, input_n))
        prepre_tx = fetch_transaction(prev_txid)
        txdata += toolkit.ancestor_fragment(prepre_tx, prev_output_n)
    return txdata
