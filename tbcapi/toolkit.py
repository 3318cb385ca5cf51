# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    TOOLKIT - Capabilities of the external key, script and transaction library
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

import hashlib
from abc import ABC, abstractmethod
from bitcoinlib.encoding import change_base, double_sha256, EncodingError
from bitcoinlib.keys import Key, BKeyError
from bitcoinlib.scripts import data_pack
from bitcoinlib.transactions import Transaction, TransactionError
from tbcapi.main import *
from tbcapi.networks import Network
from tbcapi.services.baseclient import InvalidInputError

_logger = logging.getLogger(__name__)


class ChainToolkit(ABC):
    """
    Operations this package needs from a key, script and transaction library. Implement this class to use another
    library, or to test against a mock.
    """

    @abstractmethod
    def is_valid_address(self, address):
        """
        Check if string is a valid address

        :return bool:
        """

    @abstractmethod
    def address_hash(self, address):
        """
        Public key hash of an address as hexadecimal string

        :return str:
        """

    @abstractmethod
    def p2pkh_script(self, address):
        """
        Pay-to-public-key-hash locking script for an address as hexadecimal string

        :return str:
        """

    def sha256(self, data):
        return hashlib.sha256(data).digest()

    @abstractmethod
    def parse_transaction(self, raw_hex):
        """
        Deserialize a raw hexadecimal transaction into the transaction object of the library
        """

    @abstractmethod
    def output_script(self, transaction, output_n):
        """
        Locking script of output number output_n

        :return bytes:
        """

    @abstractmethod
    def input_outpoint(self, transaction, input_n):
        """
        Previous transaction ID and output number spent by input number input_n

        :return tuple: (txid hexstring, output number)
        """

    @abstractmethod
    def ancestor_fragment(self, transaction, output_n):
        """
        Serialized transaction data of an ancestor transaction, used by token contracts to verify the origin of
        output number output_n.

        :return str: Hexadecimal fragment
        """

    @abstractmethod
    def key_address(self, private_key):
        """
        Address of a private key

        :return str:
        """

    @abstractmethod
    def build_merge_transaction(self, private_key, outputs, fee):
        """
        Create and sign a transaction which sends all outputs back to the address of the private key, minus the
        fee.

        :param private_key: Private key which owns all outputs
        :param outputs: List of outputs to spend
        :type outputs: list of UnspentOutput
        :param fee: Transaction fee in smallest denominator
        :type fee: int

        :return str: Raw transaction as hexadecimal string
        """


class BitcoinlibToolkit(ChainToolkit):
    """
    Chain toolkit using the bitcoinlib library for address encoding, keys and transactions.

    Merge transactions are signed with the legacy SIGHASH_ALL digest, bitcoinlib offers no fork-id sighash. If the
    node rejects these transactions merge_utxos() uses up all its rounds and raises a NeedsMergeError, so supply a
    custom toolkit to Service to merge outputs on such a network.
    """

    def __init__(self, network=None):
        self.network = network
        if not isinstance(network, Network):
            self.network = Network(network)

    def _address_to_hash(self, address):
        # Not addr_base58_to_pubkeyhash: that drops the prefix byte and checks the checksum with assert
        if not isinstance(address, str):
            return None
        try:
            address_bytes = change_base(address, 58, 256, 25)
        except EncodingError:
            return None
        if len(address_bytes) != 25 or address_bytes[:1] != self.network.prefix_address:
            return None
        if double_sha256(address_bytes[:-4])[:4] != address_bytes[-4:]:
            return None
        return address_bytes[1:-4]

    def is_valid_address(self, address):
        return self._address_to_hash(address) is not None

    def address_hash(self, address):
        pkh = self._address_to_hash(address)
        if pkh is None:
            raise InvalidInputError("Invalid address %s" % address)
        return pkh.hex()

    def p2pkh_script(self, address):
        return '76a914' + self.address_hash(address) + '88ac'

    def parse_transaction(self, raw_hex):
        try:
            return Transaction.parse_hex(raw_hex, strict=False, network=self.network.toolkit_network)
        except (TransactionError, ValueError) as e:
            raise InvalidInputError("Could not parse raw transaction: %s" % e)

    def output_script(self, transaction, output_n):
        try:
            return transaction.outputs[output_n].lock_script
        except IndexError:
            raise InvalidInputError("Output %d not found in transaction %s" % (output_n, transaction.txid))

    def input_outpoint(self, transaction, input_n):
        try:
            inp = transaction.inputs[input_n]
        except IndexError:
            raise InvalidInputError("Input %d not found in transaction %s" % (input_n, transaction.txid))
        return inp.prev_txid.hex(), inp.output_n_int

    def ancestor_fragment(self, transaction, output_n):
        """
        Fragment layout, every item pushed as script data:
        header (version, locktime, number of inputs and outputs as 4 byte little endian integers),
        hash of all outpoints and sequences, hash of all unlocking script hashes, hash of the outputs before
        output_n, locking script and value of output_n and hash of the outputs after output_n.
        """
        if not 0 <= output_n < len(transaction.outputs):
            raise InvalidInputError("Output %d not found in transaction %s" % (output_n, transaction.txid))
        header = transaction.version_int.to_bytes(4, 'little') + transaction.locktime.to_bytes(4, 'little') + \
            len(transaction.inputs).to_bytes(4, 'little') + len(transaction.outputs).to_bytes(4, 'little')
        outpoints = b''
        unlocking_hashes = b''
        for inp in transaction.inputs:
            outpoints += inp.prev_txid[::-1] + inp.output_n_int.to_bytes(4, 'little') + \
                inp.sequence.to_bytes(4, 'little')
            unlocking_hashes += self.sha256(inp.unlocking_script)

        def outputs_hash(outputs):
            return self.sha256(b''.join(o.value.to_bytes(8, 'little') + self.sha256(o.lock_script)
                                        for o in outputs))

        output = transaction.outputs[output_n]
        fragment = data_pack(header) + data_pack(self.sha256(outpoints)) + \
            data_pack(self.sha256(unlocking_hashes)) + \
            data_pack(outputs_hash(transaction.outputs[:output_n])) + \
            data_pack(output.lock_script) + data_pack(output.value.to_bytes(8, 'little')) + \
            data_pack(outputs_hash(transaction.outputs[output_n + 1:]))
        return fragment.hex()

    def _key(self, private_key):
        if isinstance(private_key, Key):
            return private_key
        try:
            return Key(private_key, network=self.network.toolkit_network)
        except (BKeyError, EncodingError) as e:
            raise InvalidInputError("Invalid private key: %s" % e)

    def key_address(self, private_key):
        return self._key(private_key).address()

    def build_merge_transaction(self, private_key, outputs, fee):
        key = self._key(private_key)
        total = sum(o.value for o in outputs)
        if total <= fee:
            raise InvalidInputError("Total value %d of outputs does not cover fee %d" % (total, fee))
        t = Transaction(network=self.network.toolkit_network, witness_type='legacy', fee=fee)
        for o in outputs:
            t.add_input(o.txid, o.output_n, keys=key, value=o.value, witness_type='legacy')
        t.add_output(total - fee, address=key.address())
        t.sign(key)
        _logger.info("Created merge transaction %s for %d outputs" % (t.txid, len(outputs)))
        return t.raw_hex()
