# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    OUTPUTS - Unspent transaction outputs
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

from tbcapi.services.baseclient import InvalidInputError


def _check_amount(name, value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError("%s must be a non-negative integer, not %s" % (name, value))
    return value


class UnspentOutput(object):
    """
    Spendable transaction output as returned by the explorer service, together with the locking script the caller
    attached to it.

    Unspent outputs are read-only after creation.
    """

    __slots__ = ('_txid', '_output_n', '_script', '_value', '_ft_balance')

    def __init__(self, txid, output_n, script, value, ft_balance=None):
        """
        Create a new UnspentOutput

        >>> UnspentOutput('e6ab3c5d5b4f29bbc4d9c9a3d3b4c5c1b8a4bd9f35ba6c6f9d7b53c1b8c5d6e7', 1, '76a914...88ac', 10000)
        <UnspentOutput(txid=e6ab3c5d5b4f29bbc4d9c9a3d3b4c5c1b8a4bd9f35ba6c6f9d7b53c1b8c5d6e7, output_n=1, value=10000)>

        :param txid: Transaction ID of the transaction holding this output
        :type txid: str
        :param output_n: Index of the output in the transaction
        :type output_n: int
        :param script: Locking script as hexadecimal string
        :type script: str
        :param value: Value in smallest denominator
        :type value: int
        :param ft_balance: Fungible token balance of a token output, None for plain outputs
        :type ft_balance: int, None
        """
        self._txid = txid
        self._output_n = _check_amount('Output index', output_n)
        self._script = script
        self._value = _check_amount('Value', value)
        self._ft_balance = None if ft_balance is None else _check_amount('FT balance', ft_balance)

    @property
    def txid(self):
        return self._txid

    @property
    def output_n(self):
        return self._output_n

    @property
    def script(self):
        return self._script

    @property
    def value(self):
        return self._value

    @property
    def ft_balance(self):
        return self._ft_balance

    def as_dict(self):
        """
        Get unspent output as dictionary, with the keys used by the transaction builder of the contract library.

        :return dict:
        """
        utxo = {
            'txId': self.txid,
            'outputIndex': self.output_n,
            'script': self.script,
            'satoshis': self.value,
        }
        if self.ft_balance is not None:
            utxo['ftBalance'] = self.ft_balance
        return utxo

    def __eq__(self, other):
        if not isinstance(other, UnspentOutput):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self):
        return hash((self.txid, self.output_n))

    def __repr__(self):
        if self.ft_balance is None:
            return "<UnspentOutput(txid=%s, output_n=%d, value=%d)>" % (self.txid, self.output_n, self.value)
        return "<UnspentOutput(txid=%s, output_n=%d, value=%d, ft_balance=%d)>" % \
               (self.txid, self.output_n, self.value, self.ft_balance)
