# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    SELECTION - Select unspent outputs for a payment
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
from tbcapi.services.baseclient import InsufficientBalanceError

_logger = logging.getLogger(__name__)


def select_outputs(outputs, amount, single_reserve=SELECT_SINGLE_RESERVE,
                   accumulate_reserve=SELECT_ACCUMULATE_RESERVE):
    """
    Select unspent outputs to pay amount.

    Outputs are sorted by value. If a single output covers the amount plus single_reserve the smallest of these
    outputs is returned. Otherwise outputs are accumulated from small to large until the amount plus
    accumulate_reserve is covered.

    >>> from tbcapi.outputs import UnspentOutput
    >>> outputs = [UnspentOutput('aa' * 32, n, '', v) for n, v in enumerate([100, 5000, 70000])]
    >>> select_outputs(outputs, 6000)
    [<UnspentOutput(txid=aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa, output_n=2, value=70000)>]

    :param outputs: List of unspent outputs
    :type outputs: list of UnspentOutput
    :param amount: Amount to pay in smallest denominator
    :type amount: int
    :param single_reserve: Extra value a single output must cover
    :type single_reserve: int
    :param accumulate_reserve: Extra value a combination of outputs must cover
    :type accumulate_reserve: int

    :return list of UnspentOutput:
    """
    outputs = sorted(outputs, key=lambda o: o.value)
    for output in outputs:
        if output.value >= amount + single_reserve:
            return [output]

    total = 0
    selected = []
    for output in outputs:
        total += output.value
        selected.append(output)
        if total >= amount + accumulate_reserve:
            _logger.debug("Selected %d outputs with total value %d for amount %d" % (len(selected), total, amount))
            return selected

    raise InsufficientBalanceError("Insufficient balance: %d available, %d required" %
                                   (total, amount + accumulate_reserve))


def first_sufficient_output(outputs, amount, key=lambda o: o.value, inclusive=True):
    """
    Return the first output in the given order with a value of at least amount, or higher than amount if
    inclusive is False. Returns None if no output is sufficient.

    :param outputs: List of unspent outputs
    :type outputs: list of UnspentOutput
    :param amount: Required amount
    :type amount: int
    :param key: Function which returns the value of an output to compare. Default is the output value
    :type key: function
    :param inclusive: Also accept outputs with exactly the required amount
    :type inclusive: bool

    :return UnspentOutput, None:
    """
    for output in outputs:
        value = key(output)
        if value > amount or (inclusive and value == amount):
            return output
    return None
