# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    VALUES - Conversion between display amounts and base units
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

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from tbcapi.networks import NETWORK_DEFINITIONS, DEFAULT_NETWORK
from tbcapi.services.baseclient import InvalidArgumentError

TBC_DECIMALS = NETWORK_DEFINITIONS[DEFAULT_NETWORK]['decimals']


def _to_decimal(amount):
    if isinstance(amount, bool):
        raise InvalidArgumentError("Invalid amount %s" % amount)
    try:
        # Floats are converted through their shortest string representation, so 0.1 stays 0.1
        value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidArgumentError("Invalid amount %s" % amount)
    if not value.is_finite() or value < 0:
        raise InvalidArgumentError("Amount must be a non-negative number, not %s" % amount)
    return value


def _check_decimals(decimals):
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise InvalidArgumentError("Decimals must be a non-negative integer, not %s" % decimals)


def ft_amount_to_units(amount, decimals):
    """
    Convert a display amount of a fungible token to base units. Amounts with more precision than the token
    supports are rounded half up.

    >>> ft_amount_to_units('12.5', 6)
    12500000
    >>> ft_amount_to_units(0.0000015, 6)
    2

    :param amount: Display amount
    :type amount: int, float, str, Decimal
    :param decimals: Number of decimal places of the token
    :type decimals: int

    :return int:
    """
    _check_decimals(decimals)
    value = _to_decimal(amount) * (Decimal(10) ** decimals)
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def units_to_ft_amount(units, decimals):
    """
    Convert base units of a fungible token to a display amount

    >>> units_to_ft_amount(12500000, 6)
    Decimal('12.5')

    :param units: Amount in base units
    :type units: int
    :param decimals: Number of decimal places of the token
    :type decimals: int

    :return Decimal:
    """
    _check_decimals(decimals)
    return _to_decimal(units) / (Decimal(10) ** decimals)


def tbc_to_units(amount):
    """
    Convert an amount of TBC to the smallest denominator

    >>> tbc_to_units(0.05)
    50000

    :param amount: Amount in TBC
    :type amount: int, float, str, Decimal

    :return int:
    """
    return ft_amount_to_units(amount, TBC_DECIMALS)


def units_to_tbc(units):
    """
    Convert an amount in the smallest denominator to TBC

    >>> units_to_tbc(2500000)
    Decimal('2.5')

    :param units: Amount in smallest denominator
    :type units: int

    :return Decimal:
    """
    return units_to_ft_amount(units, TBC_DECIMALS)
