# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    NETWORK class with network definitions and base url resolution
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


class NetworkDefinitionError(Exception):
    """
    Network definition Exception class
    """
    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


NETWORK_DEFINITIONS = {
    NETWORK_MAINNET: {
        'description': 'Turing Bitcoin Chain',
        'currency_code': 'TBC',
        'denominator': 0.000001,
        'decimals': 6,
        'prefix_address': b'\x00',
        'prefix_wif': b'\x80',
        'toolkit_network': 'bitcoin',
    },
    NETWORK_TESTNET: {
        'description': 'Turing Bitcoin Chain Test Network',
        'currency_code': 'TBC',
        'denominator': 0.000001,
        'decimals': 6,
        'prefix_address': b'\x6f',
        'prefix_wif': b'\xef',
        'toolkit_network': 'testnet',
    },
}


def network_defined(network):
    """
    Is network defined?

    >>> network_defined('mainnet')
    True
    >>> network_defined('bitcoin')
    False

    :param network: Network name
    :type network: str

    :return bool:
    """
    return network in NETWORK_DEFINITIONS


def get_base_url(network=None):
    """
    Get base url of the explorer REST service for the specified network. Defaults to the DEFAULT_NETWORK from the
    configuration, which is 'mainnet' unless configured otherwise.

    >>> get_base_url('testnet')
    'https://tbcdev.org/v1/tbc/main/'

    :param network: Network name: 'mainnet' or 'testnet'
    :type network: str, Network

    :return str:
    """
    if isinstance(network, Network):
        return network.base_url
    return Network(network).base_url


class Network(object):
    """
    Network class with all network definitions.

    Resolves the base url of the REST service, which can be overridden with the base_url argument.
    """

    def __init__(self, network_name=None, base_url=None):
        if not network_name:
            network_name = DEFAULT_NETWORK
        if network_name not in NETWORK_DEFINITIONS:
            raise NetworkDefinitionError("Network %s not found in network definitions" % network_name)
        self.name = network_name

        definition = NETWORK_DEFINITIONS[network_name]
        self.description = definition['description']
        self.currency_code = definition['currency_code']
        self.denominator = definition['denominator']
        self.decimals = definition['decimals']
        self.prefix_address = definition['prefix_address']
        self.prefix_wif = definition['prefix_wif']
        self.toolkit_network = definition['toolkit_network']
        self.base_url = base_url if base_url else NETWORK_BASE_URLS[network_name]
        if not self.base_url.endswith('/'):
            self.base_url += '/'

    def __repr__(self):
        return "<Network: %s>" % self.name

    def __eq__(self, other):
        if isinstance(other, Network):
            return self.name == other.name
        return self.name == other

    def __hash__(self):
        return hash(self.name)
