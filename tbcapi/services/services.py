# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    SERVICES - Main Service connector
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
from tbcapi.networks import Network
from tbcapi.encoding import address_or_hash_to_lookup, script_hash
from tbcapi.selection import select_outputs, first_sufficient_output
from tbcapi.ancestors import build_prepre_txdata
from tbcapi.values import tbc_to_units
from tbcapi.toolkit import BitcoinlibToolkit
from tbcapi.services.baseclient import ClientError, NetworkError, InvalidInputError, InvalidArgumentError, \
    InsufficientBalanceError, NeedsMergeError, NotFoundError
from tbcapi.services.turingapi import TuringApiClient


_logger = logging.getLogger(__name__)


class Service(object):
    """
    Class to connect to the Turing explorer REST service. Use to receive unspent outputs, token balances and token
    information, to fetch raw transactions or to broadcast a raw transaction.

    Every call queries the service, nothing is cached.

    >>> srv = Service(network='testnet')
    >>> srv.base_url
    'https://tbcdev.org/v1/tbc/main/'

    """

    def __init__(self, network=DEFAULT_NETWORK, base_url=None, timeout=TIMEOUT_REQUESTS, toolkit=None, sleep=None,
                 max_merge_attempts=MAX_MERGE_ATTEMPTS, max_merge_rounds=MAX_MERGE_ROUNDS, merge_fee=MERGE_FEE):
        """
        Create a service object for the specified network.

        :param network: Specify network used: 'mainnet' or 'testnet'. Default is the DEFAULT_NETWORK from the configuration
        :type network: str, Network
        :param base_url: Base url of the REST service. Leave empty to use the url of the network from the configuration
        :type base_url: str
        :param timeout: Timeout for web requests in seconds. Leave empty to use default from config settings
        :type timeout: int
        :param toolkit: Key, script and transaction toolkit. Default is a BitcoinlibToolkit for this network
        :type toolkit: ChainToolkit
        :param sleep: Function used to wait between merging outputs and fetching them again. Default is time.sleep
        :type sleep: function
        :param max_merge_attempts: Maximum number of merges when fetching an unspent output with fetch_utxo()
        :type max_merge_attempts: int
        :param max_merge_rounds: Maximum number of merge transactions created by merge_utxos()
        :type max_merge_rounds: int
        :param merge_fee: Fee of a merge transaction in smallest denominator
        :type merge_fee: int
        """
        self.network = network
        if not isinstance(network, Network):
            self.network = Network(network, base_url=base_url)
        elif base_url:
            self.network = Network(network.name, base_url=base_url)
        self.base_url = self.network.base_url
        self.timeout = timeout
        self.toolkit = toolkit if toolkit is not None else BitcoinlibToolkit(self.network)
        self.sleep = sleep if sleep is not None else time.sleep
        self.max_merge_attempts = max_merge_attempts
        self.max_merge_rounds = max_merge_rounds
        self.merge_fee = merge_fee
        self.client = TuringApiClient(self.network, self.base_url, timeout)
        self.results = {}

    def __repr__(self):
        return "<Service(network=%s, base_url=%s)>" % (self.network.name, self.base_url)

    def _lookup(self, address_or_hash):
        return address_or_hash_to_lookup(address_or_hash, self.toolkit)

    def ft_balance(self, contract_txid, address_or_hash):
        """
        Get fungible token balance of an address or hash for a token contract

        :param contract_txid: Transaction ID of the token contract
        :type contract_txid: str
        :param address_or_hash: Address or 40 character hexadecimal hash
        :type address_or_hash: str

        :return int: Balance in base units of the token
        """
        return self.client.getftbalance(self._lookup(address_or_hash), contract_txid)

    def fetch_ft_utxo(self, contract_txid, address_or_hash, amount, code_script):
        """
        Get a token output which holds at least the given amount of tokens.

        Raises a NeedsMergeError if the total token balance is sufficient but spread over several outputs, merge the
        token outputs and try again. Raises an InsufficientBalanceError if the total balance is too low.

        :param contract_txid: Transaction ID of the token contract
        :type contract_txid: str
        :param address_or_hash: Address or 40 character hexadecimal hash
        :type address_or_hash: str
        :param amount: Required amount in base units of the token
        :type amount: int
        :param code_script: Token code script to attach to the output
        :type code_script: str

        :return UnspentOutput:
        """
        utxos = self.client.getftutxos(self._lookup(address_or_hash), contract_txid, code_script)
        utxo = first_sufficient_output(utxos, amount, key=lambda u: u.ft_balance)
        if utxo:
            return utxo
        total = self.ft_balance(contract_txid, address_or_hash)
        if utxos and total >= amount:
            raise NeedsMergeError("Insufficient FT balance in a single output (total %d), please merge FT UTXOs" %
                                  total)
        raise InsufficientBalanceError("Insufficient FT balance: %d available, %d required" % (total, amount))

    def fetch_ft_utxos(self, contract_txid, address_or_hash, number, code_script):
        """
        Get up to number token outputs of an address or hash, in the order returned by the service.

        :param contract_txid: Transaction ID of the token contract
        :type contract_txid: str
        :param address_or_hash: Address or 40 character hexadecimal hash
        :type address_or_hash: str
        :param number: Number of outputs, between 1 and 5
        :type number: int
        :param code_script: Token code script to attach to the outputs
        :type code_script: str

        :return list of UnspentOutput:
        """
        if isinstance(number, bool) or not isinstance(number, int) or number < 1:
            raise InvalidArgumentError("%s is not a natural number" % number)
        elif number > MAX_FT_UTXOS:
            raise InvalidArgumentError("The number of FT UTXOs should not exceed %d" % MAX_FT_UTXOS)
        utxos = self.client.getftutxos(self._lookup(address_or_hash), contract_txid, code_script)
        return utxos[:number]

    def fetch_ft_info(self, contract_txid):
        """
        Get fungible token information for a token contract

        :param contract_txid: Transaction ID of the token contract
        :type contract_txid: str

        :return FungibleTokenInfo:
        """
        return self.client.getftinfo(contract_txid)

    def fetch_ft_prepre_txdata(self, parent_tx, parent_output_n):
        """
        Get pre-pre transaction data needed to unlock a token output. See :func:`build_prepre_txdata`

        :param parent_tx: Transaction holding the token output
        :param parent_output_n: Output number of the token output
        :type parent_output_n: int

        :return str:
        """
        return build_prepre_txdata(parent_tx, parent_output_n, self.fetch_raw_transaction, self.toolkit)

    def getrawtransaction(self, txid):
        """
        Get raw transaction as hexadecimal string

        :param txid: Transaction ID
        :type txid: str

        :return str:
        """
        return self.client.getrawtransaction(txid)

    def fetch_raw_transaction(self, txid):
        """
        Get transaction by its transaction ID and parse it with the toolkit.

        :param txid: Transaction ID
        :type txid: str

        :return: Transaction object of the toolkit
        """
        return self.toolkit.parse_transaction(self.getrawtransaction(txid))

    def broadcast(self, rawtx):
        """
        Push a raw transaction to the network. An error reported by the service is logged, not raised.

        :param rawtx: Raw signed transaction as hexadecimal string
        :type rawtx: str

        :return str: Transaction ID reported by the service
        """
        res = self.client.sendrawtransaction(rawtx)
        self.results = res
        _logger.info("txid: %s" % res['txid'])
        if res['error']:
            _logger.warning("Broadcast error: %s" % res['error'])
        return res['txid']

    def fetch_utxos(self, address):
        """
        Get all unspent outputs of an address

        :param address: Address
        :type address: str

        :return list of UnspentOutput:
        """
        return self.client.getutxos(address, self.toolkit.p2pkh_script(address))

    def select_utxos(self, address, amount_tbc):
        """
        Select unspent outputs of an address to pay an amount. See :func:`select_outputs`

        :param address: Address
        :type address: str
        :param amount_tbc: Amount in TBC
        :type amount_tbc: int, float, str, Decimal

        :return list of UnspentOutput:
        """
        return select_outputs(self.fetch_utxos(address), tbc_to_units(amount_tbc))

    def fetch_utxo(self, private_key, amount_tbc):
        """
        Get a single unspent output of the address of the private key with a value higher than the amount.

        If the balance is sufficient but spread over several outputs, the outputs are merged with
        :func:`merge_utxos` and fetched again, at most max_merge_attempts times.

        :param private_key: Private key, as accepted by the toolkit
        :param amount_tbc: Amount in TBC
        :type amount_tbc: int, float, str, Decimal

        :return UnspentOutput:
        """
        address = self.toolkit.key_address(private_key)
        amount = tbc_to_units(amount_tbc)
        attempt = 0
        while True:
            utxos = self.fetch_utxos(address)
            utxo = first_sufficient_output(utxos, amount, inclusive=False)
            if utxo:
                return utxo
            total = sum(u.value for u in utxos)
            if len(utxos) <= 1 or total <= amount:
                raise InsufficientBalanceError("Insufficient balance: %d available, more than %d required" %
                                               (total, amount))
            if attempt >= self.max_merge_attempts:
                raise NeedsMergeError("No single output of %s covers %d after %d merge attempts" %
                                      (address, amount, attempt))
            attempt += 1
            _logger.info("Please merge UTXO! Merge attempt %d for %s" % (attempt, address))
            self.sleep(MERGE_DELAY_BEFORE)
            self.merge_utxos(private_key)
            self.sleep(MERGE_DELAY_AFTER)

    def merge_utxos(self, private_key):
        """
        Merge all unspent outputs of the address of the private key into a single output.

        Merge transactions are created and broadcasted until the service reports a single output, at most
        max_merge_rounds times.

        :param private_key: Private key, as accepted by the toolkit

        :return bool: True when merged
        """
        address = self.toolkit.key_address(private_key)
        for merge_round in range(self.max_merge_rounds + 1):
            utxos = self.fetch_utxos(address)
            if not utxos:
                raise InsufficientBalanceError("No UTXO available for %s" % address)
            if len(utxos) == 1:
                _logger.info("Merge Success!")
                return True
            if merge_round == self.max_merge_rounds:
                break
            rawtx = self.toolkit.build_merge_transaction(private_key, utxos, self.merge_fee)
            self.broadcast(rawtx)
            self.sleep(MERGE_ROUND_DELAY)
        raise NeedsMergeError("Outputs of %s not merged after %d rounds" % (address, self.max_merge_rounds))

    def fetch_nft_utxo(self, script, txid=None):
        """
        Get an unspent output for a NFT locking script.

        :param script: Locking script as hexadecimal string
        :type script: str
        :param txid: Only return an output of this transaction, the output with the lowest output number
        :type txid: str

        :return UnspentOutput:
        """
        utxos = self.client.getscriptutxos(script_hash(script, self.toolkit), script)
        if txid:
            utxos = [u for u in utxos if u.txid == txid]
            if not utxos:
                raise NotFoundError("No matching UTXO found for transaction %s" % txid)
            return min(utxos, key=lambda u: u.output_n)
        if not utxos:
            raise NotFoundError("No UTXO found for script")
        return utxos[0]

    def fetch_nft_info(self, contract_id):
        """
        Get non-fungible token information for a NFT contract

        :param contract_id: NFT contract ID
        :type contract_id: str

        :return NonFungibleTokenInfo:
        """
        infos = self.client.getnftinfos([contract_id])
        if not infos:
            raise NotFoundError("No NFT information found for contract %s" % contract_id)
        return infos[0]
