# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    TuringApiClient client
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

import logging
from tbcapi.services.baseclient import BaseClient, NetworkError, NotFoundError
from tbcapi.outputs import UnspentOutput
from tbcapi.tokens import FungibleTokenInfo, NonFungibleTokenInfo

PROVIDERNAME = 'turingapi'

_logger = logging.getLogger(__name__)


class TuringApiClient(BaseClient):

    def __init__(self, network, base_url=None, *args):
        super(self.__class__, self).__init__(network, PROVIDERNAME, base_url, *args)

    def compose_request(self, function, data='', parameter='', parameter2='', post_data=None, method='get'):
        url_path = function
        if data:
            url_path += '/' + data
        if parameter:
            url_path += '/' + parameter
        if parameter2:
            url_path += '/' + parameter2
        return self.request(url_path, method, post_data=post_data)

    def _unexpected(self, function, error):
        return NetworkError("Unexpected response from %s for %s: %s" % (self.provider, function, error))

    def getftbalance(self, lookup_hash, contract_txid):
        res = self.compose_request('ft/balance/combine/script', lookup_hash, 'contract', contract_txid)
        try:
            return int(res['ftBalance'])
        except (KeyError, TypeError, ValueError) as e:
            raise self._unexpected('ft balance', e)

    def getftutxos(self, lookup_hash, contract_txid, code_script):
        res = self.compose_request('ft/utxo/combine/script', lookup_hash, 'contract', contract_txid)
        try:
            return [UnspentOutput(u['utxoId'], u['utxoVout'], code_script, u['utxoBalance'], int(u['ftBalance']))
                    for u in res['ftUtxoList']]
        except (KeyError, TypeError, ValueError) as e:
            raise self._unexpected('ft utxos', e)

    def getftinfo(self, contract_txid):
        res = self.compose_request('ft/info/contract/id', contract_txid)
        try:
            return FungibleTokenInfo.from_response(res, contract_txid=contract_txid)
        except (KeyError, TypeError) as e:
            raise self._unexpected('ft info', e)

    def _parse_unspent(self, res, script):
        try:
            return [UnspentOutput(u['tx_hash'], u['tx_pos'], script, u['value']) for u in res]
        except (KeyError, TypeError) as e:
            raise self._unexpected('unspent outputs', e)

    def getutxos(self, address, script):
        res = self.compose_request('address', address, 'unspent/')
        return self._parse_unspent(res, script)

    def getscriptutxos(self, script_hash, script):
        res = self.compose_request('script/hash', script_hash, 'unspent')
        return self._parse_unspent(res, script)

    def getnftinfos(self, contract_ids, icon_needed=True):
        post_data = {
            'if_icon_needed': icon_needed,
            'nft_contract_list': contract_ids,
        }
        res = self.compose_request('nft/infos/contract_ids', post_data=post_data, method='post')
        try:
            return [NonFungibleTokenInfo.from_response(i) for i in res['nftInfoList']]
        except (KeyError, TypeError) as e:
            raise self._unexpected('nft info', e)

    def getrawtransaction(self, txid):
        res = self.compose_request('tx/hex', txid)
        if not res or not isinstance(res, str):
            raise NotFoundError("Transaction %s not found" % txid)
        return res

    def sendrawtransaction(self, rawtx):
        res = self.compose_request('broadcast/tx/raw', post_data={'txHex': rawtx}, method='post')
        if not isinstance(res, dict):
            raise self._unexpected('broadcast', res)
        return {
            'txid': res.get('result'),
            'error': res.get('error'),
            'response_dict': res
        }
