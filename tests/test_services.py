# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    Unit Tests for Service Class
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
import unittest
import requests
from unittest import mock
from tbcapi.services.services import *
from tbcapi.outputs import UnspentOutput
from tests.test_custom import CustomAssertions, FakeExplorer, FakeTransaction, MockToolkit, Sequential, \
    fake_response, BASE_URL

ADDRESS = '1TestAddressForTheMockToolkit'
PKH = 'ab' * 20
KEY = 'private-key-1'
HASH = 'cd' * 20
CONTRACT = 'c0' * 32
CODE_SCRIPT = '0123456789abcdef'
TXID1 = '11' * 32
TXID2 = '22' * 32
TXID3 = '33' * 32

FT_UTXO_PATH = 'ft/utxo/combine/script/%s00/contract/%s' % (PKH, CONTRACT)
FT_BALANCE_PATH = 'ft/balance/combine/script/%s00/contract/%s' % (PKH, CONTRACT)
UNSPENT_PATH = 'address/%s/unspent/' % ADDRESS


def ft_utxo_list(*balances):
    return {'ftUtxoList': [{'utxoId': '%02x' % n * 32, 'utxoVout': n, 'utxoBalance': 500, 'ftBalance': b}
                           for n, b in enumerate(balances)]}


def unspent_list(*values):
    return [{'tx_hash': '%02x' % (n + 1) * 32, 'tx_pos': n, 'height': 800000 + n, 'value': v}
            for n, v in enumerate(values)]


# Wrapper class for the Service: mock toolkit, test base url and no waiting
class ServiceTest(Service):

    def __init__(self, network='testnet', base_url=BASE_URL, toolkit=None, **kwargs):
        self.sleeps = []
        if toolkit is None:
            toolkit = MockToolkit(addresses={ADDRESS: PKH}, keys={KEY: ADDRESS})
        super(self.__class__, self).__init__(network, base_url=base_url, toolkit=toolkit, sleep=self.sleeps.append,
                                             **kwargs)


class TestServiceNetwork(unittest.TestCase):

    def test_service_default_network(self):
        srv = Service(toolkit=MockToolkit())
        self.assertEqual(srv.network.name, 'mainnet')
        self.assertEqual(srv.base_url, 'https://turingwallet.xyz/v1/tbc/main/')

    def test_service_testnet(self):
        srv = Service(network='testnet', toolkit=MockToolkit())
        self.assertEqual(srv.base_url, 'https://tbcdev.org/v1/tbc/main/')
        self.assertEqual(srv.client.base_url, 'https://tbcdev.org/v1/tbc/main/')

    def test_service_base_url_override(self):
        srv = Service(network='testnet', base_url='http://localhost:8080/api', toolkit=MockToolkit())
        self.assertEqual(srv.base_url, 'http://localhost:8080/api/')
        self.assertEqual(srv.network.name, 'testnet')

    def test_service_default_toolkit(self):
        from tbcapi.toolkit import BitcoinlibToolkit
        srv = Service(network='testnet')
        self.assertIsInstance(srv.toolkit, BitcoinlibToolkit)
        self.assertEqual(srv.toolkit.network.name, 'testnet')


class TestServiceFungibleTokens(unittest.TestCase, CustomAssertions):

    def test_service_ft_balance_address(self):
        fe = FakeExplorer({FT_BALANCE_PATH: {'ftBalance': 1250000}})
        with fe.patch():
            self.assertEqual(ServiceTest().ft_balance(CONTRACT, ADDRESS), 1250000)
        self.assertEqual(fe.paths(), [FT_BALANCE_PATH])

    def test_service_ft_balance_hash(self):
        path = 'ft/balance/combine/script/%s01/contract/%s' % (HASH, CONTRACT)
        fe = FakeExplorer({path: {'ftBalance': 7}})
        with fe.patch():
            self.assertEqual(ServiceTest().ft_balance(CONTRACT, HASH), 7)

    def test_service_ft_balance_invalid(self):
        fe = FakeExplorer()
        with fe.patch():
            self.assertRaisesRegex(InvalidInputError, "Invalid address or hash", ServiceTest().ft_balance,
                                   CONTRACT, 'not-an-address')
        self.assertEqual(fe.requests, [])

    def test_service_fetch_ft_utxo(self):
        fe = FakeExplorer({FT_UTXO_PATH: ft_utxo_list(10, 50, 80)})
        with fe.patch():
            utxo = ServiceTest().fetch_ft_utxo(CONTRACT, ADDRESS, 40, CODE_SCRIPT)
        self.assertEqual(utxo.as_dict(), {
            'txId': '01' * 32,
            'outputIndex': 1,
            'script': CODE_SCRIPT,
            'satoshis': 500,
            'ftBalance': 50,
        })

    def test_service_fetch_ft_utxo_exact_amount(self):
        fe = FakeExplorer({FT_UTXO_PATH: ft_utxo_list(80, 50)})
        with fe.patch():
            self.assertEqual(ServiceTest().fetch_ft_utxo(CONTRACT, ADDRESS, 80, CODE_SCRIPT).ft_balance, 80)

    def test_service_fetch_ft_utxo_needs_merge(self):
        fe = FakeExplorer({FT_UTXO_PATH: ft_utxo_list(10, 20), FT_BALANCE_PATH: {'ftBalance': 30}})
        with fe.patch():
            self.assertRaisesRegex(NeedsMergeError, "please merge FT UTXOs", ServiceTest().fetch_ft_utxo,
                                   CONTRACT, ADDRESS, 25, CODE_SCRIPT)
        self.assertEqual(fe.paths(), [FT_UTXO_PATH, FT_BALANCE_PATH])

    def test_service_fetch_ft_utxo_insufficient(self):
        fe = FakeExplorer({FT_UTXO_PATH: ft_utxo_list(10, 20), FT_BALANCE_PATH: {'ftBalance': 30}})
        with fe.patch():
            self.assertRaises(InsufficientBalanceError, ServiceTest().fetch_ft_utxo, CONTRACT, ADDRESS, 40,
                              CODE_SCRIPT)

    def test_service_fetch_ft_utxo_empty(self):
        fe = FakeExplorer({FT_UTXO_PATH: {'ftUtxoList': []}, FT_BALANCE_PATH: {'ftBalance': 0}})
        with fe.patch():
            self.assertRaises(InsufficientBalanceError, ServiceTest().fetch_ft_utxo, CONTRACT, ADDRESS, 0,
                              CODE_SCRIPT)

    def test_service_fetch_ft_utxos(self):
        fe = FakeExplorer({FT_UTXO_PATH: ft_utxo_list(*range(1, 11))})
        with fe.patch():
            utxos = ServiceTest().fetch_ft_utxos(CONTRACT, ADDRESS, 3, CODE_SCRIPT)
        self.assertEqual([u.ft_balance for u in utxos], [1, 2, 3])
        self.assertTrue(all(u.script == CODE_SCRIPT for u in utxos))

    def test_service_fetch_ft_utxos_less_available(self):
        fe = FakeExplorer({FT_UTXO_PATH: ft_utxo_list(4, 9)})
        with fe.patch():
            self.assertEqual(len(ServiceTest().fetch_ft_utxos(CONTRACT, ADDRESS, 5, CODE_SCRIPT)), 2)

    def test_service_fetch_ft_utxos_invalid_number(self):
        fe = FakeExplorer({FT_UTXO_PATH: ft_utxo_list(4, 9)})
        srv = ServiceTest()
        with fe.patch():
            for number in [0, -1, 2.5, '3', True]:
                self.assertRaisesRegex(InvalidArgumentError, "is not a natural number", srv.fetch_ft_utxos,
                                       CONTRACT, ADDRESS, number, CODE_SCRIPT)
            self.assertRaisesRegex(InvalidArgumentError, "should not exceed 5", srv.fetch_ft_utxos,
                                   CONTRACT, ADDRESS, 7, CODE_SCRIPT)
        self.assertEqual(fe.requests, [])

    def test_service_fetch_ft_info(self):
        fe = FakeExplorer({'ft/info/contract/id/%s' % CONTRACT: {
            'ftCodeScript': 'c0de', 'ftTapeScript': '7a9e', 'ftSupply': 21000000, 'ftDecimal': 6,
            'ftName': 'Test Token', 'ftSymbol': 'TTK', 'ftContractId': CONTRACT}})
        with fe.patch():
            info = ServiceTest().fetch_ft_info(CONTRACT)
        self.assertDictEqualExt(info.as_dict(), {
            'contract_txid': CONTRACT,
            'code_script': 'c0de',
            'tape_script': '7a9e',
            'total_supply': 21000000,
            'decimal': 6,
            'name': 'Test Token',
            'symbol': 'TTK',
        })

    def test_service_fetch_ft_info_unexpected_response(self):
        fe = FakeExplorer({'ft/info/contract/id/%s' % CONTRACT: {'message': 'contract not found'}})
        with fe.patch():
            self.assertRaisesRegex(NetworkError, "Unexpected response", ServiceTest().fetch_ft_info, CONTRACT)

    def test_service_fetch_ft_prepre_txdata(self):
        tape = bytes.fromhex('000000') + bytes(8) + (5).to_bytes(8, 'little') + bytes(32)
        parent = FakeTransaction(TXID1, inputs=[(TXID2, 0), (TXID3, 2)], outputs=[b'\x51', tape])
        toolkit = MockToolkit(transactions={'raw3': FakeTransaction('3a3b' + '00' * 30)})
        fe = FakeExplorer({'tx/hex/%s' % TXID3: 'raw3'})
        with fe.patch():
            self.assertEqual(ServiceTest(toolkit=toolkit).fetch_ft_prepre_txdata(parent, 0), '573a3b02')
        self.assertEqual(fe.paths(), ['tx/hex/%s' % TXID3])


class TestServiceUnspentOutputs(unittest.TestCase):

    def test_service_fetch_utxos(self):
        fe = FakeExplorer({UNSPENT_PATH: unspent_list(1000, 2500)})
        with fe.patch():
            utxos = ServiceTest().fetch_utxos(ADDRESS)
        self.assertEqual(utxos, [UnspentOutput('01' * 32, 0, '76a914%s88ac' % PKH, 1000),
                                 UnspentOutput('02' * 32, 1, '76a914%s88ac' % PKH, 2500)])

    def test_service_select_utxos_accumulate(self):
        fe = FakeExplorer({UNSPENT_PATH: unspent_list(3000, 1000, 1500)})
        with fe.patch():
            utxos = ServiceTest().select_utxos(ADDRESS, 0.0005)
        self.assertEqual([u.value for u in utxos], [1000, 1500])

    def test_service_select_utxos_single(self):
        fe = FakeExplorer({UNSPENT_PATH: unspent_list(90000, 100, 60000, 5000)})
        with fe.patch():
            utxos = ServiceTest().select_utxos(ADDRESS, '0.006')
        self.assertEqual([u.value for u in utxos], [60000])

    def test_service_select_utxos_insufficient(self):
        fe = FakeExplorer({UNSPENT_PATH: unspent_list(100, 200, 300)})
        with fe.patch():
            self.assertRaises(InsufficientBalanceError, ServiceTest().select_utxos, ADDRESS, 0.00055)

    def test_service_fetch_utxo_single(self):
        fe = FakeExplorer({UNSPENT_PATH: unspent_list(20000)})
        with fe.patch():
            self.assertEqual(ServiceTest().fetch_utxo(KEY, 0.01).value, 20000)

    def test_service_fetch_utxo_single_insufficient(self):
        fe = FakeExplorer({UNSPENT_PATH: unspent_list(10000)})
        with fe.patch():
            self.assertRaises(InsufficientBalanceError, ServiceTest().fetch_utxo, KEY, 0.01)

    def test_service_fetch_utxo_none(self):
        fe = FakeExplorer({UNSPENT_PATH: []})
        with fe.patch():
            self.assertRaises(InsufficientBalanceError, ServiceTest().fetch_utxo, KEY, 0.01)

    def test_service_fetch_utxo_first_sufficient(self):
        fe = FakeExplorer({UNSPENT_PATH: unspent_list(5000, 30000, 12000)})
        with fe.patch():
            self.assertEqual(ServiceTest().fetch_utxo(KEY, 0.01).value, 30000)

    def test_service_fetch_utxo_total_insufficient(self):
        fe = FakeExplorer({UNSPENT_PATH: unspent_list(5000, 4000)})
        srv = ServiceTest()
        with fe.patch():
            self.assertRaises(InsufficientBalanceError, srv.fetch_utxo, KEY, 0.01)
        self.assertEqual(srv.toolkit.merged, [])

    def test_service_fetch_utxo_merge(self):
        fe = FakeExplorer({
            UNSPENT_PATH: Sequential(unspent_list(2000, 3000), unspent_list(2000, 3000), unspent_list(4500)),
            'broadcast/tx/raw': {'result': TXID3, 'error': None},
        })
        srv = ServiceTest()
        with fe.patch():
            utxo = srv.fetch_utxo(KEY, 0.004)
        self.assertEqual(utxo.value, 4500)
        self.assertEqual(srv.toolkit.merged, [(KEY, ['01' * 32, '02' * 32], 500)])
        self.assertEqual(srv.sleeps, [3, 3, 5])
        self.assertEqual([body for m, _, body in fe.requests if m == 'post'], [{'txHex': 'merge01'}])

    def test_service_fetch_utxo_max_merge_attempts(self):
        fe = FakeExplorer({UNSPENT_PATH: unspent_list(2000, 3000)})
        srv = ServiceTest(max_merge_attempts=0)
        with fe.patch():
            self.assertRaisesRegex(NeedsMergeError, "after 0 merge attempts", srv.fetch_utxo, KEY, 0.004)
        self.assertEqual(srv.toolkit.merged, [])

    def test_service_merge_utxos_max_rounds(self):
        fe = FakeExplorer({
            UNSPENT_PATH: unspent_list(2000, 3000),
            'broadcast/tx/raw': {'result': TXID3},
        })
        srv = ServiceTest(max_merge_rounds=2)
        with fe.patch():
            self.assertRaisesRegex(NeedsMergeError, "not merged after 2 rounds", srv.merge_utxos, KEY)
        self.assertEqual(len(srv.toolkit.merged), 2)
        self.assertEqual(fe.paths('get'), [UNSPENT_PATH] * 3)

    def test_service_merge_utxos_single(self):
        fe = FakeExplorer({UNSPENT_PATH: unspent_list(2000)})
        srv = ServiceTest()
        with fe.patch():
            self.assertTrue(srv.merge_utxos(KEY))
        self.assertEqual(fe.paths('post'), [])

    def test_service_merge_utxos_none(self):
        fe = FakeExplorer({UNSPENT_PATH: []})
        with fe.patch():
            self.assertRaisesRegex(InsufficientBalanceError, "No UTXO available", ServiceTest().merge_utxos, KEY)


class TestServiceNonFungibleTokens(unittest.TestCase, CustomAssertions):

    script = '76a914' + 'ef' * 20 + '88ac'

    def _script_path(self):
        script_hash = hashlib.sha256(bytes.fromhex(self.script)).digest()[::-1].hex()
        return 'script/hash/%s/unspent' % script_hash

    def test_service_fetch_nft_utxo(self):
        fe = FakeExplorer({self._script_path(): unspent_list(100, 200)})
        with fe.patch():
            utxo = ServiceTest().fetch_nft_utxo(self.script)
        self.assertEqual(utxo, UnspentOutput('01' * 32, 0, self.script, 100))

    def test_service_fetch_nft_utxo_txid(self):
        res = [
            {'tx_hash': TXID1, 'tx_pos': 0, 'height': 1, 'value': 100},
            {'tx_hash': TXID2, 'tx_pos': 3, 'height': 1, 'value': 200},
            {'tx_hash': TXID2, 'tx_pos': 1, 'height': 1, 'value': 300},
        ]
        fe = FakeExplorer({self._script_path(): res})
        with fe.patch():
            utxo = ServiceTest().fetch_nft_utxo(self.script, txid=TXID2)
        self.assertEqual((utxo.txid, utxo.output_n, utxo.value), (TXID2, 1, 300))

    def test_service_fetch_nft_utxo_not_found(self):
        fe = FakeExplorer({self._script_path(): unspent_list(100)})
        srv = ServiceTest()
        with fe.patch():
            self.assertRaisesRegex(NotFoundError, "No matching UTXO", srv.fetch_nft_utxo, self.script, TXID3)
        fe = FakeExplorer({self._script_path(): []})
        with fe.patch():
            self.assertRaises(NotFoundError, srv.fetch_nft_utxo, self.script)

    def test_service_fetch_nft_info(self):
        nft = {
            'collectionId': TXID1, 'collectionIndex': 3, 'collectionName': 'Turing Cats', 'nftCodeBalance': 200,
            'nftP2pkhBalance': 100, 'nftName': 'Cat #3', 'nftSymbol': 'CAT', 'nft_attributes': '{"color": "red"}',
            'nftDescription': 'A red cat', 'nftTransferTimeCount': 2, 'nftIcon': 'aWNvbg==',
        }
        fe = FakeExplorer({'nft/infos/contract_ids': {'nftInfoList': [nft]}})
        with fe.patch():
            info = ServiceTest().fetch_nft_info(TXID2)
        self.assertDictEqualExt(info.as_dict(), {
            'collection_id': TXID1,
            'collection_index': 3,
            'collection_name': 'Turing Cats',
            'code_balance': 200,
            'p2pkh_balance': 100,
            'name': 'Cat #3',
            'symbol': 'CAT',
            'attributes': '{"color": "red"}',
            'description': 'A red cat',
            'transfer_count': 2,
            'icon': 'aWNvbg==',
        })
        self.assertEqual(fe.requests[0][2], {'if_icon_needed': True, 'nft_contract_list': [TXID2]})

    def test_service_fetch_nft_info_not_found(self):
        fe = FakeExplorer({'nft/infos/contract_ids': {'nftInfoList': []}})
        with fe.patch():
            self.assertRaises(NotFoundError, ServiceTest().fetch_nft_info, TXID2)


class TestServiceTransactions(unittest.TestCase):

    def test_service_getrawtransaction(self):
        fe = FakeExplorer({'tx/hex/%s' % TXID1: '0a000000'})
        with fe.patch():
            self.assertEqual(ServiceTest().getrawtransaction(TXID1), '0a000000')

    def test_service_fetch_raw_transaction(self):
        tx = FakeTransaction(TXID1)
        fe = FakeExplorer({'tx/hex/%s' % TXID1: '0a000000'})
        with fe.patch():
            self.assertIs(ServiceTest(toolkit=MockToolkit(transactions={'0a000000': tx})).fetch_raw_transaction(TXID1),
                          tx)

    def test_service_broadcast(self):
        fe = FakeExplorer({'broadcast/tx/raw': {'result': TXID2}})
        srv = ServiceTest()
        with fe.patch():
            self.assertEqual(srv.broadcast('0a000000'), TXID2)
        self.assertEqual(fe.requests[0][2], {'txHex': '0a000000'})
        self.assertEqual(srv.results['txid'], TXID2)

    def test_service_broadcast_error_logged(self):
        fe = FakeExplorer({'broadcast/tx/raw': {'result': TXID2, 'error': 'txn-mempool-conflict'}})
        with fe.patch():
            with self.assertLogs('tbcapi.services.services', level='WARNING') as cm:
                self.assertEqual(ServiceTest().broadcast('0a000000'), TXID2)
        self.assertIn('txn-mempool-conflict', cm.output[0])

    def test_service_http_error(self):
        fe = FakeExplorer({'tx/hex/%s' % TXID1: fake_response('Internal Server Error', 500)})
        with fe.patch():
            self.assertRaisesRegex(NetworkError, r"response \[500\]", ServiceTest().getrawtransaction, TXID1)

    def test_service_http_not_found(self):
        with FakeExplorer().patch():
            self.assertRaises(NetworkError, ServiceTest().getrawtransaction, TXID1)

    def test_service_rate_limited(self):
        fe = FakeExplorer({'tx/hex/%s' % TXID1: fake_response('Too Many Requests', 429)})
        with fe.patch():
            self.assertRaisesRegex(NetworkError, "Maximum number of requests", ServiceTest().getrawtransaction,
                                   TXID1)

    def test_service_connection_error(self):
        with mock.patch('tbcapi.services.baseclient.requests.get',
                        side_effect=requests.exceptions.ConnectionError('connection refused')):
            self.assertRaisesRegex(NetworkError, "connection refused", ServiceTest().getrawtransaction, TXID1)

    def test_service_timeout(self):
        with mock.patch('tbcapi.services.baseclient.requests.post', side_effect=requests.exceptions.Timeout()):
            self.assertRaises(NetworkError, ServiceTest().broadcast, '0a000000')

    def test_service_invalid_json(self):
        fe = FakeExplorer({'tx/hex/%s' % TXID1: mock.Mock(status_code=200, text='<html>maintenance</html>')})
        with fe.patch():
            self.assertRaisesRegex(NetworkError, "Could not decode response", ServiceTest().getrawtransaction,
                                   TXID1)


if __name__ == '__main__':
    unittest.main()
