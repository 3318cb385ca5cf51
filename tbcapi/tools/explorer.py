# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    EXPLORER - Command line access to the explorer service
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

import sys
import argparse
from pprint import pprint
from tbcapi.main import TBCAPI_VERSION, DEFAULT_NETWORK, TIMEOUT_REQUESTS
from tbcapi.networks import NetworkDefinitionError
from tbcapi.services.services import Service, ClientError


def parse_args(args=None):
    parser = argparse.ArgumentParser(description='TbcApi command line access to the Turing explorer service')
    parser.add_argument('--network', '-n', default=DEFAULT_NETWORK,
                        help="Specify 'mainnet' or 'testnet'. Default is %s" % DEFAULT_NETWORK)
    parser.add_argument('--base-url', '-u', default=None,
                        help="Base url of the REST service, overrides the url of the network")
    parser.add_argument('--timeout', '-t', type=int, default=TIMEOUT_REQUESTS,
                        help="Timeout for web requests in seconds")
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Quiet mode, only print results')

    subparsers = parser.add_subparsers(required=True, dest='subparser_name')
    parser_utxos = subparsers.add_parser('utxos', description="List unspent outputs of an address")
    parser_utxos.add_argument('address')
    parser_select = subparsers.add_parser('select', description="Select unspent outputs to pay an amount in TBC")
    parser_select.add_argument('address')
    parser_select.add_argument('amount')
    parser_ft_balance = subparsers.add_parser('ft-balance', description="Fungible token balance of an address "
                                                                        "or hash")
    parser_ft_balance.add_argument('contract')
    parser_ft_balance.add_argument('address', help="Address or 40 character hash")
    parser_ft_info = subparsers.add_parser('ft-info', description="Fungible token contract information")
    parser_ft_info.add_argument('contract')
    parser_ft_utxos = subparsers.add_parser('ft-utxos', description="List fungible token outputs")
    parser_ft_utxos.add_argument('contract')
    parser_ft_utxos.add_argument('address', help="Address or 40 character hash")
    parser_ft_utxos.add_argument('code_script', help="Token code script as hexadecimal string")
    parser_ft_utxos.add_argument('--number', '-m', type=int, default=5,
                                 help="Maximum number of outputs, between 1 and 5. Default is 5")
    parser_nft_info = subparsers.add_parser('nft-info', description="Non-fungible token information")
    parser_nft_info.add_argument('contract')
    parser_rawtx = subparsers.add_parser('rawtx', description="Get raw transaction")
    parser_rawtx.add_argument('txid')
    parser_broadcast = subparsers.add_parser('broadcast', description="Push raw transaction to the network")
    parser_broadcast.add_argument('rawtx')
    return parser.parse_args(args)


def run_command(srv, args):
    if args.subparser_name == 'utxos':
        return [u.as_dict() for u in srv.fetch_utxos(args.address)]
    elif args.subparser_name == 'select':
        return [u.as_dict() for u in srv.select_utxos(args.address, args.amount)]
    elif args.subparser_name == 'ft-balance':
        return srv.ft_balance(args.contract, args.address)
    elif args.subparser_name == 'ft-info':
        return srv.fetch_ft_info(args.contract).as_dict()
    elif args.subparser_name == 'ft-utxos':
        return [u.as_dict() for u in srv.fetch_ft_utxos(args.contract, args.address, args.number,
                                                        args.code_script)]
    elif args.subparser_name == 'nft-info':
        return srv.fetch_nft_info(args.contract).as_dict()
    elif args.subparser_name == 'rawtx':
        return srv.getrawtransaction(args.txid)
    elif args.subparser_name == 'broadcast':
        return srv.broadcast(args.rawtx)


def main(args=None):
    args = parse_args(args)
    if not args.quiet:
        print("Turing Explorer - TbcApi %s\n" % TBCAPI_VERSION)
    try:
        srv = Service(network=args.network, base_url=args.base_url, timeout=args.timeout)
        pprint(run_command(srv, args))
    except (ClientError, NetworkDefinitionError) as e:
        print("%s: %s" % (type(e).__name__, e))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
