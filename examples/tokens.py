# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#
#    EXAMPLES - Fungible and non-fungible token information
#
#    © 2024 October - TbcApi developers
#

from pprint import pprint
from tbcapi.services.services import *
from tbcapi.values import ft_amount_to_units, units_to_ft_amount

contract_txid = 'b1a8f6b3a3e0a6f1d8e6f3ad9d2e3c7e5b1c4d6f8a2b9c0e1d3f5a7b9c1d3e5f'
address = 'mqR6Dndmez8WMpb1hBJbGbrQ2mpAU73hQC'
srv = Service(network='testnet')

try:
    info = srv.fetch_ft_info(contract_txid)
except ClientError as e:
    print("Could not get token information: %s" % e)
else:
    print("Token information:")
    pprint(info.as_dict())

    balance = srv.ft_balance(contract_txid, address)
    print("\nBalance of %s: %s %s" % (address, units_to_ft_amount(balance, info.decimal), info.symbol))

    # Find a token output to transfer 1.5 tokens
    amount = ft_amount_to_units('1.5', info.decimal)
    try:
        utxo = srv.fetch_ft_utxo(contract_txid, address, amount, info.code_script)
        print("\nToken output:", utxo)
        parent_tx = srv.fetch_raw_transaction(utxo.txid)
        print("Pre-pre transaction data: %s" % srv.fetch_ft_prepre_txdata(parent_tx, utxo.output_n))
    except NeedsMergeError:
        print("\nToken balance is spread over several outputs, merge the token outputs first")
    except InsufficientBalanceError as e:
        print("\n%s" % e)

# Non-fungible token information
nft_contract = 'e2c7f4a1b3d5e7f9a1c3e5b7d9f1a3c5e7b9d1f3a5c7e9b1d3f5a7c9e1b3d5f7'
try:
    pprint(srv.fetch_nft_info(nft_contract).as_dict())
except NotFoundError:
    print("NFT %s not found" % nft_contract)
