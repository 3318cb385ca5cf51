# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#
#    EXAMPLES - Query the Turing explorer service
#
#    © 2024 October - TbcApi developers
#

from pprint import pprint
from tbcapi.services.services import *


# Unspent outputs of a testnet address
address = 'mqR6Dndmez8WMpb1hBJbGbrQ2mpAU73hQC'
srv = Service(network='testnet')
print("Unspent outputs of address %s:" % address)
pprint([u.as_dict() for u in srv.fetch_utxos(address)])

# Select outputs to pay 0.01 TBC
try:
    print("\nSelected outputs:")
    pprint(srv.select_utxos(address, 0.01))
except InsufficientBalanceError as e:
    print("Could not select outputs: %s" % e)

# GET Raw Transaction data for given Transaction ID
t = 'd3c7fbd3a4ca1cca789560348a86facb3bb21dcd75ed38e85235fb6a32802955'
print("\nGET Raw Transaction:")
try:
    pprint(srv.getrawtransaction(t))
except ClientError as e:
    print("Transaction not found: %s" % e)

# Use a local explorer instance
srv = Service(network='testnet', base_url='http://localhost:3000/v1/tbc/main', timeout=3)
print("\nLocal service: %s" % srv)
