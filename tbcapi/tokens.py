# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    TOKENS - Fungible and non-fungible token information
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


class FungibleTokenInfo(object):
    """
    Fungible token contract information: code and tape scripts, supply and display settings.
    """

    def __init__(self, code_script, tape_script, total_supply, decimal, name, symbol, contract_txid=None):
        if isinstance(decimal, bool) or not isinstance(decimal, int) or decimal < 0:
            raise InvalidInputError("Token decimal must be a non-negative integer, not %s" % decimal)
        self.contract_txid = contract_txid
        self.code_script = code_script
        self.tape_script = tape_script
        self.total_supply = total_supply
        self.decimal = decimal
        self.name = name
        self.symbol = symbol

    @classmethod
    def from_response(cls, data, contract_txid=None):
        """
        Create FungibleTokenInfo from a 'ft/info/contract/id' response dictionary

        :param data: Decoded JSON response
        :type data: dict
        :param contract_txid: Contract transaction ID the information was requested for
        :type contract_txid: str

        :return FungibleTokenInfo:
        """
        return cls(
            code_script=data['ftCodeScript'],
            tape_script=data['ftTapeScript'],
            total_supply=data['ftSupply'],
            decimal=data['ftDecimal'],
            name=data['ftName'],
            symbol=data['ftSymbol'],
            contract_txid=contract_txid,
        )

    def as_dict(self):
        return {
            'contract_txid': self.contract_txid,
            'code_script': self.code_script,
            'tape_script': self.tape_script,
            'total_supply': self.total_supply,
            'decimal': self.decimal,
            'name': self.name,
            'symbol': self.symbol,
        }

    def __repr__(self):
        return "<FungibleTokenInfo(%s, symbol=%s, decimal=%d)>" % (self.name, self.symbol, self.decimal)


class NonFungibleTokenInfo(object):
    """
    Read-only snapshot of the metadata of a non-fungible token and its collection
    """

    def __init__(self, collection_id, collection_index, collection_name, code_balance, p2pkh_balance, name,
                 symbol, attributes, description, transfer_count, icon):
        self.collection_id = collection_id
        self.collection_index = collection_index
        self.collection_name = collection_name
        self.code_balance = code_balance
        self.p2pkh_balance = p2pkh_balance
        self.name = name
        self.symbol = symbol
        self.attributes = attributes
        self.description = description
        self.transfer_count = transfer_count
        self.icon = icon

    @classmethod
    def from_response(cls, data):
        """
        Create NonFungibleTokenInfo from an item of the 'nftInfoList' of a 'nft/infos/contract_ids' response

        :param data: Decoded JSON item
        :type data: dict

        :return NonFungibleTokenInfo:
        """
        return cls(
            collection_id=data['collectionId'],
            collection_index=data['collectionIndex'],
            collection_name=data['collectionName'],
            code_balance=data['nftCodeBalance'],
            p2pkh_balance=data['nftP2pkhBalance'],
            name=data['nftName'],
            symbol=data['nftSymbol'],
            attributes=data['nft_attributes'],
            description=data['nftDescription'],
            transfer_count=data['nftTransferTimeCount'],
            icon=data['nftIcon'],
        )

    def as_dict(self):
        return {
            'collection_id': self.collection_id,
            'collection_index': self.collection_index,
            'collection_name': self.collection_name,
            'code_balance': self.code_balance,
            'p2pkh_balance': self.p2pkh_balance,
            'name': self.name,
            'symbol': self.symbol,
            'attributes': self.attributes,
            'description': self.description,
            'transfer_count': self.transfer_count,
            'icon': self.icon,
        }

    def __repr__(self):
        return "<NonFungibleTokenInfo(%s, collection=%s, index=%s)>" % \
               (self.name, self.collection_name, self.collection_index)
