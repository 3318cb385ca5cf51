# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    Base Client
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

import json
import requests
from tbcapi.main import *
from tbcapi.networks import Network

_logger = logging.getLogger(__name__)


class ClientError(Exception):
    def __init__(self, msg=''):
        self.msg = msg
        _logger.info(msg)

    def __str__(self):
        return self.msg


class NetworkError(ClientError):
    """
    Transport failure, timeout, non-success HTTP status or undecodable response from the REST service
    """


class InvalidInputError(ClientError):
    """
    Malformed address, hash or other input value
    """


class InvalidArgumentError(InvalidInputError):
    """
    Argument outside of its allowed range
    """


class InsufficientBalanceError(ClientError):
    """
    Available funds are below the required amount
    """


class NeedsMergeError(ClientError):
    """
    Funds are sufficient in aggregate but fragmented over several outputs. Merge the outputs and try again.
    """


class NotFoundError(ClientError):
    """
    No matching record found
    """


class BaseClient(object):

    def __init__(self, network, provider, base_url=None, timeout=TIMEOUT_REQUESTS):
        self.network = network
        if not isinstance(network, Network):
            self.network = Network(network, base_url=base_url)
        self.provider = provider
        self.base_url = base_url if base_url else self.network.base_url
        if not self.base_url.endswith('/'):
            self.base_url += '/'
        self.resp = None
        self.timeout = timeout

    def request(self, url_path, method='get', secure=True, post_data=None):
        url = self.base_url + url_path
        headers = {
            'User-Agent': 'TbcApi/%s' % TBCAPI_VERSION,
            'Accept': 'application/json',
            'Content-Type': 'application/json',
        }
        try:
            if method == 'get':
                _logger.info("Url get request %s" % url)
                self.resp = requests.get(url, timeout=self.timeout, verify=secure, headers=headers)
            elif method == 'post':
                _logger.info("Url post request %s" % url)
                self.resp = requests.post(url, json=post_data, timeout=self.timeout, verify=secure,
                                          headers=headers)
            else:
                raise InvalidArgumentError("Unknown request method %s" % method)
        except requests.exceptions.RequestException as e:
            raise NetworkError("Error connecting to %s on url %s: %s" % (self.provider, url, e))

        resp_text = self.resp.text
        if len(resp_text) > MAX_RESPONSE_LOG_LENGTH:
            resp_text = self.resp.text[:MAX_RESPONSE_LOG_LENGTH - 30] + '... truncated, length %d' % len(resp_text)
        _logger.debug("Response [%d] %s" % (self.resp.status_code, resp_text))
        if self.resp.status_code == 429:
            raise NetworkError("Maximum number of requests reached for %s with url %s, response [%d] %s" %
                               (self.provider, url, self.resp.status_code, resp_text))
        elif not (self.resp.status_code == 200 or self.resp.status_code == 201):
            raise NetworkError("Error connecting to %s on url %s, response [%d] %s" %
                               (self.provider, url, self.resp.status_code, resp_text))
        try:
            return json.loads(self.resp.text)
        except json.decoder.JSONDecodeError:
            raise NetworkError("Could not decode response from %s on url %s: %s" % (self.provider, url, resp_text))
