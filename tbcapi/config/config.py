# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    CONFIG - Configuration settings
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

import os
import configparser
from pathlib import Path

# General defaults
LOGLEVEL = 'WARNING'

# File locations
TBCAPI_CONFIG_FILE = ''
TBCAPI_INSTALL_DIR = Path(__file__).parents[1]
TBCAPI_DATA_DIR = ''
TBCAPI_LOG_FILE = ''

# Main
ENABLE_TBCAPI_LOGGING = True

# Networks
NETWORK_MAINNET = 'mainnet'
NETWORK_TESTNET = 'testnet'
DEFAULT_NETWORK = NETWORK_MAINNET
NETWORK_BASE_URLS = {
    NETWORK_TESTNET: 'https://tbcdev.org/v1/tbc/main/',
    NETWORK_MAINNET: 'https://turingwallet.xyz/v1/tbc/main/',
}

# Services
TIMEOUT_REQUESTS = 10
MAX_RESPONSE_LOG_LENGTH = 1000

# Lookup key tags appended to a public key hash or a script hash
LOOKUP_TAG_ADDRESS = '00'
LOOKUP_TAG_HASH = '01'

# Unspent outputs
MAX_FT_UTXOS = 5
SELECT_SINGLE_RESERVE = 50000
SELECT_ACCUMULATE_RESERVE = 2000
MERGE_FEE = 500
MERGE_DELAY_BEFORE = 3
MERGE_DELAY_AFTER = 5
MERGE_ROUND_DELAY = 3
MAX_MERGE_ATTEMPTS = 3
MAX_MERGE_ROUNDS = 5

# Ancestor transaction data
PREPRE_TXDATA_MARKER = '57'
PREPRE_TAPE_START = 3
PREPRE_TAPE_END = 51
PREPRE_SLOT_LENGTH = 16


def read_config():
    config = configparser.ConfigParser()

    def config_get(section, var, fallback, is_boolean=False):
        try:
            if is_boolean:
                val = config.getboolean(section, var, fallback=fallback)
            else:
                val = config.get(section, var, fallback=fallback)
            return val
        except (ValueError, configparser.Error):
            return fallback

    global TBCAPI_CONFIG_FILE, TBCAPI_DATA_DIR, TBCAPI_LOG_FILE, LOGLEVEL, ENABLE_TBCAPI_LOGGING
    global DEFAULT_NETWORK, NETWORK_BASE_URLS, TIMEOUT_REQUESTS
    global MERGE_FEE, MAX_MERGE_ATTEMPTS, MAX_MERGE_ROUNDS

    # Read settings from configuration file provided in OS environment or ~/.tbcapi/ directory
    config_file_name = os.environ.get('TBCAPI_CONFIG_FILE')
    if not config_file_name:
        TBCAPI_CONFIG_FILE = Path('~/.tbcapi/config.ini').expanduser()
    else:
        TBCAPI_CONFIG_FILE = Path(config_file_name)
        if not TBCAPI_CONFIG_FILE.is_absolute():
            TBCAPI_CONFIG_FILE = Path(Path.home(), '.tbcapi', TBCAPI_CONFIG_FILE)
        if not TBCAPI_CONFIG_FILE.exists():
            raise IOError('TbcApi configuration file not found: %s' % str(TBCAPI_CONFIG_FILE))
    data = config.read(str(TBCAPI_CONFIG_FILE))
    TBCAPI_DATA_DIR = Path(config_get('locations', 'data_dir', fallback='~/.tbcapi')).expanduser()

    # Log settings
    ENABLE_TBCAPI_LOGGING = config_get('logs', 'enable_logging', fallback=True, is_boolean=True)
    TBCAPI_LOG_FILE = Path(TBCAPI_DATA_DIR, config_get('logs', 'log_file', fallback='tbcapi.log'))
    LOGLEVEL = config_get('logs', 'loglevel', fallback=LOGLEVEL)

    # Network settings
    DEFAULT_NETWORK = config_get('common', 'default_network', fallback=DEFAULT_NETWORK)
    NETWORK_BASE_URLS = {
        NETWORK_TESTNET: config_get('urls', NETWORK_TESTNET, fallback=NETWORK_BASE_URLS[NETWORK_TESTNET]),
        NETWORK_MAINNET: config_get('urls', NETWORK_MAINNET, fallback=NETWORK_BASE_URLS[NETWORK_MAINNET]),
    }

    # Service settings
    TIMEOUT_REQUESTS = int(config_get('common', 'timeout_requests', fallback=TIMEOUT_REQUESTS))
    MERGE_FEE = int(config_get('common', 'merge_fee', fallback=MERGE_FEE))
    MAX_MERGE_ATTEMPTS = int(config_get('common', 'max_merge_attempts', fallback=MAX_MERGE_ATTEMPTS))
    MAX_MERGE_ROUNDS = int(config_get('common', 'max_merge_rounds', fallback=MAX_MERGE_ROUNDS))

    if not data:
        return False
    return True


# Initialize library
read_config()
TBCAPI_VERSION = Path(TBCAPI_INSTALL_DIR, 'config/VERSION').open().read().strip()
