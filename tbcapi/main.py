# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    MAIN - Load configs and initialize logging
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

# Do not remove any of the imports below, used by other files
import os
import sys
import time
import logging
from logging.handlers import RotatingFileHandler
from tbcapi.config.config import *


# Initialize logging
logger = logging.getLogger('tbcapi')
logger.setLevel(LOGLEVEL)

if ENABLE_TBCAPI_LOGGING:
    TBCAPI_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(str(TBCAPI_LOG_FILE), maxBytes=100 * 1024 * 1024, backupCount=2)
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(funcName)s(%(lineno)d) %(message)s',
                                  datefmt='%Y/%m/%d %H:%M:%S')
    handler.setFormatter(formatter)
    handler.setLevel(LOGLEVEL)
    logger.addHandler(handler)

    logger.info('WELCOME TO TBCAPI - TURING EXPLORER REST CLIENT')
    logger.info('Version: %s' % TBCAPI_VERSION)
    logger.info('Read config from: %s' % TBCAPI_CONFIG_FILE)
    logger.info('Default network: %s' % DEFAULT_NETWORK)
    logger.info('Logging to: %s' % TBCAPI_LOG_FILE)
