# -*- coding: utf-8 -*-
#
#    TbcApi - Turing Explorer REST Client
#    PyPi Setup Tool
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

from setuptools import setup, find_packages
from codecs import open
import os

here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, 'tbcapi', 'config', 'VERSION'), encoding='utf-8') as f:
    version = f.read().strip()

# Get the long description from the relevant file
readmetxt = ''
if os.path.exists(os.path.join(here, 'README.rst')):
    with open(os.path.join(here, 'README.rst'), encoding='utf-8') as f:
        readmetxt = f.read()

kwargs = {}


install_requires = [
      'requests>=2.25.0',
      'bitcoinlib>=0.6.14',
]

kwargs['install_requires'] = install_requires

setup(
      name='tbcapi',
      version=version,
      description='Client for the Turing explorer REST service: UTXOs, tokens and transaction broadcast',
      long_description=readmetxt,
      classifiers=[
            'Development Status :: 4 - Beta',
            'Intended Audience :: Developers',
            'Intended Audience :: Financial and Insurance Industry',
            'License :: OSI Approved :: GNU Affero General Public License v3 or later (AGPLv3+)',
            'Natural Language :: English',
            'Operating System :: OS Independent',
            'Programming Language :: Python :: 3',
            'Topic :: Software Development :: Libraries :: Python Modules',
            'Topic :: Office/Business :: Financial :: Accounting',
      ],
      license='AGPL3',
      packages=find_packages(exclude=['tests', 'tests.*']),
      package_data={'tbcapi': ['config/VERSION']},
      entry_points={
          'console_scripts': ['tbc-explorer=tbcapi.tools.explorer:main']
      },
      python_requires='>=3.8',
      test_suite='tests',
      include_package_data=True,
      keywords='turing tbc blockchain explorer utxo fungible token nft',
      zip_safe=False,
      **kwargs
)
