# -*- coding: utf-8 -*-
from setuptools import setup

package_dir = \
{'': 'python'}

packages = \
['cluster_dns',
 'cluster_dns.options',
 'cluster_dns.utils',
 'cluster_dns.utils.modeling',
 'cluster_dns.utils.modeling.types']

install_requires = \
['pyyaml']

extras_require = \
{'test': ['pytest']}

entry_points = \
{'console_scripts': ['cluster-dns-config = cluster_dns.main:main']}

setup_kwargs = {
    'name': 'cluster-dns',
    'version': '1.0.0',
    'description': 'Typed command-line configuration of a cluster-local DNS resolver',
    'long_description': "# cluster-dns\n\nCommand-line configuration of a cluster-local DNS resolver: cluster domain, control-plane URL, federations, config sources and sync timing, validated at startup.\n",
    'long_description_content_type': 'text/markdown',
    'package_dir': package_dir,
    'packages': packages,
    'install_requires': install_requires,
    'extras_require': extras_require,
    'entry_points': entry_points,
    'python_requires': '>=3.8,<4.0',
}

setup(**setup_kwargs)
