# coding: utf-8
# (c) Copyright IBM Corp. 2025

import sys
from os import path

from setuptools import find_packages, setup

# Import README.md into long_description
pwd = path.abspath(path.dirname(__file__))
sys.path.insert(0, path.join(pwd, "src"))

# pylint: disable=wrong-import-position
from appsports.version import VERSION

with open(path.join(pwd, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()


setup(name='apps-ports',
      version=VERSION,
      license='MIT',
      description='Find and stop the applications (and docker containers) listening on TCP ports',
      package_dir={'': 'src'},
      packages=find_packages(where='src'),
      long_description=long_description,
      long_description_content_type='text/markdown',
      zip_safe=False,
      python_requires='>=3.8',
      install_requires=['fysom>=2.1.2',
                        'PyYAML>=5.1',
                        'rich>=10.0.0'],
      extras_require={
          'test': ['pytest>=7.0',
                   'pytest-mock>=3.0'],
      },
      entry_points={
                    'console_scripts': ['apps-ports = appsports.cli:main'],
                    },
      keywords=['ports', 'processes', 'docker', 'ss', 'netstat', 'lsof',
                'sysadmin'],
      classifiers=[
          'Development Status :: 5 - Production/Stable',
          'Environment :: Console',
          'Intended Audience :: Developers',
          'Intended Audience :: System Administrators',
          'License :: OSI Approved :: MIT License',
          'Operating System :: POSIX :: Linux',
          'Programming Language :: Python',
          'Programming Language :: Python :: 3',
          'Topic :: System :: Monitoring',
          'Topic :: System :: Networking :: Monitoring',
          'Topic :: Utilities'])
