#!/usr/bin/python3

from setuptools import setup, find_packages
from version import version


setup(
    name = 'udbf',
    version = version,
    description = 'Reader for UDBF (Universal Data Bin File) data logger files',
    license = 'MIT',
    packages = find_packages(include=['udbf', 'udbf.*']),
    python_requires = '>=3.8',
    install_requires = ['numpy'],
    extras_require = {'test': ['pytest']},
    include_package_data=False,
)
