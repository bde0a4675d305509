#!/usr/bin/env python3

from setuptools import setup, find_packages
setup(
    name="ringq",
    version="0.1",
    description="Manager for two persisted fixed-capacity ring queues.",
    packages=find_packages(),
    license='MIT',

    # registers the main function as a command line script
    entry_points={
        "console_scripts": ['ringq=ringq.main:main']
    },

    install_requires=[
        'appdirs',
        'toml',
        'numpy',
    ],
    extras_require={
        'test': ['pytest', 'hypothesis'],
    },
)
