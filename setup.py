#!/usr/bin/env python3

"""dn42roa converts the route objects of a DN42 style registry into a ROA
table, as consumed by RPKI-to-Router relays and BIRD."""

import setuptools

setuptools.setup(
    name="dn42roa",
    version="1.0",
    packages=setuptools.find_packages(
        exclude=["*.tests", "*.tests.*", "tests.*", "tests"]),
    license="http://opensource.org/licenses/MIT",
    description="Generates ROA tables from registry route objects",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: System :: Networking",
        "Topic :: System :: Systems Administration"
    ],
    long_description=__doc__,
    python_requires=">=3.7",
    install_requires=[
        "netaddr",
        "python-dateutil"
    ],
    extras_require={
        "test": [
            "pytest"
        ]
    },
    entry_points={
        "console_scripts": [
            "dn42roa = dn42roa.tools.roagen:main"
        ]
    },
)
