# -*- coding: utf-8 -*-
from setuptools import setup, find_packages

long_description = "Bar-indexed Series graph and Technical Analysis Indicators for Python 3"

setup(
    name = "pandas_ta_series",
    packages = find_packages(exclude=["tests", "tests.*", "scripts"]),
    version = "0.1.0",
    description=long_description,
    long_description=long_description,
    author = "Kevin Johnson",
    author_email = "appliedmathkj@gmail.com",
    url = "https://github.com/glar1900/pandas-ta-series",
    maintainer="Han Sang Woo",
    maintainer_email="hsangwoo5@naver.com",
    download_url = "https://github.com/glar1900/pandas-ta-series.git",
    keywords = ['technical analysis', 'python3', 'pandas', 'series'],
    license="The MIT License (MIT)",
    classifiers = [
        'Programming Language :: Python :: 3',
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Intended Audience :: Developers',
        'Intended Audience :: Financial and Insurance Industry',
        'Topic :: Office/Business :: Financial :: Investment',
    ],
    python_requires=">=3.9",
    install_requires=['numpy', 'pandas', 'numba'],

    # List additional groups of dependencies here (e.g. development dependencies).
    # You can install these using the following syntax, for example:
    # $ pip install -e .[dev,test]
    extras_require = {
        'dev': ['pytest', 'jupyterlab'],
        'test': ['pytest'],
    },
)
