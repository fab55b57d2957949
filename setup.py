#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""The setup script."""

from setuptools import setup, find_packages

with open('README.rst') as readme_file:
    readme = readme_file.read()

with open('HISTORY.rst') as history_file:
    history = history_file.read()

setup(
    name='eclipsesim',
    version='0.1.0',
    description="Solar and lunar eclipse geometry and light-curve model",
    long_description=readme + '\n\n' + history,
    long_description_content_type='text/x-rst',
    packages=find_packages(include=['eclipsesim', 'eclipsesim.*']),
    entry_points={
        'console_scripts': [
            'eclipsesim=eclipsesim.cli:main'
        ]
    },
    package_dir={'eclipsesim':
                 'eclipsesim'},
    package_data={'eclipsesim': ['examples/*.yaml']},
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'Click>=7.0',
        'numpy',
        'matplotlib',
        'astropy',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },
    license="MIT license",
    zip_safe=False,
    keywords='eclipsesim',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Education',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
    ],
)
