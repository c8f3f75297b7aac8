#!/usr/bin/env python3
"""
rbtrack Setup Script
"""

from setuptools import setup, find_packages

setup(
    name='rbtrack',
    version='1.0.0',
    description='Stochastic process and depth observation models for rigid-body pose tracking',
    author='FurSys AI Team',
    packages=find_packages(include=['rbtrack', 'rbtrack.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.7.0',
        'filterpy>=1.4.5',
        'pyyaml>=5.4.0',
    ],
    extras_require={
        'dev': [
            'pytest>=6.0.0',
            'pytest-cov>=2.0.0',
        ],
    },
)
