#!/usr/bin/env python3
"""mint-admin CLI - Setup"""

from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = f.read().splitlines()

setup(
    name="mint-admin",
    version="1.0.0",
    description="Deploy and reconcile the mint admin CloudFormation stack",
    author="Mint Team",
    packages=find_packages(include=["mintadmin", "mintadmin.*"]),
    package_data={"mintadmin.templates": ["*.yaml"]},
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "mint-admin=mintadmin.main:main",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
