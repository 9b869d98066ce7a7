#!/usr/bin/env python3

from pathlib import Path

from setuptools import find_packages, setup

packages = find_packages(exclude=("tests*",))
package_data = {pkg: ["py.typed"] for pkg in packages}


setup(
    name="runestring",
    version="0.1.0",
    python_requires=">=3.8.0",
    install_requires=Path("requirements.txt").read_text().splitlines(),
    extras_require={"test": ["pytest"]},
    description="Codepoint and grapheme cluster strings",
    long_description=Path("README.md").read_text(),
    long_description_content_type="text/markdown",
    packages=packages,
    package_data=package_data,
)
