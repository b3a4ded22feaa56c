from __future__ import annotations

import os

from setuptools import setup


def read_version() -> str:
    """Read the version, preferring the environment variable."""
    env_version = os.getenv("PKG_VERSION", "").strip()
    if env_version:
        return env_version.lstrip("v")
    return "0.0.1"


setup(
    name="bitset-algebra",
    version=read_version(),
    description="Fixed-capacity bit sets with full set algebra.",
    long_description="Fixed-capacity bit sets of non-negative integers packed into 64-bit words.",
    long_description_content_type="text/plain",
    packages=["bitset_algebra"],
    python_requires=">=3.8",
    install_requires=[],
)
