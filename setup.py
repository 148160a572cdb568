"""Setup configuration for the jigsaw-core package."""

from setuptools import find_packages, setup

setup(
    name="jigsaw-core",
    version="0.1.0",
    packages=find_packages(include=["jigsaw_core", "jigsaw_core.*"]),
    install_requires=[
        "numpy",
        "pydantic",
        "pydantic-settings",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
            "isort",
        ],
    },
)
