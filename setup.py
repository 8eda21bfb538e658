"""Flux Calc - Keypad calculator engine."""
from setuptools import setup, find_packages

setup(
    name="flux-calc",
    version="1.0.0",
    description="Keypad calculator with live preview, safe evaluation and history",
    author="Morten Elmstroem Hansen",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.1.0",
        "rich>=13.0.0",
        "questionary>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "flux-calc=flux_calc.cli:main",
            "fc=flux_calc.cli:main",  # Short alias
        ],
    },
    python_requires=">=3.10",
)
