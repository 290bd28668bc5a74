"""Setup configuration for the acceptance runner."""

from setuptools import setup, find_packages

setup(
    name="acceptance-runner",
    version="0.1.0",
    description="Runs wiki-hosted acceptance test suites and writes HTML reports",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "pytest": ["pytest>=7.0"],
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "acceptance-runner=acceptance_runner.cli:main",
        ],
    },
)
