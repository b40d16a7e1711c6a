"""Setup script for the project."""

from setuptools import setup, find_packages


def read_requirements(path="requirements.txt"):
    with open(path) as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


setup(
    name="fitness-coach-api",
    version="1.0.0",
    description="Trainer and client coaching API: plans, activity logs and progress",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=read_requirements(),
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "httpx>=0.25",
        ],
    },
    python_requires=">=3.10",
)
