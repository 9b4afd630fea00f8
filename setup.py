from setuptools import setup, find_packages

setup(
    name="floe-pipeline",
    version="0.1.0",
    description="Run polars pipeline jobs as workflow tasks, with mockable test mode",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="floe Team",
    packages=find_packages(include=["floe", "floe.*"]),
    python_requires=">=3.10",
    install_requires=[
        "polars>=1.0.0",
        "pydantic>=2.0.0",
        "click>=8.0.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "mypy>=1.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "floe=floe.cli.main:cli",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
