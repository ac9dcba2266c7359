"""
Setup script for the king-of-hearts package.

Installs the ``king_of_hearts`` package from ``src/`` and the
``king-of-hearts`` console script.
"""

from setuptools import setup, find_packages

setup(
    name="king-of-hearts",
    version="1.0.0",
    description="King of Hearts - LLM-generated party trivia with steals and wagers",
    author="King of Hearts maintainers",
    license="Proprietary",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "anthropic>=0.18.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx",
        ],
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    entry_points={
        "console_scripts": [
            "king-of-hearts=king_of_hearts.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
