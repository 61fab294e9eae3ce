"""
Setup script for the Error Finder package.
"""

from setuptools import setup, find_packages
import os

# Read the README
readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
if os.path.exists(readme_path):
    with open(readme_path, 'r', encoding='utf-8') as f:
        long_description = f.read()
else:
    long_description = "Rule-based error finder and auto-fixer for source code."

setup(
    name="errorfinder",
    version="1.0.0",
    author="Error Finder Team",
    author_email="errorfinder@example.com",
    description="Rule-based static analysis and auto-fix engine for web and scripting languages",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/errorfinder/errorfinder",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    python_requires=">=3.8",
    install_requires=[
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "black>=23.0",
            "mypy>=1.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "errorfinder=errorfinder.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Quality Assurance",
        "Topic :: Software Development :: Testing",
    ],
    keywords="linter, static-analysis, auto-fix, code-quality, javascript, html, css, json",
    project_urls={
        "Bug Reports": "https://github.com/errorfinder/errorfinder/issues",
        "Source": "https://github.com/errorfinder/errorfinder",
    },
)
