#!/usr/bin/env python3
"""
Setup script for the Red Tag Log & Analytics Python package.
Makes the system pip-installable.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="redtag-analytics",
    version="1.0.0",
    description="Equipment removal (red tag) logging with top-N analytics, failure trend and CSV export",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="scripts", exclude=["tests"]),
    package_dir={"": "scripts"},
    py_modules=["generate_redtag_report", "log_redtag"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Manufacturing",
        "Topic :: Office/Business",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.8",
    install_requires=[
        "jinja2>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "redtag-report=generate_redtag_report:main",
            "redtag-log=log_redtag:main",
        ],
    },
    include_package_data=True,
    package_data={
        "reporting": [
            "templates/*.jinja2",
        ],
    },
)
