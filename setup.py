"""Setup for IntervalWatch.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup, find_packages

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "IntervalWatch",
        "CFBundleDisplayName": "IntervalWatch",
        "CFBundleIdentifier": "com.intervalwatch.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "LSMinimumSystemVersion": "13.0",
    },
}

extra = {}
if "py2app" in sys.argv:
    extra = {
        "app": APP,
        "data_files": DATA_FILES,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="IntervalWatch",
    version="0.1.0",
    packages=find_packages(include=["intervalwatch", "intervalwatch.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6",
        "SQLAlchemy>=2.0",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["intervalwatch=intervalwatch.__main__:main"],
    },
    **extra,
)
