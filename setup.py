# setup.py
from setuptools import setup, find_packages

setup(
    name="leavecompass",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dateutil",
        "matplotlib",
        "reportlab",
    ],
    extras_require={
        "test": [
            "pytest",
            "pypdf",
        ],
    },
    entry_points={
        "console_scripts": [
            "leavecompass=leavecompass.main:run_wizard",
        ],
    },
)
