# setup.py
from setuptools import setup, find_packages

setup(
    name="vhisp",
    version="0.5",
    description="A minimal interactive interpreter for an S-expression language",
    packages=find_packages(include=["vhisp", "vhisp.*"]),
    python_requires=">=3.9",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["vhisp=vhisp.repl:main"],
    },
    zip_safe=False,
)
