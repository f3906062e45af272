# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="aiask",
    version="0.1.0",
    description="Aggregate a folder's tree and source files into one ai.md review document",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["aiask*"]),
    python_requires=">=3.9",
    install_requires=[
        "pyuca",  # Unicode collation for tree ordering
        "tiktoken",  # Token estimate of the aggregated document
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'aiask=aiask.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
