# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="protocrate",
    version="0.1.0",
    description="Generate a Rust crate with a nested module tree from protobuf definitions",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["protocrate", "protocrate.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'protocrate=protocrate.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
